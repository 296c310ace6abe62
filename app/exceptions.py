"""
Errors raised while building a candle series.

Each class carries the HTTP status and the fixed public message the API
answers with. The constructor message is internal detail and only logged.
"""
from typing import Optional


class CandleServiceError(Exception):
    """Base error for the candle endpoint"""

    status_code = 500
    public_message = "Failed to generate candle data"

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message
        if status_code is not None:
            self.status_code = status_code


class MissingParameter(CandleServiceError):
    status_code = 400
    public_message = "Token mint is required"


class PairNotFound(CandleServiceError):
    status_code = 404
    public_message = "No SOL pair found for token on compatible DEXes"


class PriceUnavailable(CandleServiceError):
    status_code = 404
    public_message = "Could not get token price data"


class InvalidInput(CandleServiceError):
    """Generator called with arguments no well-formed request produces"""


class UpstreamFailure(CandleServiceError):
    """Aggregator or price service could not be reached or answered badly"""
