from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_serializer, model_validator

from app.utils.time import to_iso


class Candle(BaseModel):
    time: datetime
    open: float = Field(gt=0)
    high: float = Field(gt=0)
    low: float = Field(gt=0)
    close: float = Field(gt=0)

    @model_validator(mode="after")
    def check_range(self):
        if self.high < max(self.open, self.close):
            raise ValueError("high must be >= max(open, close)")
        if self.low > min(self.open, self.close):
            raise ValueError("low must be <= min(open, close)")
        return self

    @field_serializer("time")
    def serialize_time(self, value: datetime) -> str:
        return to_iso(value)


class TradingPair(BaseModel):
    """One candidate venue for a token as reported by DexScreener"""

    dex_id: str
    pair_address: str
    quote_symbol: str
    # interval label -> percent change, e.g. {"5m": 1.25, "1h": -3.4}
    price_change: Dict[str, float] = Field(default_factory=dict)
    price_usd: Optional[float] = None
    price_native: Optional[float] = None
