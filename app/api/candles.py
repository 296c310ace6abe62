import logging
import random
from datetime import datetime
from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, Query

from app.config import CANDLE_RANDOM_SEED, CANDLE_SIGNAL_SOURCE
from app.exceptions import CandleServiceError, MissingParameter
from app.models.candle import Candle
from app.services.candle_generator import CandleSynthesizer
from app.services.dexscreener_client import DexScreenerClient
from app.services.price_oracle import create_price_oracle
from app.services.price_signal import AggregatorSignal, PriceSignal, SyntheticSeedSignal
from app.utils.time import DEFAULT_INTERVAL, utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["Candles"])

dexscreener = DexScreenerClient()
oracle = create_price_oracle()


def get_rng() -> random.Random:
    return random.Random(CANDLE_RANDOM_SEED)


def get_clock() -> Callable[[], datetime]:
    return utc_now


def get_price_signal(rng: random.Random = Depends(get_rng)) -> PriceSignal:
    if CANDLE_SIGNAL_SOURCE == "synthetic":
        return SyntheticSeedSignal(rng)
    return AggregatorSignal(dexscreener, oracle)


def get_synthesizer(
    signal: PriceSignal = Depends(get_price_signal),
    rng: random.Random = Depends(get_rng),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> CandleSynthesizer:
    return CandleSynthesizer(signal, rng, clock)


@router.get("/candles", response_model=List[Candle])
async def get_candles(
    token_mint: Optional[str] = Query(None, alias="tokenMint", examples=["So11111111111111111111111111111111111111112"]),
    interval: str = Query(DEFAULT_INTERVAL, examples=["5m"]),
    synthesizer: CandleSynthesizer = Depends(get_synthesizer),
):
    """
    Synthetic OHLC candles for a token, oldest first.
    The newest candle always equals the live price.
    Unknown intervals fall back to 5m.
    """
    if not token_mint:
        raise MissingParameter()

    try:
        return await synthesizer.build(token_mint, interval)
    except CandleServiceError as e:
        logger.warning(f"Candle request for {token_mint} failed: {e.message}")
        raise
    except Exception as e:
        logger.error(f"Error generating candle data for {token_mint}: {e}")
        raise CandleServiceError(str(e)) from e
