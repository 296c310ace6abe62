"""
Synthetic OHLC series for the token price chart.

There is no price history for most tokens the bot trades, so the chart is
drawn from a random walk that ends exactly on the live price.
"""
import logging
import math
import random
from datetime import datetime
from typing import Callable, List, Optional

from app.exceptions import InvalidInput
from app.models.candle import Candle
from app.services.price_signal import PriceSignal, SignalSnapshot
from app.utils.time import datetime_to_ms, ms_to_datetime, resolve_interval, utc_now

logger = logging.getLogger(__name__)

DEFAULT_VOLATILITY = 0.02
SIGNAL_SCALE = 0.1
# Keeps (rng - 0.5) * volatility above -1 so every close stays positive
MAX_VOLATILITY = 1.0
BLEND_FACTOR = 0.1
WICK_JITTER = 0.01


def step_volatility(percent_change: Optional[float]) -> float:
    """
    Per-step move bound: a tenth of the percent change, or the default when
    no signal exists. A reported change of 0 is a signal and gives a flat walk.
    """
    if percent_change is None or not math.isfinite(percent_change):
        return DEFAULT_VOLATILITY
    return min(abs(percent_change) * SIGNAL_SCALE, MAX_VOLATILITY)


def generate_series(
    current_price: float,
    count: int,
    duration_ms: int,
    *,
    rng: random.Random,
    now_ms: int,
    percent_change: Optional[float] = None,
    start_price: Optional[float] = None,
    blend_start: Optional[int] = None,
) -> List[Candle]:
    """
    Walk `count` candles forward in time, oldest first, ending at `now_ms`.

    From index `blend_start` on (default: second half) each close is pulled
    10% toward `current_price` before the random move is applied.
    """
    if not current_price > 0:
        raise InvalidInput(f"current_price must be positive, got {current_price!r}")
    if count < 1:
        raise InvalidInput(f"count must be at least 1, got {count!r}")
    if duration_ms < 1:
        raise InvalidInput(f"duration_ms must be positive, got {duration_ms!r}")
    if start_price is None:
        start_price = current_price
    if not start_price > 0:
        raise InvalidInput(f"start_price must be positive, got {start_price!r}")
    if blend_start is None:
        blend_start = count // 2

    volatility = step_volatility(percent_change)
    last_price = start_price
    candles = []

    for i in range(count):
        time_ms = now_ms - (count - 1 - i) * duration_ms
        open_ = last_price

        base = open_
        if i >= blend_start:
            base = open_ + (current_price - open_) * BLEND_FACTOR

        close = base * (1 + (rng.random() - 0.5) * volatility)
        high = max(open_, close) * (1 + rng.random() * WICK_JITTER)
        low = min(open_, close) * (1 - rng.random() * WICK_JITTER)

        candles.append(Candle(
            time=ms_to_datetime(time_ms),
            open=open_,
            high=high,
            low=low,
            close=close
        ))
        last_price = close

    return candles


def enforce_anchor(
    candles: List[Candle],
    current_price: float,
    at: Optional[datetime] = None
) -> List[Candle]:
    """
    Replace the newest candle with a flat one at `current_price`, so the chart
    ends on the same price the rest of the dashboard shows.
    """
    if not candles:
        raise InvalidInput("cannot anchor an empty series")
    if not current_price > 0:
        raise InvalidInput(f"current_price must be positive, got {current_price!r}")

    anchor = Candle(
        time=at or utc_now(),
        open=current_price,
        high=current_price,
        low=current_price,
        close=current_price
    )
    return candles[:-1] + [anchor]


class CandleSynthesizer:
    """Builds the candle series for one chart request"""

    def __init__(
        self,
        signal: PriceSignal,
        rng: random.Random,
        clock: Callable[[], datetime] = utc_now
    ):
        self.signal = signal
        self.rng = rng
        self.clock = clock

    def _start_price(self, snapshot: SignalSnapshot) -> float:
        if not snapshot.start_spread:
            return snapshot.price
        offset = (self.rng.random() * 2 - 1) * snapshot.start_spread
        return snapshot.price * (1 + offset)

    async def build(self, token_mint: str, interval: str) -> List[Candle]:
        count, duration_ms = resolve_interval(interval)
        snapshot = await self.signal.snapshot(token_mint, interval)

        candles = generate_series(
            snapshot.price,
            count,
            duration_ms,
            rng=self.rng,
            now_ms=datetime_to_ms(self.clock()),
            percent_change=snapshot.percent_change,
            start_price=self._start_price(snapshot),
            blend_start=int(count * snapshot.blend_from),
        )
        logger.debug(f"Generated {count} candles for {token_mint} ({interval})")

        return enforce_anchor(candles, snapshot.price, at=self.clock())
