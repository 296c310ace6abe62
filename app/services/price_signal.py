"""
Price signals feed the candle generator its anchor price and how to walk
toward it.

AggregatorSignal anchors to live market data (DexScreener pair + price
oracle). SyntheticSeedSignal needs no upstream and invents a seed price.
Both produce a SignalSnapshot so the generator is shared.
"""
import logging
import random
from dataclasses import dataclass
from typing import Optional

from app.config import SYNTHETIC_SEED_MAX, SYNTHETIC_SEED_MIN
from app.services.dexscreener_client import DexScreenerClient
from app.services.pair_resolver import resolve_pair
from app.services.price_oracle import PriceOracle
from app.utils.time import normalize_interval

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignalSnapshot:
    price: float
    percent_change: Optional[float] = None
    # max fractional distance of the first open from `price`
    start_spread: float = 0.0
    # fraction of the series after which bars pull toward `price`
    blend_from: float = 0.5


class PriceSignal:

    async def snapshot(self, token_mint: str, interval: str) -> SignalSnapshot:
        raise NotImplementedError


class AggregatorSignal(PriceSignal):

    def __init__(self, client: DexScreenerClient, oracle: PriceOracle):
        self.client = client
        self.oracle = oracle

    async def snapshot(self, token_mint: str, interval: str) -> SignalSnapshot:
        pairs = await self.client.get_token_pairs(token_mint)
        pair = resolve_pair(token_mint, pairs)
        price = await self.oracle.current_price(token_mint)

        return SignalSnapshot(
            price=price,
            percent_change=pair.price_change.get(normalize_interval(interval)),
            start_spread=0.0,
            blend_from=0.5,
        )


class SyntheticSeedSignal(PriceSignal):

    def __init__(
        self,
        rng: random.Random,
        seed_min: float = SYNTHETIC_SEED_MIN,
        seed_max: float = SYNTHETIC_SEED_MAX,
    ):
        if not 0 < seed_min <= seed_max:
            raise ValueError(f"Invalid synthetic seed range: [{seed_min}, {seed_max})")
        self.rng = rng
        self.seed_min = seed_min
        self.seed_max = seed_max

    async def snapshot(self, token_mint: str, interval: str) -> SignalSnapshot:
        price = self.seed_min + self.rng.random() * (self.seed_max - self.seed_min)
        logger.debug(f"Synthetic seed price {price:.8f} for {token_mint}")
        return SignalSnapshot(
            price=price,
            percent_change=None,
            start_spread=0.2,
            blend_from=0.0,
        )

