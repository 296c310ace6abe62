"""
Spot price sources for the chart anchor.

The bot tracks token prices in its own subsystem; these adapters expose that
price as `current_price(token_mint)`. Every implementation returns a positive
float or raises PriceUnavailable.
"""
import json
import logging
import math
from typing import Dict, Optional

import redis.asyncio as redis

from app.config import (
    PRICE_KEY_PREFIX,
    PRICE_ORACLE,
    REDIS_DB,
    REDIS_HOST,
    REDIS_PASSWORD,
    REDIS_PORT,
)
from app.exceptions import PriceUnavailable
from app.services.dexscreener_client import DexScreenerClient
from app.services.pair_resolver import TRUSTED_DEX_IDS

logger = logging.getLogger(__name__)


class PriceOracle:

    async def current_price(self, token_mint: str) -> float:
        raise NotImplementedError


def _positive(token_mint: str, price: Optional[float]) -> float:
    if price is None or not math.isfinite(price) or not price > 0:
        logger.warning(f"No usable price for {token_mint}: {price!r}")
        raise PriceUnavailable(f"No price for {token_mint}")
    return float(price)


class DexScreenerPriceOracle(PriceOracle):
    """SOL-denominated price of the token's first Raydium pair, as the paper trader sees it"""

    def __init__(self, client: Optional[DexScreenerClient] = None):
        self.client = client or DexScreenerClient()

    async def current_price(self, token_mint: str) -> float:
        pairs = await self.client.get_token_pairs(token_mint)
        pair = next((p for p in pairs if p.dex_id in TRUSTED_DEX_IDS), None)
        if pair is None:
            logger.warning(f"No Raydium pair found for {token_mint} ({len(pairs)} other pairs available)")
            raise PriceUnavailable(f"No priced pair for {token_mint}")
        return _positive(token_mint, pair.price_native)


class RedisPriceOracle(PriceOracle):
    """Last price published by the bot's price tracker under `<prefix>:<mint>`"""

    def __init__(self, client=None, key_prefix: str = PRICE_KEY_PREFIX):
        self.redis = client or redis.Redis(
            host=REDIS_HOST,
            port=REDIS_PORT,
            db=REDIS_DB,
            password=REDIS_PASSWORD,
            decode_responses=True
        )
        self.key_prefix = key_prefix

    def _key(self, token_mint: str) -> str:
        return f"{self.key_prefix}:{token_mint}"

    async def current_price(self, token_mint: str) -> float:
        data = await self.redis.get(self._key(token_mint))
        if not data:
            logger.warning(f"Price tracker has no entry for {token_mint}")
            raise PriceUnavailable(f"No tracked price for {token_mint}")

        # Either {"price": 0.0012, ...} or a bare number
        try:
            value = json.loads(data)
            if isinstance(value, dict):
                value = value.get("price")
            price = float(value) if value is not None else None
        except (TypeError, ValueError) as e:
            logger.warning(f"Could not parse tracked price for {token_mint}: {e}")
            raise PriceUnavailable(f"Unparseable price for {token_mint}") from e

        return _positive(token_mint, price)


class StaticPriceOracle(PriceOracle):
    """Fixed prices per mint"""

    def __init__(self, prices: Dict[str, float]):
        self.prices = dict(prices)

    async def current_price(self, token_mint: str) -> float:
        return _positive(token_mint, self.prices.get(token_mint))


def create_price_oracle(backend: str = PRICE_ORACLE) -> PriceOracle:
    if backend == "redis":
        return RedisPriceOracle()
    if backend == "dexscreener":
        return DexScreenerPriceOracle()
    raise ValueError(f"Unknown price oracle backend: {backend}")
