import random
from datetime import datetime, timezone

import httpx

from app.models.candle import TradingPair
from app.services.dexscreener_client import DexScreenerClient

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
TOKEN_MINT = "7GCihgDB8fe6KNjn2MYtkzZcRjQy3t9GHdC8uHYmW2hr"


class ConstantRandom(random.Random):
    """Always returns the same draw; 0.5 means no move and tiny wicks"""

    def __init__(self, value: float = 0.5):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


class FakeRedis:

    def __init__(self, data=None):
        self.data = dict(data or {})

    async def get(self, key):
        return self.data.get(key)


def make_pair(
    dex_id="raydium",
    pair_address="PairAddr111",
    quote_symbol="SOL",
    price_change=None,
    price_usd=0.0042,
) -> TradingPair:
    return TradingPair(
        dex_id=dex_id,
        pair_address=pair_address,
        quote_symbol=quote_symbol,
        price_change=price_change or {},
        price_usd=price_usd,
    )


def raw_pair(
    dex_id="raydium",
    pair_address="PairAddr111",
    quote_symbol="SOL",
    price_usd="0.0042",
    price_change=None,
    price_native="0.00003",
) -> dict:
    """A pair shaped the way DexScreener returns it"""
    return {
        "chainId": "solana",
        "dexId": dex_id,
        "pairAddress": pair_address,
        "baseToken": {"address": TOKEN_MINT, "symbol": "TEST"},
        "quoteToken": {"address": "So11111111111111111111111111111111111111112", "symbol": quote_symbol},
        "priceNative": price_native,
        "priceUsd": price_usd,
        "priceChange": price_change if price_change is not None else {"m5": 2.5, "h1": -4.0, "h6": 10.0, "h24": 30.0},
    }


def mock_client(handler) -> DexScreenerClient:
    return DexScreenerClient(transport=httpx.MockTransport(handler))


def json_client(payload, status_code: int = 200) -> DexScreenerClient:
    return mock_client(lambda request: httpx.Response(status_code, json=payload))

