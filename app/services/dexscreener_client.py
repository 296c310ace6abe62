import logging
import math
from typing import Any, Dict, List, Optional

import httpx

from app.config import DEXSCREENER_BASE_URL, DEXSCREENER_TIMEOUT_SECONDS
from app.exceptions import UpstreamFailure
from app.models.candle import TradingPair

logger = logging.getLogger(__name__)

# DexScreener window keys -> chart interval labels
PRICE_CHANGE_KEYS = {
    "m5": "5m",
    "h1": "1h",
    "h6": "6h",
    "h24": "24h",
}


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    # NaN and inf would poison the walk and slip past positivity checks
    return number if math.isfinite(number) else None


def _price_change(raw: Optional[Dict[str, Any]]) -> Dict[str, float]:
    changes = {}
    for key, value in (raw or {}).items():
        number = _to_float(value)
        if number is None:
            continue
        changes[PRICE_CHANGE_KEYS.get(key, key)] = number
    return changes


def parse_pair(raw: Dict[str, Any]) -> TradingPair:
    return TradingPair(
        dex_id=raw.get("dexId") or "",
        pair_address=raw.get("pairAddress") or "",
        quote_symbol=raw["quoteToken"]["symbol"],
        price_change=_price_change(raw.get("priceChange")),
        price_usd=_to_float(raw.get("priceUsd")),
        price_native=_to_float(raw.get("priceNative")),
    )


class DexScreenerClient:

    def __init__(
        self,
        base_url: str = DEXSCREENER_BASE_URL,
        timeout: float = DEXSCREENER_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def get_token_pairs(self, token_mint: str) -> List[TradingPair]:
        """
        Fetch every Solana pair DexScreener lists for a token.
        One attempt, no retries.
        """
        url = f"{self.base_url}/token-pairs/v1/solana/{token_mint}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(url, headers={"accept": "application/json"})
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"DexScreener error {e.response.status_code} for {token_mint}")
            raise UpstreamFailure(f"DexScreener returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Error fetching pairs for {token_mint}: {e}")
            raise UpstreamFailure(str(e)) from e
        except ValueError as e:
            logger.error(f"Invalid JSON from DexScreener for {token_mint}: {e}")
            raise UpstreamFailure("Invalid JSON from DexScreener") from e

        # The endpoint answers with a bare array; older versions wrapped it in {"pairs": [...]}
        raw_pairs = data.get("pairs") if isinstance(data, dict) else data
        if not raw_pairs:
            return []

        pairs = []
        for raw in raw_pairs:
            try:
                pairs.append(parse_pair(raw))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed pair for {token_mint}: {e}")
        return pairs
