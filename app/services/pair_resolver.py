import logging
from typing import Iterable, Optional

from app.exceptions import PairNotFound
from app.models.candle import TradingPair

logger = logging.getLogger(__name__)

PUMP_FUN_AMM_PROGRAM_ID = "pAMMBay6oceH9fJKBRHGP5D4bD4sWpmSwMn52FMfXEA"

TRUSTED_DEX_IDS = frozenset({"raydium"})
TRUSTED_PAIR_ADDRESSES = frozenset({PUMP_FUN_AMM_PROGRAM_ID})
SOL_QUOTE_SYMBOLS = frozenset({"SOL", "WSOL"})


def is_trusted_venue(pair: TradingPair) -> bool:
    return pair.dex_id in TRUSTED_DEX_IDS or pair.pair_address in TRUSTED_PAIR_ADDRESSES


def is_sol_quoted(pair: TradingPair) -> bool:
    return pair.quote_symbol in SOL_QUOTE_SYMBOLS


def resolve_pair(token_mint: str, pairs: Optional[Iterable[TradingPair]]) -> TradingPair:
    """
    Pick the first SOL-quoted pair on a trusted venue, in the order given.
    Raises PairNotFound if none qualifies.
    """
    for pair in pairs or ():
        if is_trusted_venue(pair) and is_sol_quoted(pair):
            logger.info(f"Using {pair.dex_id} pair {pair.pair_address} for token {token_mint}")
            return pair

    logger.warning(f"No SOL pair found for {token_mint} on compatible DEXes")
    raise PairNotFound(f"No qualifying pair for {token_mint}")
