from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

DEFAULT_INTERVAL = "5m"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# label -> (candle count, bucket duration in ms)
INTERVAL_POLICY = {
    "1s": (60, 1_000),
    "1m": (60, 60_000),
    "5m": (30, 300_000),
    "15m": (20, 900_000),
    "1h": (24, 3_600_000),
}


def is_supported_interval(interval: Optional[str]) -> bool:
    """
    Check whether the chart has a bucketing rule for this interval
    """
    return interval in INTERVAL_POLICY


def normalize_interval(interval: Optional[str]) -> str:
    """
    Unknown or missing labels fall back to 5m
    """
    return interval if is_supported_interval(interval) else DEFAULT_INTERVAL


def resolve_interval(interval: Optional[str]) -> Tuple[int, int]:
    """
    Map an interval label to (count, duration_ms)

    Example:
    interval = 1h
    -> (24, 3600000), one day of hourly candles
    """
    return INTERVAL_POLICY[normalize_interval(interval)]


def ms_to_datetime(ms: int) -> datetime:
    """
    Convert timestamp milliseconds -> UTC datetime
    """
    return EPOCH + timedelta(milliseconds=ms)


def datetime_to_ms(dt: datetime) -> int:
    """
    Convert datetime -> milliseconds
    """
    return (dt - EPOCH) // timedelta(milliseconds=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
    """
    Format as 2024-05-01T12:00:00.000Z, millisecond precision in UTC
    """
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"
