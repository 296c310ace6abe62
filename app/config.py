import os

# Redis - Parse from REDIS_URL
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379")
if REDIS_URL.startswith("redis://"):
    redis_host_port = REDIS_URL.replace("redis://", "").split("/")[0]
    if ":" in redis_host_port:
        REDIS_HOST, port_str = redis_host_port.split(":")
        REDIS_PORT = int(port_str)
    else:
        REDIS_HOST = redis_host_port
        REDIS_PORT = 6379
else:
    REDIS_HOST = "localhost"
    REDIS_PORT = 6379

REDIS_DB = int(os.getenv("REDIS_DB", "0"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD")

# Key the bot's price tracker publishes last prices under: "<prefix>:<mint>"
PRICE_KEY_PREFIX = os.getenv("PRICE_KEY_PREFIX", "price")

# DexScreener API
DEXSCREENER_BASE_URL = os.getenv("DEXSCREENER_BASE_URL", "https://api.dexscreener.com")
DEXSCREENER_TIMEOUT_SECONDS = float(os.getenv("DEXSCREENER_TIMEOUT_SECONDS", "10"))

# "dexscreener" or "redis"
PRICE_ORACLE = os.getenv("PRICE_ORACLE", "dexscreener").lower()

# "aggregator" anchors to live market data, "synthetic" needs no upstream at all
CANDLE_SIGNAL_SOURCE = os.getenv("CANDLE_SIGNAL_SOURCE", "aggregator").lower()

_seed = os.getenv("CANDLE_RANDOM_SEED")
CANDLE_RANDOM_SEED = int(_seed) if _seed else None

SYNTHETIC_SEED_MIN = float(os.getenv("SYNTHETIC_SEED_MIN", "0.00001"))
SYNTHETIC_SEED_MAX = float(os.getenv("SYNTHETIC_SEED_MAX", "0.001"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "3002"))
