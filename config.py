"""
Configuration for the maxhash mining pool dashboard.
Difficulty display units, ckpool paths, API/cache settings, and logging defaults.
"""

import logging
import os

# ──────────────────────────────────────────────
# Difficulty Display Units
# (magnitude, symbol), strictly descending by magnitude.
# The first entry with magnitude <= value wins.
# ──────────────────────────────────────────────
DIFFICULTY_UNITS = (
    (10**15, "P"),
    (10**12, "T"),
    (10**9,  "G"),
    (10**6,  "M"),
    (10**3,  "K"),
)

INVALID_DIFFICULTY = "Invalid"   # returned for non-numeric or NaN input
DIFFICULTY_DECIMALS = 2

# ──────────────────────────────────────────────
# ckpool Log Directory
# pool/pool.status  → three JSON lines of pool stats
# users/<address>   → one JSON document per user
# ──────────────────────────────────────────────
CKPOOL_LOG_DIR = os.environ.get("MAXHASH_CKPOOL_LOG_DIR", "/var/log/ckpool")
POOL_STATUS_FILE = os.path.join("pool", "pool.status")
USERS_DIR = "users"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ──────────────────────────────────────────────
# HTTP API
# ──────────────────────────────────────────────
API_HOST = os.environ.get("MAXHASH_API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("MAXHASH_API_PORT", "8080"))

STATS_CACHE_ENABLED = _env_bool("MAXHASH_CACHE_ENABLED", True)
STATS_CACHE_TTL     = float(os.environ.get("MAXHASH_CACHE_TTL", "60"))   # seconds

# ──────────────────────────────────────────────
# Observability
# ──────────────────────────────────────────────
LOG_LEVEL    = os.environ.get("MAXHASH_LOG_LEVEL", "INFO")
LOG_FORMAT   = os.environ.get("MAXHASH_LOG_FORMAT", "text")   # text | json
METRICS_PORT = int(os.environ.get("MAXHASH_METRICS_PORT", "9100"))

_LOG_LEVELS = {
    "debug":   logging.DEBUG,
    "info":    logging.INFO,
    "warning": logging.WARNING,
    "error":   logging.ERROR,
}


def load_log_level(name: str = None) -> int:
    """Map a level name (case-insensitive) to a logging level. Unknown names → INFO."""
    if name is None:
        name = LOG_LEVEL
    return _LOG_LEVELS.get(str(name).strip().lower(), logging.INFO)


def validate_settings(log_dir: str = None,
                      cache_enabled: bool = None,
                      cache_ttl: float = None) -> None:
    """Raise ValueError for settings the service cannot start with."""
    log_dir = CKPOOL_LOG_DIR if log_dir is None else log_dir
    cache_enabled = STATS_CACHE_ENABLED if cache_enabled is None else cache_enabled
    cache_ttl = STATS_CACHE_TTL if cache_ttl is None else cache_ttl

    if not log_dir:
        raise ValueError("ckpool log directory is not set")
    if cache_enabled and cache_ttl <= 0:
        raise ValueError("cache TTL must be greater than 0 when caching is enabled")


# ──────────────────────────────────────────────
# Display
# ──────────────────────────────────────────────
HASHRATE_WINDOWS = ["1m", "5m", "15m", "1hr", "6hr", "1d", "7d"]
