"""
Stats Engine — ckpool log directory reader.

Parses the pool status file and per-user stats documents that ckpool writes
under its log directory, and renders their difficulty fields for display.
"""

import os
import logging
from typing import Dict, List, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from config import CKPOOL_LOG_DIR, POOL_STATUS_FILE, USERS_DIR, INVALID_DIFFICULTY
from src.formatting import format_difficulty
from src.observability import STATS_READ_DURATION, STATS_READ_ERRORS, INVALID_DIFFICULTY_TOTAL
from src.utils import is_valid_bitcoin_address

logger = logging.getLogger(__name__)

# ckpool writes share counts and best shares as ints or floats depending on version
Number = Union[int, float]


class StatsReadError(RuntimeError):
    """Raised when a ckpool stats file cannot be read or parsed."""


class StatsNotFoundError(StatsReadError):
    """Raised when the requested stats file does not exist."""


# ─── Models ──────────────────────────────────────────────────────

class _CkpoolModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PoolStatusLine1(_CkpoolModel):
    runtime: int = 0
    lastupdate: int = 0
    users: int = Field(0, alias="Users")
    workers: int = Field(0, alias="Workers")
    idle: int = Field(0, alias="Idle")
    disconnected: int = Field(0, alias="Disconnected")


class PoolStatusLine2(_CkpoolModel):
    hashrate1m: str = "0"
    hashrate5m: str = "0"
    hashrate15m: str = "0"
    hashrate1hr: str = "0"
    hashrate6hr: str = "0"
    hashrate1d: str = "0"
    hashrate7d: str = "0"


class PoolStatusLine3(_CkpoolModel):
    diff: Number = 0
    accepted: Number = 0
    rejected: Number = 0
    bestshare: Number = 0
    sps1m: float = Field(0.0, alias="SPS1m")
    sps5m: float = Field(0.0, alias="SPS5m")
    sps15m: float = Field(0.0, alias="SPS15m")
    sps1h: float = Field(0.0, alias="SPS1h")


class PoolStats(PoolStatusLine1, PoolStatusLine2, PoolStatusLine3):
    """Merged view of the three pool.status lines."""


class WorkerStats(_CkpoolModel):
    workername: str = ""
    hashrate1m: str = "0"
    hashrate5m: str = "0"
    hashrate1hr: str = "0"
    hashrate1d: str = "0"
    hashrate7d: str = "0"
    lastshare: int = 0
    shares: Number = 0
    bestshare: Number = 0
    bestever: Number = 0


class UserStats(_CkpoolModel):
    hashrate1m: str = "0"
    hashrate5m: str = "0"
    hashrate1hr: str = "0"
    hashrate1d: str = "0"
    hashrate7d: str = "0"
    lastshare: int = 0
    workers: int = 0
    shares: Number = 0
    bestshare: Number = 0
    bestever: Number = 0
    authorised: int = 0
    worker: List[WorkerStats] = Field(default_factory=list)


# ─── Service ─────────────────────────────────────────────────────

class StatsService:
    """Reads pool and user statistics from a ckpool log directory."""

    def __init__(self, log_dir: str):
        self.log_dir = log_dir

    @classmethod
    def from_config(cls) -> "StatsService":
        if not CKPOOL_LOG_DIR:
            raise ValueError("ckpool log directory is not set")
        return cls(CKPOOL_LOG_DIR)

    def pool_stats(self) -> PoolStats:
        """
        Read <log_dir>/pool/pool.status.

        The file holds (at least) three JSON lines: counters, hashrates, and
        share/difficulty stats. They are merged into a single PoolStats.
        """
        path = os.path.join(self.log_dir, POOL_STATUS_FILE)
        with STATS_READ_DURATION.labels(source="pool").time():
            lines = self._read(path, "pool").splitlines()
            if len(lines) < 3:
                raise self._error("pool", f"invalid pool.status file format: {path}")

            try:
                l1 = PoolStatusLine1.model_validate_json(lines[0])
                l2 = PoolStatusLine2.model_validate_json(lines[1])
                l3 = PoolStatusLine3.model_validate_json(lines[2])
            except ValidationError as e:
                raise self._error("pool", f"failed to parse pool.status: {e}") from e

        return PoolStats(**l1.model_dump(), **l2.model_dump(), **l3.model_dump())

    def user_stats(self, address: str) -> UserStats:
        """Read <log_dir>/users/<address> as a single JSON document."""
        if not is_valid_bitcoin_address(address):
            raise ValueError(f"invalid Bitcoin address: {address!r}")

        path = os.path.join(self.log_dir, USERS_DIR, address)
        with STATS_READ_DURATION.labels(source="user").time():
            raw = self._read(path, "user")
            try:
                return UserStats.model_validate_json(raw)
            except ValidationError as e:
                raise self._error("user", f"failed to parse user stats file: {e}") from e

    def _read(self, path: str, source: str) -> str:
        try:
            with open(path, "r", encoding="utf-8") as fh:
                return fh.read()
        except FileNotFoundError as e:
            STATS_READ_ERRORS.labels(source=source).inc()
            logger.warning("Stats file not found: %s", path)
            raise StatsNotFoundError(f"stats file not found: {path}") from e
        except OSError as e:
            raise self._error(source, f"read {path}: {e}") from e

    @staticmethod
    def _error(source: str, message: str) -> StatsReadError:
        STATS_READ_ERRORS.labels(source=source).inc()
        logger.error("Error reading %s stats: %s", source, message)
        return StatsReadError(message)


# ─── Display ─────────────────────────────────────────────────────

def _display(fields: Dict[str, object]) -> Dict[str, str]:
    rendered = {}
    for name, value in fields.items():
        text = format_difficulty(value)
        if text == INVALID_DIFFICULTY:
            INVALID_DIFFICULTY_TOTAL.labels(field=name).inc()
            logger.warning("Difficulty field %s rendered as invalid: %r", name, value)
        rendered[name] = text
    return rendered


def pool_display(stats: PoolStats) -> Dict[str, str]:
    """Formatted network difficulty and best share for a PoolStats."""
    return _display({"diff": stats.diff, "bestshare": stats.bestshare})


def user_display(stats: UserStats) -> Dict[str, str]:
    """Formatted best share and best-ever share for a UserStats."""
    return _display({"bestshare": stats.bestshare, "bestever": stats.bestever})


_WORKER_COLUMNS = {
    'workername':  'Worker',
    'hashrate1m':  'Hashrate 1m',
    'hashrate5m':  'Hashrate 5m',
    'hashrate1hr': 'Hashrate 1hr',
    'hashrate1d':  'Hashrate 1d',
    'hashrate7d':  'Hashrate 7d',
    'shares':      'Shares',
    'bestshare':   'Best Share',
    'bestever':    'Best Ever',
    'lastshare':   'Last Share',
}


def workers_frame(stats: UserStats) -> pd.DataFrame:
    """
    One row per worker, display-ready: best shares formatted with
    K/M/G/T/P suffixes, lastshare converted to a UTC timestamp.
    Sorted by best share, highest first.
    """
    if not stats.worker:
        return pd.DataFrame(columns=list(_WORKER_COLUMNS.values()))

    df = pd.DataFrame([w.model_dump() for w in stats.worker])
    df = df.sort_values('bestshare', ascending=False, kind='stable').reset_index(drop=True)
    df['bestshare'] = df['bestshare'].map(format_difficulty)
    df['bestever'] = df['bestever'].map(format_difficulty)
    df['lastshare'] = pd.to_datetime(df['lastshare'], unit='s', utc=True)
    return df[list(_WORKER_COLUMNS)].rename(columns=_WORKER_COLUMNS)
