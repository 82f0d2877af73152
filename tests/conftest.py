"""
Shared test fixtures for maxhash dashboard tests.
"""
import sys
import os
import json
import pytest

# Ensure project root is importable
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

VALID_ADDRESS = "bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq"


POOL_STATUS_LINES = [
    {"runtime": 3600, "lastupdate": 1700000000, "Users": 12, "Workers": 30,
     "Idle": 2, "Disconnected": 1},
    {"hashrate1m": "1.2P", "hashrate5m": "1.1P", "hashrate15m": "1.1P",
     "hashrate1hr": "1.05P", "hashrate6hr": "1.01P", "hashrate1d": "998T",
     "hashrate7d": "950T"},
    {"diff": 83148355189239.8, "accepted": 123456789, "rejected": 1234,
     "bestshare": 5000000000, "SPS1m": 12.5, "SPS5m": 12.1, "SPS15m": 11.9,
     "SPS1h": 11.7},
]


USER_STATS = {
    "hashrate1m": "10T", "hashrate5m": "9.8T", "hashrate1hr": "9.5T",
    "hashrate1d": "9.1T", "hashrate7d": "8.7T",
    "lastshare": 1700000000, "workers": 2, "shares": 1000,
    "bestshare": 2500000.0, "bestever": 1500000000, "authorised": 1690000000,
    "worker": [
        {"workername": f"{VALID_ADDRESS}.rig2", "hashrate1m": "1T", "hashrate5m": "1T",
         "hashrate1hr": "1T", "hashrate1d": "1T", "hashrate7d": "1T",
         "lastshare": 1699990000, "shares": 400, "bestshare": 800, "bestever": 999},
        {"workername": f"{VALID_ADDRESS}.rig1", "hashrate1m": "9T", "hashrate5m": "8.8T",
         "hashrate1hr": "8.5T", "hashrate1d": "8.1T", "hashrate7d": "7.7T",
         "lastshare": 1700000000, "shares": 600, "bestshare": 2500000.0,
         "bestever": 1500000000},
    ],
}


@pytest.fixture
def ckpool_dir(tmp_path):
    """
    A ckpool log directory with a pool.status file and one user file,
    laid out the way ckpool writes them.
    """
    pool_dir = tmp_path / "pool"
    pool_dir.mkdir()
    (pool_dir / "pool.status").write_text(
        "\n".join(json.dumps(line) for line in POOL_STATUS_LINES) + "\n"
    )

    users_dir = tmp_path / "users"
    users_dir.mkdir()
    (users_dir / VALID_ADDRESS).write_text(json.dumps(USER_STATS))

    return tmp_path


@pytest.fixture
def stats_service(ckpool_dir):
    from src.stats import StatsService
    return StatsService(str(ckpool_dir))
