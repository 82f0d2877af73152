"""
Tests for src/stats.py — ckpool file parsing, error mapping, display helpers.
"""
import json
import math
import pandas as pd
import pytest
from unittest.mock import patch
from prometheus_client import REGISTRY

from conftest import VALID_ADDRESS
from src.stats import (
    StatsService, StatsReadError, StatsNotFoundError,
    PoolStats, UserStats, WorkerStats,
    pool_display, user_display, workers_frame,
)


def _metric(name, labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestPoolStats:
    """pool.status: three JSON lines merged into one PoolStats."""

    def test_merges_three_lines(self, stats_service):
        stats = stats_service.pool_stats()
        assert stats.runtime == 3600
        assert stats.users == 12
        assert stats.workers == 30
        assert stats.idle == 2
        assert stats.disconnected == 1
        assert stats.hashrate1m == "1.2P"
        assert stats.hashrate7d == "950T"
        assert stats.diff == pytest.approx(83148355189239.8)
        assert stats.bestshare == 5000000000
        assert stats.sps1m == 12.5
        assert stats.sps1h == 11.7

    def test_extra_lines_ignored(self, ckpool_dir, stats_service):
        path = ckpool_dir / "pool" / "pool.status"
        path.write_text(path.read_text() + '{"unexpected": true}\n')
        assert stats_service.pool_stats().users == 12

    def test_unknown_keys_ignored_and_missing_default(self, ckpool_dir, stats_service):
        (ckpool_dir / "pool" / "pool.status").write_text(
            '{"Users": 3, "extra": 1}\n{}\n{"diff": 1500}\n'
        )
        stats = stats_service.pool_stats()
        assert stats.users == 3
        assert stats.workers == 0
        assert stats.hashrate1m == "0"
        assert stats.diff == 1500.0

    def test_integer_diff_keeps_int(self, ckpool_dir, stats_service):
        (ckpool_dir / "pool" / "pool.status").write_text('{}\n{}\n{"diff": 512}\n')
        stats = stats_service.pool_stats()
        assert isinstance(stats.diff, int)
        assert pool_display(stats)["diff"] == "512"

    def test_missing_file_raises_not_found(self, tmp_path):
        with pytest.raises(StatsNotFoundError):
            StatsService(str(tmp_path)).pool_stats()

    def test_too_few_lines(self, ckpool_dir, stats_service):
        (ckpool_dir / "pool" / "pool.status").write_text('{"Users": 1}\n{}\n')
        with pytest.raises(StatsReadError, match="invalid pool.status file format"):
            stats_service.pool_stats()

    def test_malformed_json(self, ckpool_dir, stats_service):
        (ckpool_dir / "pool" / "pool.status").write_text('{"Users": 1}\nnot json\n{}\n')
        with pytest.raises(StatsReadError, match="failed to parse pool.status"):
            stats_service.pool_stats()

    def test_errors_are_counted(self, ckpool_dir, stats_service):
        (ckpool_dir / "pool" / "pool.status").write_text("{}\n")
        before = _metric("maxhash_stats_read_errors_total", {"source": "pool"})
        with pytest.raises(StatsReadError):
            stats_service.pool_stats()
        after = _metric("maxhash_stats_read_errors_total", {"source": "pool"})
        assert after == before + 1

    def test_read_duration_observed(self, stats_service):
        before = _metric("maxhash_stats_read_duration_seconds_count", {"source": "pool"})
        stats_service.pool_stats()
        after = _metric("maxhash_stats_read_duration_seconds_count", {"source": "pool"})
        assert after == before + 1


class TestUserStats:
    """users/<address>: a single JSON document with a worker list."""

    def test_reads_user(self, stats_service):
        stats = stats_service.user_stats(VALID_ADDRESS)
        assert stats.workers == 2
        assert stats.bestshare == 2500000.0
        assert stats.bestever == 1500000000
        assert len(stats.worker) == 2
        assert all(isinstance(w, WorkerStats) for w in stats.worker)

    def test_unknown_user(self, stats_service):
        with pytest.raises(StatsNotFoundError):
            stats_service.user_stats("1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa")

    def test_invalid_address_rejected_before_io(self, stats_service):
        with pytest.raises(ValueError):
            stats_service.user_stats("../pool/pool.status")

    def test_malformed_user_file(self, ckpool_dir, stats_service):
        (ckpool_dir / "users" / VALID_ADDRESS).write_text("{broken")
        with pytest.raises(StatsReadError, match="failed to parse user stats file"):
            stats_service.user_stats(VALID_ADDRESS)

    def test_not_found_is_a_read_error(self):
        assert issubclass(StatsNotFoundError, StatsReadError)
        assert issubclass(StatsReadError, RuntimeError)


class TestFromConfig:

    def test_uses_configured_dir(self):
        with patch('src.stats.CKPOOL_LOG_DIR', '/srv/ckpool/logs'):
            assert StatsService.from_config().log_dir == '/srv/ckpool/logs'

    def test_empty_dir_raises(self):
        with patch('src.stats.CKPOOL_LOG_DIR', ''):
            with pytest.raises(ValueError):
                StatsService.from_config()


class TestDisplay:
    """Difficulty-like fields rendered through format_difficulty."""

    def test_pool_display(self, stats_service):
        shown = pool_display(stats_service.pool_stats())
        assert shown == {"diff": "83.15T", "bestshare": "5G"}

    def test_user_display(self, stats_service):
        shown = user_display(stats_service.user_stats(VALID_ADDRESS))
        assert shown == {"bestshare": "2.5M", "bestever": "1.5G"}

    def test_small_values_unsuffixed(self):
        shown = pool_display(PoolStats(diff=512, bestshare=0))
        assert shown == {"diff": "512", "bestshare": "0"}

    def test_invalid_counted(self):
        before = _metric("maxhash_invalid_difficulty_total", {"field": "diff"})
        shown = pool_display(PoolStats(diff=math.nan))
        after = _metric("maxhash_invalid_difficulty_total", {"field": "diff"})
        assert shown["diff"] == "Invalid"
        assert after == before + 1


class TestWorkersFrame:
    """Per-worker table for the dashboard page."""

    def test_sorted_by_best_share(self, stats_service):
        df = workers_frame(stats_service.user_stats(VALID_ADDRESS))
        assert len(df) == 2
        assert df['Worker'].iloc[0] == f"{VALID_ADDRESS}.rig1"
        assert df['Worker'].iloc[1] == f"{VALID_ADDRESS}.rig2"

    def test_formatted_columns(self, stats_service):
        df = workers_frame(stats_service.user_stats(VALID_ADDRESS))
        assert df['Best Share'].iloc[0] == "2.5M"
        assert df['Best Ever'].iloc[0] == "1.5G"
        assert df['Best Ever'].iloc[1] == "999"

    def test_last_share_timestamp(self, stats_service):
        df = workers_frame(stats_service.user_stats(VALID_ADDRESS))
        assert df['Last Share'].iloc[0] == pd.Timestamp(1700000000, unit='s', tz='UTC')

    def test_column_order(self, stats_service):
        df = workers_frame(stats_service.user_stats(VALID_ADDRESS))
        assert list(df.columns) == [
            'Worker', 'Hashrate 1m', 'Hashrate 5m', 'Hashrate 1hr', 'Hashrate 1d',
            'Hashrate 7d', 'Shares', 'Best Share', 'Best Ever', 'Last Share',
        ]

    def test_no_workers(self):
        df = workers_frame(UserStats())
        assert df.empty
        assert 'Best Share' in df.columns
