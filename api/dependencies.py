"""
Dependency injection module for FastAPI.
Provides the shared StatsService; tests override get_stats_service.
"""

from functools import lru_cache

from src.stats import StatsService


@lru_cache(maxsize=1)
def get_stats_service() -> StatsService:
    return StatsService.from_config()
