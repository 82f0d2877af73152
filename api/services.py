"""
Service layer for the maxhash dashboard API.
Handles interaction with src/ modules, async wrapping, and caching.
"""

from fastapi.concurrency import run_in_threadpool
from async_lru import alru_cache

from config import STATS_CACHE_ENABLED, STATS_CACHE_TTL
from src.stats import StatsService, pool_display, user_display
from api.schemas import PoolStatsResponse, UserStatsResponse


def _cached(maxsize: int):
    """alru_cache with the configured TTL, or a no-op when caching is disabled."""
    def decorator(fn):
        if not STATS_CACHE_ENABLED:
            return fn
        return alru_cache(maxsize=maxsize, ttl=STATS_CACHE_TTL)(fn)
    return decorator


class StatsAPIService:
    @staticmethod
    @_cached(maxsize=1)
    async def get_pool_stats(service: StatsService) -> PoolStatsResponse:
        """
        Async wrapper for reading pool.status.
        Cached for STATS_CACHE_TTL seconds.
        """
        # Run blocking file I/O in threadpool
        stats = await run_in_threadpool(service.pool_stats)
        return PoolStatsResponse(**stats.model_dump(), display=pool_display(stats))

    @staticmethod
    @_cached(maxsize=1024)
    async def get_user_stats(service: StatsService, address: str) -> UserStatsResponse:
        """
        Async wrapper for reading a user's stats file.
        Cached per address for STATS_CACHE_TTL seconds.
        """
        stats = await run_in_threadpool(service.user_stats, address)
        return UserStatsResponse(**stats.model_dump(), display=user_display(stats))

    @staticmethod
    def cache_clear():
        for fn in (StatsAPIService.get_pool_stats, StatsAPIService.get_user_stats):
            if hasattr(fn, "cache_clear"):
                fn.cache_clear()
