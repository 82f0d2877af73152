import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_stats_service
from api.schemas import PoolStatsResponse
from api.services import StatsAPIService
from src.stats import StatsService, StatsReadError

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/pool", response_model=PoolStatsResponse, response_model_by_alias=False)
async def get_pool_stats(service: StatsService = Depends(get_stats_service)):
    """
    Get the merged pool.status stats with formatted difficulty strings.
    """
    try:
        return await StatsAPIService.get_pool_stats(service)
    except StatsReadError as e:
        logger.error("Error getting pool stats: %s", e)
        raise HTTPException(status_code=500, detail="failed to get pool stats")
