import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_stats_service
from api.schemas import UserStatsResponse
from api.services import StatsAPIService
from src.stats import StatsService, StatsReadError, StatsNotFoundError
from src.utils import is_valid_bitcoin_address

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/users/{address}", response_model=UserStatsResponse, response_model_by_alias=False)
async def get_user_stats(address: str, service: StatsService = Depends(get_stats_service)):
    """
    Get stats for a single miner, keyed by payout Bitcoin address.
    """
    if not is_valid_bitcoin_address(address):
        raise HTTPException(status_code=400, detail="invalid user path or Bitcoin address")

    try:
        return await StatsAPIService.get_user_stats(service, address)
    except StatsNotFoundError:
        raise HTTPException(status_code=404, detail="user not found")
    except StatsReadError as e:
        logger.error("Error getting user stats: %s", e)
        raise HTTPException(status_code=500, detail="failed to get user stats")
