"""
Pydantic models for the maxhash dashboard API.
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, Union

from src.stats import PoolStats, UserStats


class PoolStatsResponse(PoolStats):
    """
    Pool stats as ckpool reports them, plus display strings for
    difficulty-like fields (diff, bestshare).
    """
    display: Dict[str, str] = Field(default_factory=dict)


class UserStatsResponse(UserStats):
    """
    User stats with per-worker breakdown, plus display strings for
    bestshare and bestever.
    """
    display: Dict[str, str] = Field(default_factory=dict)


class DifficultyResponse(BaseModel):
    value: Union[int, float, str]
    formatted: str

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "value": 123456789.0,
            "formatted": "123.46M"
        }
    })


class HealthResponse(BaseModel):
    status: str
    service: str
