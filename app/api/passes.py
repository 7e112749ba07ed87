"""
Passes API endpoint
Aggregate a user's for-sale gamepasses
"""
from fastapi import APIRouter, Depends, Path
import logging

from app.aggregation import GamepassAggregator
from app.core.dependencies import get_aggregator
from app.schemas.gamepass import AggregationResult

logger = logging.getLogger(__name__)

router = APIRouter(tags=["passes"])

MAX_USER_ID = 2 ** 64 - 1


@router.get("/user/{user_id}/passes", response_model=AggregationResult)
async def get_user_passes(
    user_id: int = Path(..., ge=0, le=MAX_USER_ID, description="Platform user id"),
    aggregator: GamepassAggregator = Depends(get_aggregator)
):
    """
    Get a user's for-sale gamepasses.

    Always answers 200: upstream failures degrade to an empty list.
    """
    result = await aggregator.resolve(user_id)
    logger.info(f"User {user_id}: returning {result.count} passes")
    return result
