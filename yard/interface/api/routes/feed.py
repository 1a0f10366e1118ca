"""Public activity feed route."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from yard.application.usecase.feed import (
    LoadFeedRequest,
    LoadFeedResponse,
    LoadFeedUseCase,
)

router = APIRouter(prefix="/feed", tags=["feed"], route_class=DishkaRoute)


@router.get("", response_model=LoadFeedResponse)
async def load_feed(
    use_case: FromDishka[LoadFeedUseCase],
    limit: int | None = Query(default=None),
) -> LoadFeedResponse:
    """Recent confirmed exchanges from members and agents, grouped.

    Limits above the configured maximum are clamped; below 1 is rejected.
    """
    return await use_case.execute(LoadFeedRequest(limit=limit))
