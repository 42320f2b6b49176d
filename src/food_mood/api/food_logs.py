"""Food log endpoints."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response, status

from food_mood.api.dependencies import require_user
from food_mood.api.models import (
    CreateFoodLogRequest,
    FoodLogListResponse,
    FoodLogResponse,
)

if TYPE_CHECKING:
    from food_mood.containers import AppContainer

router = APIRouter(prefix="/food-logs", tags=["food-logs"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food_log(
    payload: CreateFoodLogRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> FoodLogResponse:
    """Log a meal with the moods felt afterwards."""
    container: AppContainer = request.app.state.container
    entry = container.food_log_service.create_log(user_id, payload.to_domain())
    return FoodLogResponse.from_entry(entry)


@router.get("")
async def list_food_logs(
    request: Request,
    user_id: UUID = Depends(require_user),
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    food_name: str | None = None,
) -> FoodLogListResponse:
    """Return the caller's logs, newest meal first."""
    container: AppContainer = request.app.state.container
    entries = container.food_log_service.list_logs(
        user_id, start=start_date, end=end_date, food_name=food_name
    )
    return FoodLogListResponse(
        food_logs=[FoodLogResponse.from_entry(entry) for entry in entries]
    )


@router.get("/{log_id}")
async def get_food_log(
    log_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> FoodLogResponse:
    """Return a single food log."""
    container: AppContainer = request.app.state.container
    return FoodLogResponse.from_entry(
        container.food_log_service.get_log(user_id, log_id)
    )


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food_log(
    log_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> Response:
    """Delete a food log owned by the caller."""
    container: AppContainer = request.app.state.container
    container.food_log_service.delete_log(user_id, log_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
