"""Insight endpoints."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, Response, status

from food_mood.api.dependencies import require_user
from food_mood.api.models import GenerateInsightRequest
from food_mood.domain.insights import (
    GenerationResult,
    InsightFilters,
    InsightGenerated,
    InsightType,
)

if TYPE_CHECKING:
    from food_mood.containers import AppContainer

router = APIRouter(prefix="/insights", tags=["insights"])


def _result_payload(result: GenerationResult) -> dict[str, object]:
    if isinstance(result, InsightGenerated):
        return result.insight.to_wire()
    return {"message": result.message}


@router.get("")
async def list_insights(  # noqa: PLR0913
    request: Request,
    user_id: UUID = Depends(require_user),
    insight_type: InsightType | None = None,
    is_read: bool | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    limit: int | None = Query(default=None, ge=1, le=100),
    offset: int | None = Query(default=None, ge=0),
) -> dict[str, object]:
    """Return the caller's insights, newest first."""
    container: AppContainer = request.app.state.container
    filters = InsightFilters(
        insight_type=insight_type,
        is_read=is_read,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        offset=offset,
    )
    insights = container.insight_service.list_insights(user_id, filters)
    return {"insights": [insight.to_wire() for insight in insights]}


@router.post("/generate/weekly")
async def generate_weekly(
    request: Request,
    payload: GenerateInsightRequest | None = None,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Generate a weekly summary, or report that more logs are needed."""
    container: AppContainer = request.app.state.container
    period_start = payload.period_start if payload else None
    result = container.insight_service.generate_weekly(user_id, period_start)
    return _result_payload(result)


@router.post("/generate/monthly")
async def generate_monthly(
    request: Request,
    payload: GenerateInsightRequest | None = None,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Generate a monthly overview, or report that more logs are needed."""
    container: AppContainer = request.app.state.container
    period_start = payload.period_start if payload else None
    result = container.insight_service.generate_monthly(user_id, period_start)
    return _result_payload(result)


@router.post("/generate/patterns")
async def generate_patterns(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Generate a food-mood pattern report for the last 30 days."""
    container: AppContainer = request.app.state.container
    result = container.insight_service.generate_patterns(user_id)
    return _result_payload(result)


@router.get("/{insight_id}")
async def get_insight(
    insight_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return a single insight."""
    container: AppContainer = request.app.state.container
    return container.insight_service.get_insight(user_id, insight_id).to_wire()


@router.put("/{insight_id}/read")
async def mark_insight_read(
    insight_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Mark an insight as read."""
    container: AppContainer = request.app.state.container
    return container.insight_service.mark_read(user_id, insight_id).to_wire()


@router.delete("/{insight_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_insight(
    insight_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> Response:
    """Delete an insight owned by the caller."""
    container: AppContainer = request.app.state.container
    container.insight_service.delete_insight(user_id, insight_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
