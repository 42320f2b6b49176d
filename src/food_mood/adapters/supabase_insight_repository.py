"""Supabase repository for insights."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from food_mood.domain.errors import PersistenceError, StoreUnavailableError
from food_mood.domain.insights import (
    Insight,
    InsightDraft,
    InsightFilters,
    InsightType,
)
from food_mood.services.insights import InsightRepository

DEFAULT_PAGE_SIZE = 10
STORE_ERRORS = (APIError, httpx.HTTPError)


@dataclass
class SupabaseInsightRepository(InsightRepository):
    """Supabase implementation for insights."""

    client: Client

    def create_insight(self, draft: InsightDraft) -> Insight:
        """Insert an insight row and return the stored insight."""
        try:
            response = (
                self.client.table("insights")
                .insert(
                    {
                        "user_id": str(draft.user_id),
                        "insight_type": draft.insight_type.value,
                        "title": draft.title,
                        "description": draft.description,
                        "data": draft.data,
                        "period_start": draft.period_start.isoformat(),
                        "period_end": draft.period_end.isoformat(),
                        "is_read": False,
                    }
                )
                .execute()
            )
        except STORE_ERRORS as exc:
            raise PersistenceError(
                f"Failed to save {draft.insight_type.value} insight"
            ) from exc
        if not response.data:
            raise PersistenceError(f"Failed to save {draft.insight_type.value} insight")
        return _parse_row(response.data[0])

    def list_insights(self, user_id: UUID, filters: InsightFilters) -> list[Insight]:
        """Return insights newest first."""
        query = (
            self.client.table("insights")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
        )
        if filters.insight_type is not None:
            query = query.eq("insight_type", filters.insight_type.value)
        if filters.is_read is not None:
            query = query.eq("is_read", filters.is_read)
        if filters.start_date is not None:
            query = query.gte("created_at", filters.start_date.isoformat())
        if filters.end_date is not None:
            query = query.lte("created_at", filters.end_date.isoformat())
        if filters.limit:
            query = query.limit(filters.limit)
        if filters.offset:
            page_size = filters.limit or DEFAULT_PAGE_SIZE
            query = query.range(filters.offset, filters.offset + page_size - 1)
        try:
            response = query.execute()
        except STORE_ERRORS as exc:
            raise StoreUnavailableError("Failed to fetch insights") from exc
        return [_parse_row(row) for row in response.data or []]

    def get_insight(self, user_id: UUID, insight_id: UUID) -> Insight | None:
        """Return an insight owned by the user."""
        try:
            response = (
                self.client.table("insights")
                .select("*")
                .eq("id", str(insight_id))
                .eq("user_id", str(user_id))
                .limit(1)
                .execute()
            )
        except STORE_ERRORS as exc:
            raise StoreUnavailableError("Failed to fetch insight") from exc
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def mark_read(self, user_id: UUID, insight_id: UUID) -> Insight | None:
        """Set is_read with a single update scoped to id and user."""
        try:
            response = (
                self.client.table("insights")
                .update({"is_read": True})
                .eq("id", str(insight_id))
                .eq("user_id", str(user_id))
                .execute()
            )
        except STORE_ERRORS as exc:
            raise PersistenceError("Failed to mark insight as read") from exc
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_insight(self, user_id: UUID, insight_id: UUID) -> None:
        """Delete an insight owned by the user."""
        try:
            self.client.table("insights").delete().eq("id", str(insight_id)).eq(
                "user_id", str(user_id)
            ).execute()
        except STORE_ERRORS as exc:
            raise PersistenceError("Failed to delete insight") from exc


def _parse_row(row: dict[str, object]) -> Insight:
    data = row.get("data")
    return Insight(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        insight_type=InsightType(str(row["insight_type"])),
        title=str(row.get("title", "")),
        description=str(row.get("description", "")),
        data=data if isinstance(data, dict) else {},
        period_start=datetime.fromisoformat(str(row["period_start"])),
        period_end=datetime.fromisoformat(str(row["period_end"])),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        is_read=bool(row.get("is_read", False)),
    )
