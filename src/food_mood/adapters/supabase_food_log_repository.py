"""Supabase repository for food logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from food_mood.domain.errors import PersistenceError, StoreUnavailableError
from food_mood.domain.food_logs import FoodLogEntry, MealType, NewFoodLog
from food_mood.services.food_logs import FoodLogRepository

STORE_ERRORS = (APIError, httpx.HTTPError)

_COLUMNS = (
    "id, user_id, food_name, meal_type, moods, meal_time, portion_size, notes, "
    "image_url"
)


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for food logs."""

    client: Client

    def create_log(self, user_id: UUID, log: NewFoodLog) -> FoodLogEntry:
        """Insert a food log row and return it."""
        try:
            response = (
                self.client.table("food_logs")
                .insert(
                    {
                        "user_id": str(user_id),
                        "food_name": log.food_name,
                        "meal_type": log.meal_type.value if log.meal_type else None,
                        "moods": list(log.moods),
                        "meal_time": log.meal_time.isoformat(),
                        "portion_size": log.portion_size,
                        "notes": log.notes,
                        "image_url": log.image_ref,
                    }
                )
                .execute()
            )
        except STORE_ERRORS as exc:
            raise PersistenceError("Failed to create food log") from exc
        if not response.data:
            raise PersistenceError("Failed to create food log")
        return _parse_row(response.data[0])

    def list_logs(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
        food_name: str | None = None,
    ) -> list[FoodLogEntry]:
        """Return logs newest meal first."""
        query = self.client.table("food_logs").select(_COLUMNS).eq(
            "user_id", str(user_id)
        )
        if start is not None:
            query = query.gte("meal_time", start.isoformat())
        if end is not None:
            query = query.lte("meal_time", end.isoformat())
        if food_name:
            query = query.ilike("food_name", f"%{food_name}%")
        try:
            response = query.order("meal_time", desc=True).execute()
        except STORE_ERRORS as exc:
            raise StoreUnavailableError("Failed to fetch food logs") from exc
        return [_parse_row(row) for row in response.data or []]

    def get_log(self, user_id: UUID, log_id: UUID) -> FoodLogEntry | None:
        """Return a food log owned by the user."""
        try:
            response = (
                self.client.table("food_logs")
                .select(_COLUMNS)
                .eq("id", str(log_id))
                .eq("user_id", str(user_id))
                .limit(1)
                .execute()
            )
        except STORE_ERRORS as exc:
            raise StoreUnavailableError("Failed to fetch food log") from exc
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_log(self, user_id: UUID, log_id: UUID) -> None:
        """Delete a food log owned by the user."""
        try:
            self.client.table("food_logs").delete().eq("id", str(log_id)).eq(
                "user_id", str(user_id)
            ).execute()
        except STORE_ERRORS as exc:
            raise PersistenceError("Failed to delete food log") from exc


def _parse_row(row: dict[str, object]) -> FoodLogEntry:
    raw_moods = row.get("moods") or []
    if isinstance(raw_moods, list):
        moods = tuple(str(mood) for mood in raw_moods)
    else:
        moods = (str(raw_moods),)
    meal_type = row.get("meal_type")
    return FoodLogEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        food_name=str(row.get("food_name", "")),
        moods=moods,
        meal_time=datetime.fromisoformat(str(row["meal_time"])),
        meal_type=MealType(meal_type) if meal_type else None,
        portion_size=row.get("portion_size"),
        notes=row.get("notes"),
        image_ref=row.get("image_url"),
    )
