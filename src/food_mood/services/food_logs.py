"""Food log storage service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from food_mood.domain.errors import FoodLogNotFoundError
from food_mood.domain.food_logs import FoodLogEntry, NewFoodLog


class FoodLogRepository(Protocol):
    """Persistence interface for food logs."""

    def create_log(self, user_id: UUID, log: NewFoodLog) -> FoodLogEntry:
        """Insert a food log and return the stored row."""

    def list_logs(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
        food_name: str | None = None,
    ) -> list[FoodLogEntry]:
        """Return logs within inclusive bounds, newest meal first."""

    def get_log(self, user_id: UUID, log_id: UUID) -> FoodLogEntry | None:
        """Return a log owned by the user, if present."""

    def delete_log(self, user_id: UUID, log_id: UUID) -> None:
        """Delete a log owned by the user."""


@dataclass
class FoodLogService:
    """Application service for creating, listing and removing food logs."""

    repository: FoodLogRepository

    def create_log(self, user_id: UUID, log: NewFoodLog) -> FoodLogEntry:
        return self.repository.create_log(user_id, log)

    def list_logs(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
        food_name: str | None = None,
    ) -> list[FoodLogEntry]:
        return self.repository.list_logs(
            user_id, start=start, end=end, food_name=food_name
        )

    def get_log(self, user_id: UUID, log_id: UUID) -> FoodLogEntry:
        log = self.repository.get_log(user_id, log_id)
        if log is None:
            raise FoodLogNotFoundError(str(log_id))
        return log

    def delete_log(self, user_id: UUID, log_id: UUID) -> None:
        """Delete a log after confirming the user owns it."""
        self.get_log(user_id, log_id)
        self.repository.delete_log(user_id, log_id)
