"""Domain models for generated insights."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class InsightType(StrEnum):
    """Kinds of insight reports."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    PATTERN = "pattern"
    TREND = "trend"


@dataclass(frozen=True)
class InsightDraft:
    """A fully computed insight that has not been stored yet."""

    user_id: UUID
    insight_type: InsightType
    title: str
    description: str
    data: dict[str, object]
    period_start: datetime
    period_end: datetime


@dataclass(frozen=True)
class Insight:
    """A stored insight."""

    id: UUID
    user_id: UUID
    insight_type: InsightType
    title: str
    description: str
    data: dict[str, object]
    period_start: datetime
    period_end: datetime
    created_at: datetime
    is_read: bool = False

    def to_wire(self) -> dict[str, object]:
        """Return the snake_case JSON shape served to clients."""
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "insight_type": self.insight_type.value,
            "title": self.title,
            "description": self.description,
            "data": self.data,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "is_read": self.is_read,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class InsightFilters:
    """Filters for listing stored insights."""

    insight_type: InsightType | None = None
    is_read: bool | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    limit: int | None = None
    offset: int | None = None


@dataclass(frozen=True)
class InsightGenerated:
    """Generation produced and stored an insight."""

    insight: Insight


@dataclass(frozen=True)
class NotEnoughData:
    """Generation skipped because the window had too few logs."""

    message: str
    log_count: int = 0
    required: int = 0


GenerationResult = InsightGenerated | NotEnoughData
