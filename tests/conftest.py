"""Shared test fixtures."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from food_mood.config import Settings
from food_mood.containers import AppContainer
from food_mood.domain.errors import PersistenceError, StoreUnavailableError
from food_mood.domain.food_logs import FoodLogEntry, NewFoodLog
from food_mood.domain.insights import Insight, InsightDraft, InsightFilters
from food_mood.services.food_logs import FoodLogRepository, FoodLogService
from food_mood.services.insights import InsightRepository, InsightService

NOW = datetime(2024, 3, 20, 12, 0, tzinfo=UTC)


def make_log(
    food_name: str,
    moods: list[str],
    meal_time: datetime = NOW,
    user_id: UUID | None = None,
) -> FoodLogEntry:
    return FoodLogEntry(
        id=uuid4(),
        user_id=user_id or uuid4(),
        food_name=food_name,
        moods=tuple(moods),
        meal_time=meal_time,
    )


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory food log repository for tests."""

    logs: list[FoodLogEntry] = field(default_factory=list)
    fail_reads: bool = False
    list_calls: list[tuple[UUID, datetime | None, datetime | None]] = field(
        default_factory=list
    )

    def create_log(self, user_id: UUID, log: NewFoodLog) -> FoodLogEntry:
        entry = FoodLogEntry(
            id=uuid4(),
            user_id=user_id,
            food_name=log.food_name,
            moods=log.moods,
            meal_time=log.meal_time,
            meal_type=log.meal_type,
            portion_size=log.portion_size,
            notes=log.notes,
            image_ref=log.image_ref,
        )
        self.logs.append(entry)
        return entry

    def list_logs(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
        food_name: str | None = None,
    ) -> list[FoodLogEntry]:
        self.list_calls.append((user_id, start, end))
        if self.fail_reads:
            raise StoreUnavailableError("Failed to fetch food logs")
        matches = [
            log
            for log in self.logs
            if log.user_id == user_id
            and (start is None or log.meal_time >= start)
            and (end is None or log.meal_time <= end)
            and (not food_name or food_name.lower() in log.food_name.lower())
        ]
        return sorted(matches, key=lambda log: log.meal_time, reverse=True)

    def get_log(self, user_id: UUID, log_id: UUID) -> FoodLogEntry | None:
        for log in self.logs:
            if log.id == log_id and log.user_id == user_id:
                return log
        return None

    def delete_log(self, user_id: UUID, log_id: UUID) -> None:
        self.logs = [
            log
            for log in self.logs
            if not (log.id == log_id and log.user_id == user_id)
        ]


@dataclass
class InMemoryInsightRepository(InsightRepository):
    """In-memory insight repository for tests."""

    insights: dict[UUID, Insight] = field(default_factory=dict)
    fail_writes: bool = False
    insert_calls: int = 0

    def create_insight(self, draft: InsightDraft) -> Insight:
        self.insert_calls += 1
        if self.fail_writes:
            raise PersistenceError(f"Failed to save {draft.insight_type.value} insight")
        insight = Insight(
            id=uuid4(),
            user_id=draft.user_id,
            insight_type=draft.insight_type,
            title=draft.title,
            description=draft.description,
            data=draft.data,
            period_start=draft.period_start,
            period_end=draft.period_end,
            created_at=datetime.now(tz=UTC),
        )
        self.insights[insight.id] = insight
        return insight

    def list_insights(self, user_id: UUID, filters: InsightFilters) -> list[Insight]:
        results = [
            insight
            for insight in self.insights.values()
            if insight.user_id == user_id
            and (
                filters.insight_type is None
                or insight.insight_type == filters.insight_type
            )
            and (filters.is_read is None or insight.is_read == filters.is_read)
        ]
        results.sort(key=lambda insight: insight.created_at, reverse=True)
        offset = filters.offset or 0
        if filters.limit:
            return results[offset : offset + filters.limit]
        return results[offset:]

    def get_insight(self, user_id: UUID, insight_id: UUID) -> Insight | None:
        insight = self.insights.get(insight_id)
        if insight is None or insight.user_id != user_id:
            return None
        return insight

    def mark_read(self, user_id: UUID, insight_id: UUID) -> Insight | None:
        insight = self.get_insight(user_id, insight_id)
        if insight is None:
            return None
        updated = replace(insight, is_read=True)
        self.insights[insight_id] = updated
        return updated

    def delete_insight(self, user_id: UUID, insight_id: UUID) -> None:
        if self.get_insight(user_id, insight_id) is not None:
            del self.insights[insight_id]


@pytest.fixture(autouse=True)
def reset_app_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("food_mood")
    logger.handlers.clear()
    logger.propagate = True


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def food_log_repository() -> InMemoryFoodLogRepository:
    return InMemoryFoodLogRepository()


@pytest.fixture
def insight_repository() -> InMemoryInsightRepository:
    return InMemoryInsightRepository()


@pytest.fixture
def insight_service(
    food_log_repository: InMemoryFoodLogRepository,
    insight_repository: InMemoryInsightRepository,
) -> InsightService:
    return InsightService(
        log_source=food_log_repository,
        repository=insight_repository,
        clock=lambda: NOW,
    )


@pytest.fixture
def container(
    settings: Settings,
    food_log_repository: InMemoryFoodLogRepository,
    insight_service: InsightService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        food_log_service=FoodLogService(food_log_repository),
        insight_service=insight_service,
    )
