"""Tests for Supabase adapter implementations."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import httpx
import pytest
from postgrest.exceptions import APIError

from food_mood.adapters.supabase_food_log_repository import SupabaseFoodLogRepository
from food_mood.adapters.supabase_insight_repository import SupabaseInsightRepository
from food_mood.domain.errors import PersistenceError, StoreUnavailableError
from food_mood.domain.food_logs import MealType, NewFoodLog
from food_mood.domain.insights import InsightDraft, InsightFilters, InsightType
from food_mood.services.insights import InsightService


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None
    last_range: tuple[int, int] | None = None
    error: Exception | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        self.last_filters = []
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        self.last_filters = []
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        self.last_filters = []
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def ilike(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("ilike", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def range(self, start: int, end: int) -> "FakeTable":
        self.last_range = (start, end)
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _api_error() -> APIError:
    return APIError({"message": "connection refused", "code": "500"})


def _connect_error() -> httpx.ConnectError:
    return httpx.ConnectError("connection refused")


def _food_log_row(user_id: str, **overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(uuid4()),
        "user_id": user_id,
        "food_name": "oats",
        "meal_type": "breakfast",
        "moods": ["happy", "calm"],
        "meal_time": "2024-03-01T08:30:00+00:00",
        "portion_size": None,
        "notes": None,
        "image_url": None,
    }
    row.update(overrides)
    return row


def _insight_row(user_id: str, **overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(uuid4()),
        "user_id": user_id,
        "insight_type": "weekly",
        "title": "Week of 3/4/2024",
        "description": "You logged 3 meals this week.",
        "data": {"statistics": {"total_meals": 3}},
        "period_start": "2024-03-04T00:00:00+00:00",
        "period_end": "2024-03-11T00:00:00+00:00",
        "is_read": False,
        "created_at": "2024-03-11T09:00:00+00:00",
    }
    row.update(overrides)
    return row


def test_food_log_repository_create() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_logs")
    user_id = uuid4()
    table.queue("insert", [_food_log_row(str(user_id))])

    repository = SupabaseFoodLogRepository(client)
    created = repository.create_log(
        user_id,
        NewFoodLog(
            food_name="oats",
            moods=("happy", "calm"),
            meal_time=datetime(2024, 3, 1, 8, 30, tzinfo=UTC),
            meal_type=MealType.BREAKFAST,
        ),
    )

    assert created.user_id == user_id
    assert created.moods == ("happy", "calm")
    assert created.meal_type == MealType.BREAKFAST
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["moods"] == ["happy", "calm"]
    assert table.last_payload["meal_type"] == "breakfast"


def test_food_log_repository_create_without_row() -> None:
    client = FakeSupabaseClient()
    repository = SupabaseFoodLogRepository(client)

    with pytest.raises(PersistenceError):
        repository.create_log(
            uuid4(),
            NewFoodLog(food_name="oats", moods=("happy",), meal_time=datetime.now(UTC)),
        )


def test_food_log_repository_list_applies_filters() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_logs")
    user_id = uuid4()
    table.queue(
        "select",
        [_food_log_row(str(user_id)), _food_log_row(str(user_id), moods="sad")],
    )
    start = datetime(2024, 3, 1, tzinfo=UTC)
    end = datetime(2024, 3, 8, tzinfo=UTC)

    repository = SupabaseFoodLogRepository(client)
    logs = repository.list_logs(user_id, start=start, end=end, food_name="oat")

    assert len(logs) == 2
    assert logs[1].moods == ("sad",)
    assert ("gte", "meal_time", start.isoformat()) in table.last_filters
    assert ("lte", "meal_time", end.isoformat()) in table.last_filters
    assert ("ilike", "food_name", "%oat%") in table.last_filters
    assert table.last_order == ("meal_time", True)


def test_food_log_repository_read_failure() -> None:
    client = FakeSupabaseClient()
    client.table("food_logs").error = _api_error()

    repository = SupabaseFoodLogRepository(client)

    with pytest.raises(StoreUnavailableError):
        repository.list_logs(uuid4())


def test_food_log_repository_get_and_delete() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_logs")
    user_id = uuid4()
    row = _food_log_row(str(user_id))
    table.queue("select", [row])

    repository = SupabaseFoodLogRepository(client)
    fetched = repository.get_log(user_id, uuid4())
    missing = repository.get_log(user_id, uuid4())
    repository.delete_log(user_id, fetched.id if fetched else uuid4())

    assert fetched is not None
    assert str(fetched.id) == row["id"]
    assert missing is None
    assert ("eq", "user_id", str(user_id)) in table.last_filters


def test_insight_repository_create() -> None:
    client = FakeSupabaseClient()
    table = client.table("insights")
    user_id = uuid4()
    table.queue("insert", [_insight_row(str(user_id))])

    repository = SupabaseInsightRepository(client)
    insight = repository.create_insight(
        InsightDraft(
            user_id=user_id,
            insight_type=InsightType.WEEKLY,
            title="Week of 3/4/2024",
            description="You logged 3 meals this week.",
            data={"statistics": {"total_meals": 3}},
            period_start=datetime(2024, 3, 4, tzinfo=UTC),
            period_end=datetime(2024, 3, 11, tzinfo=UTC),
        )
    )

    assert insight.insight_type == InsightType.WEEKLY
    assert insight.data == {"statistics": {"total_meals": 3}}
    assert not insight.is_read
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["is_read"] is False
    assert table.last_payload["insight_type"] == "weekly"


def test_insight_repository_create_failure() -> None:
    client = FakeSupabaseClient()
    client.table("insights").error = _api_error()
    repository = SupabaseInsightRepository(client)

    with pytest.raises(PersistenceError, match="monthly"):
        repository.create_insight(
            InsightDraft(
                user_id=uuid4(),
                insight_type=InsightType.MONTHLY,
                title="Monthly Summary - March 2024",
                description="",
                data={},
                period_start=datetime(2024, 3, 1, tzinfo=UTC),
                period_end=datetime(2024, 4, 1, tzinfo=UTC),
            )
        )


def test_insight_repository_list_filters() -> None:
    client = FakeSupabaseClient()
    table = client.table("insights")
    user_id = uuid4()
    table.queue("select", [_insight_row(str(user_id), insight_type="pattern")])

    repository = SupabaseInsightRepository(client)
    insights = repository.list_insights(
        user_id,
        InsightFilters(
            insight_type=InsightType.PATTERN, is_read=False, limit=5, offset=10
        ),
    )

    assert insights[0].insight_type == InsightType.PATTERN
    assert ("eq", "insight_type", "pattern") in table.last_filters
    assert ("eq", "is_read", False) in table.last_filters
    assert table.last_order == ("created_at", True)
    assert table.last_range == (10, 14)


def test_insight_repository_mark_read_scopes_update() -> None:
    client = FakeSupabaseClient()
    table = client.table("insights")
    user_id = uuid4()
    insight_id = uuid4()
    table.queue("update", [_insight_row(str(user_id), is_read=True)])

    repository = SupabaseInsightRepository(client)
    updated = repository.mark_read(user_id, insight_id)

    assert updated is not None
    assert updated.is_read
    assert table.last_payload == {"is_read": True}
    assert table.last_filters == [
        ("eq", "id", str(insight_id)),
        ("eq", "user_id", str(user_id)),
    ]


def test_food_log_repository_connection_failure() -> None:
    client = FakeSupabaseClient()
    client.table("food_logs").error = _connect_error()
    repository = SupabaseFoodLogRepository(client)

    with pytest.raises(StoreUnavailableError):
        repository.list_logs(uuid4())
    with pytest.raises(StoreUnavailableError):
        repository.get_log(uuid4(), uuid4())
    with pytest.raises(PersistenceError):
        repository.delete_log(uuid4(), uuid4())


def test_insight_repository_connection_failure() -> None:
    client = FakeSupabaseClient()
    client.table("insights").error = _connect_error()
    repository = SupabaseInsightRepository(client)

    with pytest.raises(StoreUnavailableError):
        repository.list_insights(uuid4(), InsightFilters())
    with pytest.raises(PersistenceError):
        repository.mark_read(uuid4(), uuid4())


def test_generation_fails_when_store_connection_drops(
    caplog: pytest.LogCaptureFixture,
) -> None:
    client = FakeSupabaseClient()
    client.table("food_logs").error = _connect_error()
    service = InsightService(
        log_source=SupabaseFoodLogRepository(client),
        repository=SupabaseInsightRepository(client),
    )

    with caplog.at_level(logging.INFO, logger="food_mood"):
        with pytest.raises(StoreUnavailableError):
            service.generate_weekly(uuid4())

    assert "fetching -> failed" in caplog.text
    assert "insights" not in client.tables
