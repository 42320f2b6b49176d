"""Insight generation and management."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Protocol
from uuid import UUID

from food_mood.domain.errors import (
    InsightNotFoundError,
    PersistenceError,
    StoreUnavailableError,
)
from food_mood.domain.food_logs import FoodLogEntry
from food_mood.domain.insights import (
    GenerationResult,
    Insight,
    InsightDraft,
    InsightFilters,
    InsightGenerated,
    InsightType,
    NotEnoughData,
)
from food_mood.domain.moods import MoodTaxonomy
from food_mood.services.narrative import NarrativeGenerator
from food_mood.services.patterns import PatternDetector
from food_mood.services.statistics import (
    MONTHLY_WINDOW_DAYS,
    WEEKLY_WINDOW_DAYS,
    PeriodStatistics,
    StatisticsAggregator,
)
from food_mood.services.trends import TrendAnalyzer

logger = logging.getLogger(__name__)

DECEMBER = 12
PATTERN_WINDOW_DAYS = 30

WEEKLY_NOT_ENOUGH = (
    "Not enough data for weekly insights. Log at least {required} meals this week."
)
MONTHLY_NOT_ENOUGH = (
    "Not enough data for monthly insights. Log at least {required} meals this month."
)
PATTERN_NOT_ENOUGH = (
    "Not enough data for pattern insights. "
    "Log at least {required} meals in the last 30 days."
)


class LogSource(Protocol):
    """Read access to a user's food logs."""

    def list_logs(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
        food_name: str | None = None,
    ) -> list[FoodLogEntry]:
        """Return logs within inclusive bounds, newest meal first."""


class InsightRepository(Protocol):
    """Persistence interface for insights."""

    def create_insight(self, draft: InsightDraft) -> Insight:
        """Insert an insight and return it with id and created_at."""

    def list_insights(self, user_id: UUID, filters: InsightFilters) -> list[Insight]:
        """Return the user's insights, newest first."""

    def get_insight(self, user_id: UUID, insight_id: UUID) -> Insight | None:
        """Return an insight owned by the user, if present."""

    def mark_read(self, user_id: UUID, insight_id: UUID) -> Insight | None:
        """Set is_read on an insight matching both id and user."""

    def delete_insight(self, user_id: UUID, insight_id: UUID) -> None:
        """Delete an insight owned by the user."""


class GenerationState(StrEnum):
    """Stages of a single generation request."""

    IDLE = "idle"
    FETCHING = "fetching"
    AGGREGATING = "aggregating"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class GenerationRun:
    """Tracks one generation request through its states."""

    user_id: UUID
    insight_type: InsightType
    state: GenerationState = GenerationState.IDLE

    def enter(self, state: GenerationState) -> None:
        logger.info(
            "Insight generation %s for user %s: %s -> %s",
            self.insight_type.value,
            self.user_id,
            self.state.value,
            state.value,
        )
        self.state = state


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


def _next_month(start: datetime) -> datetime:
    if start.month == DECEMBER:
        return start.replace(year=start.year + 1, month=1)
    return start.replace(month=start.month + 1)


@dataclass
class InsightService:
    """Generates insights from a user's logs and manages stored insights."""

    log_source: LogSource
    repository: InsightRepository
    taxonomy: MoodTaxonomy = field(default_factory=MoodTaxonomy)
    weekly_min_logs: int = 3
    monthly_min_logs: int = 10
    pattern_min_logs: int = 10
    clock: Callable[[], datetime] = _utcnow

    def __post_init__(self) -> None:
        self.aggregator = StatisticsAggregator(self.taxonomy)
        self.detector = PatternDetector(self.taxonomy)
        self.trends = TrendAnalyzer(self.taxonomy)
        self.narrative = NarrativeGenerator(self.taxonomy)

    def generate_weekly(
        self, user_id: UUID, week_start: datetime | None = None
    ) -> GenerationResult:
        """Generate a weekly report for the last 7 days or a given week."""
        if week_start is None:
            end = self.clock()
            start = end - timedelta(days=WEEKLY_WINDOW_DAYS)
        else:
            start = week_start
            end = start + timedelta(days=WEEKLY_WINDOW_DAYS)

        def build(logs: list[FoodLogEntry]) -> InsightDraft:
            statistics = self.aggregator.summarize(logs)
            patterns = self.detector.detect(logs)
            narrative = self.narrative.weekly(start, statistics, patterns)
            return InsightDraft(
                user_id=user_id,
                insight_type=InsightType.WEEKLY,
                title=narrative.title,
                description=narrative.description,
                data={
                    "statistics": statistics.to_payload(),
                    "patterns": patterns.to_payload(),
                    "educational": self._educational(statistics),
                },
                period_start=start,
                period_end=end,
            )

        return self._generate(
            user_id,
            InsightType.WEEKLY,
            start,
            end,
            self.weekly_min_logs,
            WEEKLY_NOT_ENOUGH,
            build,
        )

    def generate_monthly(
        self, user_id: UUID, month_start: datetime | None = None
    ) -> GenerationResult:
        """Generate a monthly report for the last 30 days or a calendar month."""
        if month_start is None:
            end = self.clock()
            start = end - timedelta(days=MONTHLY_WINDOW_DAYS)
            title_month = end
        else:
            start = month_start.replace(
                day=1, hour=0, minute=0, second=0, microsecond=0
            )
            end = _next_month(start)
            title_month = start

        def build(logs: list[FoodLogEntry]) -> InsightDraft:
            statistics = self.aggregator.summarize(logs, MONTHLY_WINDOW_DAYS)
            patterns = self.detector.detect(logs)
            trend = self.trends.analyze(logs)
            narrative = self.narrative.monthly(
                title_month, statistics, patterns, trend
            )
            return InsightDraft(
                user_id=user_id,
                insight_type=InsightType.MONTHLY,
                title=narrative.title,
                description=narrative.description,
                data={
                    "statistics": statistics.to_payload(),
                    "patterns": patterns.to_payload(),
                    "educational": self._educational(statistics),
                    "trends": trend.to_payload(),
                },
                period_start=start,
                period_end=end,
            )

        return self._generate(
            user_id,
            InsightType.MONTHLY,
            start,
            end,
            self.monthly_min_logs,
            MONTHLY_NOT_ENOUGH,
            build,
        )

    def generate_patterns(self, user_id: UUID) -> GenerationResult:
        """Generate a food-mood pattern report over the last 30 days."""
        end = self.clock()
        start = end - timedelta(days=PATTERN_WINDOW_DAYS)

        def build(logs: list[FoodLogEntry]) -> InsightDraft:
            statistics = self.aggregator.summarize(logs)
            patterns = self.detector.detect(logs)
            food_patterns = self.detector.food_mood_patterns(logs)
            boosters = self.detector.mood_boosters(food_patterns)
            trend = self.trends.analyze(logs)
            narrative = self.narrative.patterns(statistics, boosters)
            return InsightDraft(
                user_id=user_id,
                insight_type=InsightType.PATTERN,
                title=narrative.title,
                description=narrative.description,
                data={
                    "statistics": statistics.to_payload(),
                    "patterns": {
                        **patterns.to_payload(),
                        "food_mood_patterns": food_patterns,
                        "mood_boosters": [
                            {
                                "food": booster.food,
                                "moods": booster.moods,
                                "positive_rate": booster.positive_rate,
                            }
                            for booster in boosters
                        ],
                    },
                    "educational": self._educational(statistics),
                    "trends": trend.to_payload(),
                },
                period_start=start,
                period_end=end,
            )

        return self._generate(
            user_id,
            InsightType.PATTERN,
            start,
            end,
            self.pattern_min_logs,
            PATTERN_NOT_ENOUGH,
            build,
        )

    def list_insights(
        self, user_id: UUID, filters: InsightFilters | None = None
    ) -> list[Insight]:
        return self.repository.list_insights(user_id, filters or InsightFilters())

    def get_insight(self, user_id: UUID, insight_id: UUID) -> Insight:
        insight = self.repository.get_insight(user_id, insight_id)
        if insight is None:
            raise InsightNotFoundError(str(insight_id))
        return insight

    def mark_read(self, user_id: UUID, insight_id: UUID) -> Insight:
        """Mark an insight read after confirming the user owns it."""
        self.get_insight(user_id, insight_id)
        updated = self.repository.mark_read(user_id, insight_id)
        if updated is None:
            raise PersistenceError("Failed to mark insight as read")
        return updated

    def delete_insight(self, user_id: UUID, insight_id: UUID) -> None:
        self.get_insight(user_id, insight_id)
        self.repository.delete_insight(user_id, insight_id)

    def _educational(self, statistics: PeriodStatistics) -> dict[str, object]:
        return self.narrative.educational(statistics.mood_counts)

    def _generate(  # noqa: PLR0913
        self,
        user_id: UUID,
        insight_type: InsightType,
        start: datetime,
        end: datetime,
        min_logs: int,
        not_enough_message: str,
        build: Callable[[list[FoodLogEntry]], InsightDraft],
    ) -> GenerationResult:
        run = GenerationRun(user_id=user_id, insight_type=insight_type)
        run.enter(GenerationState.FETCHING)
        try:
            logs = self.log_source.list_logs(user_id, start=start, end=end)
        except StoreUnavailableError:
            run.enter(GenerationState.FAILED)
            raise

        if len(logs) < min_logs:
            logger.info(
                "Not enough logs for %s insight: %s of %s",
                insight_type.value,
                len(logs),
                min_logs,
            )
            run.enter(GenerationState.DONE)
            return NotEnoughData(
                message=not_enough_message.format(required=min_logs),
                log_count=len(logs),
                required=min_logs,
            )

        run.enter(GenerationState.AGGREGATING)
        try:
            draft = build(logs)
        except Exception:
            run.enter(GenerationState.FAILED)
            raise

        run.enter(GenerationState.PERSISTING)
        try:
            insight = self.repository.create_insight(draft)
        except PersistenceError:
            run.enter(GenerationState.FAILED)
            raise
        run.enter(GenerationState.DONE)
        return InsightGenerated(insight=insight)
