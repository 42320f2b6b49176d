"""Count-based statistics over food-mood logs."""

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, date

from food_mood.domain.food_logs import FoodLogEntry
from food_mood.domain.moods import MoodTaxonomy

WEEKLY_WINDOW_DAYS = 7
MONTHLY_WINDOW_DAYS = 30

BREAKFAST_HOURS = range(6, 12)
LUNCH_HOURS = range(12, 17)
DINNER_HOURS = range(17, 22)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves towards positive infinity."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def most_common(counts: Mapping[str, int]) -> tuple[str, int] | None:
    """Return the first key holding the maximum count."""
    best: tuple[str, int] | None = None
    for key, count in counts.items():
        if best is None or count > best[1]:
            best = (key, count)
    return best


def tally(values: Iterable[str]) -> dict[str, int]:
    """Count values keeping first-seen order."""
    counts: dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    return counts


def flatten_moods(logs: Iterable[FoodLogEntry]) -> list[str]:
    """Return every mood entry across the logs."""
    return [mood for log in logs for mood in log.moods]


def log_day(log: FoodLogEntry) -> date:
    """Return the UTC calendar date of a meal."""
    meal_time = log.meal_time
    if meal_time.tzinfo is not None:
        meal_time = meal_time.astimezone(UTC)
    return meal_time.date()


@dataclass(frozen=True)
class MealTiming:
    """Hour-of-day summary for logged meals."""

    average_hour: int
    earliest_hour: int
    latest_hour: int
    breakfast: int
    lunch: int
    dinner: int
    late_night: int

    def to_payload(self) -> dict[str, object]:
        return {
            "average_hour": self.average_hour,
            "earliest_meal": self.earliest_hour,
            "latest_meal": self.latest_hour,
            "meal_distribution": {
                "breakfast": self.breakfast,
                "lunch": self.lunch,
                "dinner": self.dinner,
                "late_night": self.late_night,
            },
        }


@dataclass(frozen=True)
class PeriodStatistics:
    """Statistics for one insight window."""

    total_logs: int
    total_mood_entries: int
    mood_counts: dict[str, int]
    most_common_mood: str | None
    average_mood_score: float
    unique_foods: int
    days_with_logs: int
    meal_timing: MealTiming
    consistency_percentage: int | None = None

    @property
    def most_common_count(self) -> int:
        if self.most_common_mood is None:
            return 0
        return self.mood_counts[self.most_common_mood]

    @property
    def average_moods_per_meal(self) -> str:
        if self.total_logs == 0:
            return "0.0"
        return f"{round_half_up(self.total_mood_entries / self.total_logs, 1):.1f}"

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "total_meals": self.total_logs,
            "total_mood_entries": self.total_mood_entries,
            "mood_statistics": dict(self.mood_counts),
            "most_common_mood": self.most_common_mood,
            "average_moods_per_meal": self.average_moods_per_meal,
            "average_mood_score": self.average_mood_score,
            "unique_foods": self.unique_foods,
            "days_logged": self.days_with_logs,
            "meal_timing": self.meal_timing.to_payload(),
        }
        if self.consistency_percentage is not None:
            payload["consistency_score"] = self.consistency_percentage
        return payload


@dataclass(frozen=True)
class StatisticsAggregator:
    """Computes mood distributions and coverage for a set of logs."""

    taxonomy: MoodTaxonomy = field(default_factory=MoodTaxonomy)

    def mood_counts(self, logs: Sequence[FoodLogEntry]) -> dict[str, int]:
        """Tally every mood entry; a log with k moods adds to k buckets."""
        return tally(flatten_moods(logs))

    def most_common_mood(self, mood_counts: Mapping[str, int]) -> str | None:
        """Return the most frequent mood, earliest entry winning ties."""
        best = most_common(mood_counts)
        return best[0] if best else None

    def average_mood_score(self, logs: Sequence[FoodLogEntry]) -> float:
        """Average score per mood entry, rounded to one decimal."""
        moods = flatten_moods(logs)
        if not moods:
            return 0
        total = sum(self.taxonomy.score(mood) for mood in moods)
        return round_half_up(total / len(moods), 1)

    def unique_food_count(self, logs: Sequence[FoodLogEntry]) -> int:
        return len({log.food_name for log in logs})

    def days_with_logs(self, logs: Sequence[FoodLogEntry]) -> int:
        return len({log_day(log) for log in logs})

    def consistency_percentage(self, days_with_logs: int, window_days: int) -> int:
        """Share of a fixed-length window that has at least one log."""
        if window_days <= 0:
            return 0
        return int(round_half_up(days_with_logs / window_days * 100))

    def meal_timing(self, logs: Sequence[FoodLogEntry]) -> MealTiming:
        """Bucket meals by hour of day."""
        hours = [log.meal_time.hour for log in logs]
        if not hours:
            return MealTiming(0, 0, 0, 0, 0, 0, 0)
        breakfast = sum(1 for hour in hours if hour in BREAKFAST_HOURS)
        lunch = sum(1 for hour in hours if hour in LUNCH_HOURS)
        dinner = sum(1 for hour in hours if hour in DINNER_HOURS)
        return MealTiming(
            average_hour=int(round_half_up(sum(hours) / len(hours))),
            earliest_hour=min(hours),
            latest_hour=max(hours),
            breakfast=breakfast,
            lunch=lunch,
            dinner=dinner,
            late_night=len(hours) - breakfast - lunch - dinner,
        )

    def summarize(
        self, logs: Sequence[FoodLogEntry], window_days: int | None = None
    ) -> PeriodStatistics:
        """Compute every statistic for a window.

        ``window_days`` enables the consistency percentage, which is measured
        against the fixed window length rather than the span of the logs.
        """
        counts = self.mood_counts(logs)
        days = self.days_with_logs(logs)
        consistency = (
            self.consistency_percentage(days, window_days)
            if window_days is not None
            else None
        )
        return PeriodStatistics(
            total_logs=len(logs),
            total_mood_entries=sum(counts.values()),
            mood_counts=counts,
            most_common_mood=self.most_common_mood(counts),
            average_mood_score=self.average_mood_score(logs),
            unique_foods=self.unique_food_count(logs),
            days_with_logs=days,
            meal_timing=self.meal_timing(logs),
            consistency_percentage=consistency,
        )
