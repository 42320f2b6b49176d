"""Positive-mood trend between the two halves of a period."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from food_mood.domain.food_logs import FoodLogEntry
from food_mood.domain.moods import MoodTaxonomy
from food_mood.services.statistics import flatten_moods, round_half_up

TREND_THRESHOLD = 10


@dataclass(frozen=True)
class HalfBalance:
    """Positive and negative mood entries within one half."""

    positive: int
    negative: int
    total: int

    @property
    def positive_percentage(self) -> float:
        if self.total == 0:
            return 0
        return self.positive / self.total * 100


@dataclass(frozen=True)
class MoodTrend:
    """Outcome of comparing the two halves."""

    first_half: HalfBalance
    second_half: HalfBalance
    direction: str | None
    summary: str

    @property
    def difference(self) -> float:
        return (
            self.second_half.positive_percentage
            - self.first_half.positive_percentage
        )

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {}
        if self.direction is not None:
            payload["mood_trend"] = {
                "direction": self.direction,
                "first_half_percentage": int(
                    round_half_up(self.first_half.positive_percentage)
                ),
                "second_half_percentage": int(
                    round_half_up(self.second_half.positive_percentage)
                ),
                "difference": int(round_half_up(self.difference)),
            }
        payload["summary"] = self.summary
        return payload


@dataclass(frozen=True)
class TrendAnalyzer:
    """Splits logs at the midpoint and compares positive-mood share.

    Logs are split in the order given. The store returns them newest first,
    so the first half holds the more recent meals.
    """

    taxonomy: MoodTaxonomy = field(default_factory=MoodTaxonomy)
    period_label: str = "this month"

    def balance(self, logs: Sequence[FoodLogEntry]) -> HalfBalance:
        moods = flatten_moods(logs)
        return HalfBalance(
            positive=sum(1 for mood in moods if mood in self.taxonomy.positive_moods),
            negative=sum(1 for mood in moods if mood in self.taxonomy.negative_moods),
            total=len(moods),
        )

    def analyze(self, logs: Sequence[FoodLogEntry]) -> MoodTrend:
        midpoint = len(logs) // 2
        first_half = self.balance(logs[:midpoint])
        second_half = self.balance(logs[midpoint:])
        difference = (
            second_half.positive_percentage - first_half.positive_percentage
        )
        if abs(difference) > TREND_THRESHOLD:
            direction = "improved" if difference > 0 else "declined"
            summary = f"Your positive mood experiences {direction} {self.period_label}."
        else:
            direction = None
            summary = f"Your mood patterns remained consistent {self.period_label}."
        return MoodTrend(
            first_half=first_half,
            second_half=second_half,
            direction=direction,
            summary=summary,
        )
