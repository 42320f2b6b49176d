"""Recurring mood combinations and food-mood correlations."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from food_mood.domain.food_logs import FoodLogEntry
from food_mood.domain.moods import MoodTaxonomy
from food_mood.services.statistics import most_common, round_half_up, tally

COMBINATION_SEPARATOR = " + "
MIN_SIGNIFICANT_COMBINATION = 2
MIN_CORRELATION_ENTRIES = 3
MIN_CORRELATION_PERCENTAGE = 60
BOOSTER_RATE = 0.6
MAX_BOOSTERS = 3


@dataclass(frozen=True)
class MoodCombinations:
    """Tally of logs tagged with several moods at once."""

    most_common: str | None
    count: int
    all: dict[str, int]

    @property
    def significant(self) -> bool:
        if self.most_common is None:
            return False
        return self.count >= MIN_SIGNIFICANT_COMBINATION


@dataclass(frozen=True)
class FoodMoodCorrelation:
    """A food whose logs are dominated by one mood."""

    mood: str
    count: int
    total: int
    percentage: int


@dataclass(frozen=True)
class MoodBooster:
    """A food mostly followed by booster moods."""

    food: str
    moods: dict[str, int]
    positive_rate: float


@dataclass(frozen=True)
class PatternReport:
    """Combined pattern output with its summary sentence."""

    combinations: MoodCombinations
    correlations: dict[str, FoodMoodCorrelation]
    summary: str

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {}
        if self.combinations.significant:
            payload["mood_combinations"] = {
                "most_common": self.combinations.most_common,
                "count": self.combinations.count,
                "all_combinations": dict(self.combinations.all),
            }
        if self.correlations:
            payload["food_mood_correlations"] = {
                food: {
                    "mood": correlation.mood,
                    "count": correlation.count,
                    "total": correlation.total,
                    "percentage": correlation.percentage,
                }
                for food, correlation in self.correlations.items()
            }
        payload["summary"] = self.summary
        return payload


def combination_key(moods: Sequence[str]) -> str:
    """Return the order-independent key for a set of moods."""
    return COMBINATION_SEPARATOR.join(sorted(moods))


@dataclass(frozen=True)
class PatternDetector:
    """Finds mood combinations, per-food correlations and mood boosters."""

    taxonomy: MoodTaxonomy = field(default_factory=MoodTaxonomy)

    def mood_combination_patterns(
        self, logs: Sequence[FoodLogEntry]
    ) -> MoodCombinations:
        """Count each multi-mood log once under its sorted combination key."""
        combos = tally(
            combination_key(log.moods) for log in logs if len(log.moods) > 1
        )
        best = most_common(combos)
        if best is None:
            return MoodCombinations(most_common=None, count=0, all=combos)
        return MoodCombinations(most_common=best[0], count=best[1], all=combos)

    def food_mood_patterns(
        self, logs: Sequence[FoodLogEntry]
    ) -> dict[str, dict[str, int]]:
        """Group mood entries per food name."""
        patterns: dict[str, dict[str, int]] = {}
        for log in logs:
            counts = patterns.setdefault(log.food_name, {})
            for mood in log.moods:
                counts[mood] = counts.get(mood, 0) + 1
        return patterns

    def food_mood_correlations(
        self, logs: Sequence[FoodLogEntry]
    ) -> dict[str, FoodMoodCorrelation]:
        """Foods where one mood makes up at least 60% of their mood entries."""
        correlations: dict[str, FoodMoodCorrelation] = {}
        for food, counts in self.food_mood_patterns(logs).items():
            total = sum(counts.values())
            if total < MIN_CORRELATION_ENTRIES:
                continue
            best = most_common(counts)
            if best is None:
                continue
            mood, count = best
            percentage = count / total * 100
            if percentage >= MIN_CORRELATION_PERCENTAGE:
                correlations[food] = FoodMoodCorrelation(
                    mood=mood,
                    count=count,
                    total=total,
                    percentage=int(round_half_up(percentage)),
                )
        return correlations

    def mood_boosters(
        self, food_mood_patterns: Mapping[str, Mapping[str, int]]
    ) -> list[MoodBooster]:
        """First three foods, in discovery order, with a booster share over 60%."""
        boosters: list[MoodBooster] = []
        for food, counts in food_mood_patterns.items():
            total = sum(counts.values())
            if total == 0:
                continue
            positive = sum(
                count
                for mood, count in counts.items()
                if mood in self.taxonomy.booster_moods
            )
            rate = positive / total
            if rate > BOOSTER_RATE:
                boosters.append(
                    MoodBooster(food=food, moods=dict(counts), positive_rate=rate)
                )
            if len(boosters) == MAX_BOOSTERS:
                break
        return boosters

    def detect(self, logs: Sequence[FoodLogEntry]) -> PatternReport:
        """Run combination and correlation detection and build the summary."""
        combinations = self.mood_combination_patterns(logs)
        correlations = self.food_mood_correlations(logs)
        summary = ""
        if combinations.significant and combinations.most_common:
            together = combinations.most_common.replace(
                COMBINATION_SEPARATOR, " and ", 1
            )
            summary += f"You often feel {together} together. "
        if correlations:
            top_food, correlation = next(iter(correlations.items()))
            summary += f"{top_food} often makes you feel {correlation.mood}. "
        return PatternReport(
            combinations=combinations,
            correlations=correlations,
            summary=summary.strip(),
        )
