"""Human-readable titles, descriptions and educational content."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from food_mood.domain.moods import MoodTaxonomy
from food_mood.services.patterns import MoodBooster, PatternReport
from food_mood.services.statistics import PeriodStatistics
from food_mood.services.trends import MoodTrend

EDUCATIONAL_TOP_MOODS = 3
GREAT_CONSISTENCY = 70
GOOD_CONSISTENCY = 50


@dataclass(frozen=True)
class Narrative:
    """Title and description for an insight."""

    title: str
    description: str


def _format_score(score: float) -> str:
    return f"{score:g}"


def _join_sentences(*parts: str) -> str:
    return " ".join(part for part in parts if part)


def consistency_sentence(percentage: int) -> str:
    """Encouragement phrasing for the share of days tracked."""
    if percentage > GREAT_CONSISTENCY:
        return f"Great consistency! You tracked on {percentage}% of days."
    if percentage > GOOD_CONSISTENCY:
        return f"Good effort! You tracked on {percentage}% of days."
    return (
        f"You tracked on {percentage}% of days. "
        "Consider logging more regularly for better insights."
    )


@dataclass(frozen=True)
class NarrativeGenerator:
    """Formats computed statistics into fixed phrasing templates."""

    taxonomy: MoodTaxonomy = field(default_factory=MoodTaxonomy)

    def educational(self, mood_counts: Mapping[str, int]) -> dict[str, object]:
        """Static explainers for the three most frequent moods."""
        top_moods = sorted(mood_counts.items(), key=lambda item: -item[1])
        content: dict[str, object] = {}
        for mood, count in top_moods[:EDUCATIONAL_TOP_MOODS]:
            entry = self.taxonomy.educational.get(mood)
            if entry is None:
                continue
            content[mood] = {
                "title": entry.title,
                "description": entry.description,
                "reason": entry.reason,
                "frequency": count,
            }
        return content

    def weekly(
        self,
        period_start: datetime,
        statistics: PeriodStatistics,
        patterns: PatternReport,
    ) -> Narrative:
        start = period_start.date()
        most_common = ""
        if statistics.most_common_mood is not None:
            most_common = (
                f"You felt {statistics.most_common_mood} most often "
                f"({statistics.most_common_count} times)."
            )
        foods = ""
        if statistics.unique_foods > 0:
            foods = f"You tried {statistics.unique_foods} different foods."
        description = _join_sentences(
            f"You logged {statistics.total_logs} meals this week with an average "
            f"mood score of {_format_score(statistics.average_mood_score)}/10.",
            most_common,
            foods,
            patterns.summary,
        )
        return Narrative(
            title=f"Week of {start.month}/{start.day}/{start.year}",
            description=description,
        )

    def monthly(
        self,
        month: datetime,
        statistics: PeriodStatistics,
        patterns: PatternReport,
        trend: MoodTrend,
    ) -> Narrative:
        most_common = ""
        if statistics.most_common_mood is not None:
            most_common = f"You felt {statistics.most_common_mood} most often."
        description = _join_sentences(
            f"You logged {statistics.total_logs} meals this month with an average "
            f"mood score of {_format_score(statistics.average_mood_score)}/10.",
            consistency_sentence(statistics.consistency_percentage or 0),
            most_common,
            patterns.summary,
            trend.summary,
        )
        return Narrative(
            title=f"Monthly Summary - {month:%B %Y}",
            description=description,
        )

    def patterns(
        self, statistics: PeriodStatistics, boosters: Sequence[MoodBooster]
    ) -> Narrative:
        boosting = ""
        if boosters:
            foods = ", ".join(booster.food for booster in boosters)
            boosting = f"{foods} consistently boost your mood."
        most_common = ""
        if statistics.most_common_mood is not None:
            most_common = f"Your most common mood is {statistics.most_common_mood}."
        description = _join_sentences(
            "Here are some interesting patterns from your food and mood tracking:",
            boosting,
            most_common,
        )
        return Narrative(title="Food-Mood Patterns", description=description)
