"""Mood taxonomy and the lookup tables used for insights."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType


class Mood(StrEnum):
    """Mood labels a user can attach to a meal."""

    ENERGISED = "energised"
    SLEEPY = "sleepy"
    CALM = "calm"
    FOCUSED = "focused"
    ANXIOUS = "anxious"
    HAPPY = "happy"
    SAD = "sad"
    IRRITABLE = "irritable"
    SATISFIED = "satisfied"
    SLUGGISH = "sluggish"
    GUILTY = "guilty"
    CRAVING_MORE = "craving_more"


DEFAULT_MOOD_SCORE = 5

GRADED_SCORES: Mapping[str, int] = MappingProxyType(
    {
        Mood.ENERGISED: 9,
        Mood.HAPPY: 8,
        Mood.SATISFIED: 7,
        Mood.FOCUSED: 6,
        Mood.CALM: 5,
        Mood.SLUGGISH: 4,
        Mood.SLEEPY: 3,
        Mood.ANXIOUS: 2,
        Mood.SAD: 1,
        Mood.IRRITABLE: 1,
    }
)

FLAT_SCORES: Mapping[str, int] = MappingProxyType({mood: 1 for mood in Mood})

SCORE_TABLES: Mapping[str, Mapping[str, int]] = MappingProxyType(
    {"graded": GRADED_SCORES, "flat": FLAT_SCORES}
)


@dataclass(frozen=True)
class EducationalContent:
    """Static explainer shown next to a frequently logged mood."""

    title: str
    description: str
    reason: str


EDUCATIONAL_CONTENT: Mapping[str, EducationalContent] = MappingProxyType(
    {
        Mood.SLEEPY: EducationalContent(
            title="Feeling sleepy after eating? That's normal!",
            description=(
                "It's normal to feel sleepy after eating, especially after a big "
                "lunch or dinner. That's why people talk about 'food comas'; your "
                "body is busy digesting, and you just want to take a nap. This is "
                "especially common with high-carb meals or large portions."
            ),
            reason="digestion_energy",
        ),
        Mood.ENERGISED: EducationalContent(
            title="Foods that energize you",
            description=(
                "Feeling energized after eating is a great sign! This often happens "
                "with foods rich in protein, complex carbs, or natural sugars. Your "
                "body is getting the fuel it needs to power through your day."
            ),
            reason="nutrient_rich",
        ),
        Mood.SATISFIED: EducationalContent(
            title="The satisfaction factor",
            description=(
                "Feeling satisfied after a meal means you've found foods that truly "
                "nourish you. This feeling of contentment is important for "
                "maintaining healthy eating habits and avoiding overeating later."
            ),
            reason="nourishment",
        ),
        Mood.FOCUSED: EducationalContent(
            title="Foods that boost focus",
            description=(
                "Certain foods can help improve your concentration and mental "
                "clarity. This often includes foods rich in omega-3s, antioxidants, "
                "or steady-release energy sources that keep your brain fueled "
                "without crashes."
            ),
            reason="brain_fuel",
        ),
        Mood.CALM: EducationalContent(
            title="Foods that promote calmness",
            description=(
                "Feeling calm after eating can indicate foods that help regulate "
                "your nervous system. This might include foods rich in magnesium, "
                "tryptophan, or other nutrients that support relaxation."
            ),
            reason="nervous_system",
        ),
    }
)


@dataclass(frozen=True)
class MoodTaxonomy:
    """Configuration tables consumed by the insight calculators."""

    scores: Mapping[str, int] = field(default_factory=lambda: GRADED_SCORES)
    default_score: int = DEFAULT_MOOD_SCORE
    positive_moods: frozenset[str] = field(
        default_factory=lambda: frozenset(
            {Mood.ENERGISED, Mood.FOCUSED, Mood.HAPPY, Mood.SATISFIED, Mood.CALM}
        )
    )
    negative_moods: frozenset[str] = field(
        default_factory=lambda: frozenset(
            {Mood.SLEEPY, Mood.ANXIOUS, Mood.SAD, Mood.IRRITABLE, Mood.SLUGGISH}
        )
    )
    booster_moods: frozenset[str] = field(
        default_factory=lambda: frozenset(
            {Mood.ENERGISED, Mood.HAPPY, Mood.SATISFIED}
        )
    )
    educational: Mapping[str, EducationalContent] = field(
        default_factory=lambda: EDUCATIONAL_CONTENT
    )

    def score(self, mood: str) -> int:
        """Return the desirability score for a mood."""
        return self.scores.get(mood, self.default_score)


def taxonomy_for(score_table: str) -> MoodTaxonomy:
    """Build a taxonomy using a named score table."""
    try:
        scores = SCORE_TABLES[score_table]
    except KeyError as exc:
        raise ValueError(f"Unknown mood score table: {score_table}") from exc
    return MoodTaxonomy(scores=scores)
