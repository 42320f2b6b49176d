"""Domain models for food-mood logs."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class MealType(StrEnum):
    """Optional meal classification."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class FoodLogEntry:
    """A logged meal with the moods felt afterwards."""

    id: UUID
    user_id: UUID
    food_name: str
    moods: tuple[str, ...]
    meal_time: datetime
    meal_type: MealType | None = None
    portion_size: str | None = None
    notes: str | None = None
    image_ref: str | None = None


@dataclass(frozen=True)
class NewFoodLog:
    """Food log payload before the store assigns an id."""

    food_name: str
    moods: tuple[str, ...]
    meal_time: datetime
    meal_type: MealType | None = None
    portion_size: str | None = None
    notes: str | None = None
    image_ref: str | None = None
