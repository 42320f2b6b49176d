"""Pydantic models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from food_mood.domain.food_logs import FoodLogEntry, MealType, NewFoodLog
from food_mood.domain.moods import Mood


class CreateFoodLogRequest(BaseModel):
    """Payload for logging a meal."""

    food_name: str = Field(min_length=1, max_length=100)
    moods: list[Mood] = Field(min_length=1)
    meal_time: datetime
    meal_type: MealType | None = None
    portion_size: str | None = Field(default=None, max_length=50)
    notes: str | None = Field(default=None, max_length=500)
    image_url: str | None = None

    def to_domain(self) -> NewFoodLog:
        return NewFoodLog(
            food_name=self.food_name,
            moods=tuple(mood.value for mood in self.moods),
            meal_time=self.meal_time,
            meal_type=self.meal_type,
            portion_size=self.portion_size,
            notes=self.notes,
            image_ref=self.image_url,
        )


class FoodLogResponse(BaseModel):
    """Food log as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    food_name: str
    moods: list[str]
    meal_time: datetime
    meal_type: MealType | None = None
    portion_size: str | None = None
    notes: str | None = None
    image_url: str | None = Field(
        default=None, validation_alias=AliasChoices("image_ref", "image_url")
    )

    @classmethod
    def from_entry(cls, entry: FoodLogEntry) -> "FoodLogResponse":
        return cls.model_validate(entry)


class GenerateInsightRequest(BaseModel):
    """Optional explicit period start for a generated report."""

    period_start: datetime | None = None


class FoodLogListResponse(BaseModel):
    food_logs: list[FoodLogResponse]
