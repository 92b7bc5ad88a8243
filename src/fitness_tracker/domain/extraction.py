"""Models for validating completion-service payloads."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class QuantityPayload(BaseModel):
    """Amount and unit the model attached to one item."""

    model_config = ConfigDict(strict=True)

    item: str
    amount: float = Field(ge=0.0)
    unit: str


class FoodExtract(BaseModel):
    """Structured output expected for food descriptions."""

    model_config = ConfigDict(strict=True)

    calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    fat: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    items: list[str] = Field(min_length=1)
    quantities: list[QuantityPayload] | None = None


class ExerciseExtract(BaseModel):
    """Structured output expected for exercise descriptions."""

    model_config = ConfigDict(strict=True)

    exercise_name: str = Field(min_length=1)
    exercise_type: Literal["cardio", "strength"]
    sets: int | None = Field(default=None, ge=0)
    reps: int | None = Field(default=None, ge=0)
    weight: float | None = Field(default=None, ge=0.0)
    duration_minutes: float | None = Field(default=None, ge=0.0)
    distance: float | None = Field(default=None, ge=0.0)
    calories_burned: float | None = Field(default=None, ge=0.0)
