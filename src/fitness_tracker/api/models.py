"""Pydantic models for API request payloads."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ParseRequest(BaseModel):
    """Pattern-based parse request."""

    text: str
    type: Literal["exercise", "cardio", "meal", "weight"]


class ParseAIRequest(BaseModel):
    """AI-assisted extraction request."""

    model_config = ConfigDict(populate_by_name=True)

    input_text: str = Field(alias="inputText", min_length=1)
    type: Literal["food", "exercise"]
    body_weight_kg: float | None = Field(default=None, alias="bodyWeightKg", gt=0)


class EntryRequest(BaseModel):
    """Parse free text and store the result for a day."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(min_length=1)
    type: Literal["exercise", "cardio", "meal", "weight"]
    day: date | None = Field(default=None, alias="date")
    use_ai: bool = Field(default=False, alias="useAi")
    body_weight_kg: float | None = Field(default=None, alias="bodyWeightKg", gt=0)
