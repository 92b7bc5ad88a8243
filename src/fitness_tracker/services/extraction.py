"""AI-assisted extraction of food and exercise records from free text.

The completion model only proposes structure and rough numbers. Its output is
validated against a strict schema, then its estimates are replaced by
USDA/fallback-table nutrition or MET-based calories wherever a lookup
succeeds. Every result carries the source of its numbers.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Literal, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from fitness_tracker.domain.exercise import MetLookup
from fitness_tracker.domain.extraction import ExerciseExtract, FoodExtract
from fitness_tracker.domain.nutrition import (
    FoodLookupResult,
    MacroTotals,
    UnitQuantity,
)
from fitness_tracker.domain.records import ExtractedRecord, ParsedExercise, ParsedFood
from fitness_tracker.errors import (
    ConfigError,
    FormatError,
    LookupUnavailable,
    SchemaError,
)
from fitness_tracker.services.exercise_lookup import ExerciseLookupService
from fitness_tracker.services.metrics import (
    DEFAULT_BODY_WEIGHT_KG,
    clamp_ai_estimate,
    exceeds_database_threshold,
    round_half_up,
    sum_macros,
)
from fitness_tracker.services.nutrition import NutritionService

ExtractionType = Literal["food", "exercise"]
ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_STRENGTH_SETS = 3

SYSTEM_PROMPT = (
    "You are a nutrition/fitness parser. Return only valid JSON matching the "
    "exact format requested."
)

FOOD_EXAMPLE: dict[str, object] = {
    "calories": 300,
    "protein": 30,
    "fat": 10,
    "carbs": 25,
    "items": ["grilled chicken breast", "brown rice"],
    "quantities": [
        {"item": "grilled chicken breast", "amount": 150, "unit": "grams"},
        {"item": "brown rice", "amount": 100, "unit": "grams"},
    ],
}

EXERCISE_EXAMPLE: dict[str, object] = {
    "exercise_name": "bench press",
    "exercise_type": "strength",
    "sets": 4,
    "reps": 10,
    "weight": 135,
    "calories_burned": 180,
}

_FOOD_RULES = """Required keys: calories, protein, fat, carbs (numbers), items (list of strings), quantities (list).

Quantity rules:
- Extract every amount and unit mentioned, e.g. "3 tortillas" -> {"item": "corn tortillas", "amount": 3, "unit": "tortillas"}
- Weights keep their exact number, e.g. "106g chicken" -> {"item": "chicken", "amount": 106, "unit": "grams"}
- Volumes use standard units, e.g. "1 cup rice" -> {"item": "rice", "amount": 1, "unit": "cup"}
- Every entry in "items" needs a quantities entry with the same item name
- If no quantity is given, estimate a reasonable serving in grams
- Use units such as "grams", "cups", "tablespoons", "ounces", "pieces", "slices"

Calorie rules (estimates are temporary and will be replaced by database values):
- Be conservative; underestimate rather than overestimate
- Rough guides per 100g: chicken breast 165, cheese 400, rice 130, vegetables 20-50, tortillas 220, bread 250
- A normal meal rarely exceeds 800-1000 calories
- All numbers must be integers and the macros are totals for the whole meal"""

_EXERCISE_RULES = """Required keys: exercise_name (lowercase string), exercise_type ("cardio" or "strength").

Rules:
- Running, cycling, swimming, rowing and similar are "cardio": include duration_minutes, distance in miles if mentioned, and calories_burned
- Weights and bodyweight movements are "strength": include sets, reps, weight in pounds if mentioned, and calories_burned
- Default to 3 sets if not specified
- sets and reps are integers; weight, duration_minutes, distance and calories_burned are numbers
- Estimate calories_burned from the activity and its intensity
- If several exercises are mentioned, return the first one"""

_OUTPUT_RULES = "Return JSON only: no prose, no explanations, no code fences."

_CODE_FENCE = re.compile(r"```(?:json)?\s*|\s*```")

_logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Interface for a text completion model."""

    async def complete(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Return the model's reply text."""


@dataclass
class ExtractionService:
    """Prompts the completion model and enriches its structured output."""

    completion_client: CompletionClient | None
    nutrition_service: NutritionService
    exercise_lookup: ExerciseLookupService
    model: str = "gpt-4o-mini"
    max_tokens: int = 400
    temperature: float = 0.1
    default_body_weight_kg: float = DEFAULT_BODY_WEIGHT_KG

    async def extract(
        self,
        text: str,
        record_type: ExtractionType,
        body_weight_kg: float | None = None,
    ) -> ExtractedRecord:
        """Extract a food or exercise record from free text.

        Raises ConfigError when the model cannot be called, FormatError when
        its reply is not JSON and SchemaError when the JSON has the wrong shape.
        """
        user_prompt = build_prompt(text, record_type)
        content = await self._call_model(user_prompt)
        payload = parse_json_payload(content)
        if record_type == "food":
            food = _validate(FoodExtract, payload, content)
            return await self._enrich_food(food)
        exercise = _validate(ExerciseExtract, payload, content)
        return self._enrich_exercise(exercise, body_weight_kg)

    async def _call_model(self, user_prompt: str) -> str:
        if self.completion_client is None:
            raise ConfigError("OpenAI API key not configured")
        return await self.completion_client.complete(
            model=self.model,
            system_prompt=SYSTEM_PROMPT,
            user_prompt=user_prompt,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )

    async def _enrich_food(self, food: FoodExtract) -> ParsedFood:
        quantities = [
            UnitQuantity(item=entry.item, amount=entry.amount, unit=entry.unit)
            for entry in food.quantities or []
        ]
        try:
            results = await self.nutrition_service.lookup_many(food.items, quantities)
        except LookupUnavailable:
            _logger.warning("Nutrition lookup unavailable, keeping AI estimate")
            results = []

        resolved = [result for result in results if _is_resolved(result)]
        if resolved:
            totals = sum_macros(result.nutrients for result in resolved)
            source = _food_source(resolved)
            warning = exceeds_database_threshold(totals.calories)
            if warning:
                _logger.warning(
                    "High calorie total from database: %s for %s",
                    totals.calories,
                    food.items,
                )
        else:
            estimate = MacroTotals(
                calories=round_half_up(food.calories),
                protein=round_half_up(food.protein),
                fat=round_half_up(food.fat),
                carbs=round_half_up(food.carbs),
            )
            totals, warning = clamp_ai_estimate(estimate)
            source = "AI_ESTIMATE"

        _logger.info(
            "Food extraction: items=%s source=%s calories=%s",
            food.items,
            source,
            totals.calories,
        )
        return ParsedFood(
            items=list(food.items),
            quantities=quantities,
            calories=totals.calories,
            protein=totals.protein,
            fat=totals.fat,
            carbs=totals.carbs,
            source=source,
            calorie_warning=warning,
        )

    def _enrich_exercise(
        self, exercise: ExerciseExtract, body_weight_kg: float | None
    ) -> ParsedExercise:
        sets = exercise.sets
        if exercise.exercise_type == "strength" and sets is None:
            sets = DEFAULT_STRENGTH_SETS
        try:
            met = self.exercise_lookup.lookup(
                exercise.exercise_name,
                duration_minutes=exercise.duration_minutes,
                weight_kg=body_weight_kg or self.default_body_weight_kg,
            )
        except LookupUnavailable:
            _logger.warning("MET lookup unavailable, keeping AI estimate")
            met = MetLookup(found=False)

        if met.exercise and met.exercise.calories_burned is not None:
            calories: float | None = met.exercise.calories_burned
            source = "MET_DATABASE"
        else:
            calories = exercise.calories_burned
            source = "AI_ESTIMATE"

        _logger.info(
            "Exercise extraction: name=%s type=%s source=%s calories=%s",
            exercise.exercise_name,
            exercise.exercise_type,
            source,
            calories,
        )
        return ParsedExercise(
            exercise_name=exercise.exercise_name.strip().lower(),
            exercise_type=exercise.exercise_type,
            source=source,
            sets=sets,
            reps=exercise.reps,
            weight=exercise.weight,
            duration_minutes=exercise.duration_minutes,
            distance=exercise.distance,
            calories_burned=calories,
        )


def build_prompt(text: str, record_type: ExtractionType) -> str:
    """Build the user prompt for a record type."""
    if record_type == "food":
        kind, example, rules = "food", FOOD_EXAMPLE, _FOOD_RULES
    elif record_type == "exercise":
        kind, example, rules = "exercise", EXERCISE_EXAMPLE, _EXERCISE_RULES
    else:
        raise ValueError(f"Unsupported extraction type: {record_type!r}")
    return (
        f"Parse this {kind} description into valid JSON with this exact format: "
        f"{json.dumps(example)}\n\n{rules}\n\nInput: {json.dumps(text)}\n\n"
        f"{_OUTPUT_RULES}"
    )


def parse_json_payload(content: str) -> dict[str, object]:
    """Strip code fences from a model reply and decode the JSON object."""
    cleaned = _CODE_FENCE.sub("", content or "").strip()
    if not cleaned:
        raise FormatError("No response from AI", raw_content=content)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise FormatError(
            f"Failed to parse AI response: {content}", raw_content=content
        ) from exc
    if not isinstance(payload, dict):
        raise SchemaError("AI response is not a JSON object", raw_content=content)
    return payload


def _validate(
    model: type[ModelT], payload: dict[str, object], content: str
) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) for error in exc.errors()
        )
        raise SchemaError(
            f"Invalid {model.__name__} structure returned (fields: {fields})",
            raw_content=content,
        ) from exc


def _is_resolved(result: FoodLookupResult) -> bool:
    return result.nutrients is not None and result.source in {"USDA", "FALLBACK_DB"}


def _food_source(resolved: list[FoodLookupResult]) -> str:
    has_usda = any(result.source == "USDA" for result in resolved)
    has_fallback = any(result.source == "FALLBACK_DB" for result in resolved)
    if has_usda and has_fallback:
        return "USDA+FALLBACK"
    if has_usda:
        return "USDA"
    return "FALLBACK_DB"
