"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fitness_tracker.adapters.fdc_client import HttpxFdcClient
from fitness_tracker.adapters.openai_completion_client import OpenAICompletionClient
from fitness_tracker.adapters.supabase_daily_repository import SupabaseDailyRepository
from fitness_tracker.adapters.supabase_entry_repository import SupabaseEntryRepository
from fitness_tracker.adapters.supabase_exercise_repository import (
    SupabaseExerciseRepository,
)
from fitness_tracker.config import Settings
from fitness_tracker.services.cache import TtlCache
from fitness_tracker.services.daily import DailyService
from fitness_tracker.services.entries import EntryService
from fitness_tracker.services.exercise_lookup import ExerciseLookupService
from fitness_tracker.services.extraction import ExtractionService
from fitness_tracker.services.nutrition import NutritionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    nutrition_service: NutritionService
    exercise_lookup: ExerciseLookupService
    extraction_service: ExtractionService
    entry_service: EntryService
    daily_service: DailyService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
        timeout_seconds=resolved_settings.request_timeout_seconds,
    )
    completion_client = None
    if resolved_settings.openai_api_key:
        completion_client = OpenAICompletionClient.create(
            resolved_settings.openai_api_key,
            timeout_seconds=resolved_settings.request_timeout_seconds,
        )
    nutrition_service = NutritionService(fdc_client=fdc_client, cache=TtlCache())
    exercise_lookup = ExerciseLookupService(
        SupabaseExerciseRepository(supabase_client)
    )
    extraction_service = ExtractionService(
        completion_client=completion_client,
        nutrition_service=nutrition_service,
        exercise_lookup=exercise_lookup,
        model=resolved_settings.openai_model,
        max_tokens=resolved_settings.openai_max_tokens,
        temperature=resolved_settings.openai_temperature,
        default_body_weight_kg=resolved_settings.default_body_weight_kg,
    )
    entry_service = EntryService(SupabaseEntryRepository(supabase_client))
    daily_service = DailyService(SupabaseDailyRepository(supabase_client))

    async def close_resources() -> None:
        await fdc_client.close()
        if completion_client is not None:
            await completion_client.close()

    return AppContainer(
        settings=resolved_settings,
        nutrition_service=nutrition_service,
        exercise_lookup=exercise_lookup,
        extraction_service=extraction_service,
        entry_service=entry_service,
        daily_service=daily_service,
        close_resources=close_resources,
    )
