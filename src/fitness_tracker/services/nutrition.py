"""Nutrition lookups against USDA FDC with a local fallback table."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from fitness_tracker.adapters.fdc_client import FdcClient
from fitness_tracker.domain.nutrition import (
    FoodLookupResult,
    FoodMatch,
    MacroProfile,
    UnitQuantity,
)
from fitness_tracker.errors import LookupUnavailable
from fitness_tracker.services.cache import Cache
from fitness_tracker.services.fallback_foods import lookup_fallback
from fitness_tracker.services.metrics import scale_macros
from fitness_tracker.services.units import serving_multiplier

_NUTRIENT_IDS = {
    "calories": 1008,
    "protein": 1003,
    "fat": 1004,
    "carbs": 1005,
}

_NO_MATCH = object()

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Resolves meal items to scaled macros, preferring USDA data."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    miss_ttl_seconds: int = 300
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str) -> FoodMatch | None:
        """Return the first FDC hit for a query, cached by query text.

        Misses are cached for a shorter time than hits. A hit that cannot be
        read raises LookupUnavailable like a failed call.
        """
        cache_key = f"fdc:search:{query.lower()}"
        cached = self.cache.get(cache_key)
        if cached is _NO_MATCH:
            return None
        if isinstance(cached, FoodMatch):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(query, page_size=1),
            action=f"search:{query}",
        )
        try:
            foods = payload.get("foods") or []
            match = _food_match(foods[0]) if foods else None
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            _logger.warning("Malformed FDC search hit for %r: %r", query, exc)
            raise LookupUnavailable(
                f"FDC search:{query} returned a malformed hit: {exc!r}"
            ) from exc

        if match is None:
            self.cache.set(cache_key, _NO_MATCH, ttl_seconds=self.miss_ttl_seconds)
            return None
        self.cache.set(cache_key, match, ttl_seconds=self.search_ttl_seconds)
        return match

    async def lookup(
        self, item: str, quantity: UnitQuantity | None = None
    ) -> FoodLookupResult:
        """Resolve one item, falling back to the local table per item."""
        multiplier = (
            serving_multiplier(quantity.amount, quantity.unit) if quantity else 1.0
        )
        try:
            match = await self.search(item)
        except LookupUnavailable:
            _logger.warning("USDA lookup failed for %r, trying fallback table", item)
            return _fallback_result(item, multiplier, miss_source="ERROR")

        if match is None:
            _logger.info("No USDA data for %r, trying fallback table", item)
            return _fallback_result(item, multiplier, miss_source="NOT_FOUND")

        _logger.info(
            "USDA match for %r: %s (fdc_id=%s, multiplier=%s)",
            item,
            match.description,
            match.fdc_id,
            multiplier,
        )
        return FoodLookupResult(
            item=item,
            nutrients=scale_macros(match.macros, multiplier),
            source="USDA",
        )

    async def lookup_many(
        self,
        items: Sequence[str],
        quantities: Sequence[UnitQuantity] | None = None,
    ) -> list[FoodLookupResult]:
        """Resolve every item concurrently; results keep the input order."""
        return list(
            await asyncio.gather(
                *(
                    self.lookup(item, find_quantity(item, quantities or []))
                    for item in items
                )
            )
        )

    async def _call_with_retry(
        self, func: Callable[[], Awaitable[dict[str, object]]], *, action: str
    ) -> dict[str, object]:
        """Call an FDC endpoint, retrying briefly before giving up."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Nutrition %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise LookupUnavailable(f"FDC {action} failed: {exc}") from exc
                await asyncio.sleep(self.retry_delay_seconds)


def find_quantity(
    item: str, quantities: Sequence[UnitQuantity]
) -> UnitQuantity | None:
    """Match a quantity to its item by name rather than by position."""
    wanted = item.strip().lower()
    for quantity in quantities:
        if quantity.item.strip().lower() == wanted:
            return quantity
    return None


def _fallback_result(
    item: str, multiplier: float, *, miss_source: str
) -> FoodLookupResult:
    per_100g = lookup_fallback(item)
    if per_100g is None:
        _logger.info("No fallback data for %r", item)
        return FoodLookupResult(item=item, nutrients=None, source=miss_source)
    return FoodLookupResult(
        item=item,
        nutrients=scale_macros(per_100g, multiplier),
        source="FALLBACK_DB",
    )


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _food_match(food: dict[str, object]) -> FoodMatch:
    return FoodMatch(
        fdc_id=int(food["fdcId"]),
        description=str(food.get("description", "")),
        data_type=food.get("dataType"),
        macros=_extract_macros(food.get("foodNutrients") or []),
    )


def _extract_macros(food_nutrients: list[dict[str, object]]) -> MacroProfile:
    """Read energy, protein, fat and carbs from FDC nutrient entries.

    Search hits use nutrientId/value; full food records nest the id under
    "nutrient" and use "amount".
    """
    values = dict.fromkeys(_NUTRIENT_IDS, 0.0)
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient.get("nutrientId") or nutrient_info.get("id")
        amount = nutrient.get("value", nutrient.get("amount"))
        if amount is None:
            continue
        for name, wanted_id in _NUTRIENT_IDS.items():
            if nutrient_id == wanted_id:
                values[name] = float(amount)
    return MacroProfile(
        calories=values["calories"],
        protein_g=values["protein"],
        fat_g=values["fat"],
        carbs_g=values["carbs"],
    )
