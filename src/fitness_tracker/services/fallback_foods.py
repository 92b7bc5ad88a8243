"""Local per-100 g nutrition table used when USDA lookups come back empty."""

import re

from fitness_tracker.domain.nutrition import MacroProfile

# Shortest item accepted when matching an item inside a longer table key.
MIN_REVERSE_MATCH_LENGTH = 4

FALLBACK_NUTRITION: dict[str, MacroProfile] = {
    # Proteins
    "chicken breast": MacroProfile(165, 31, 3.6, 0),
    "chicken": MacroProfile(165, 31, 3.6, 0),
    "grilled chicken": MacroProfile(165, 31, 3.6, 0),
    "chicken thigh": MacroProfile(209, 26, 11, 0),
    "ground turkey": MacroProfile(149, 20, 7, 0),
    "turkey": MacroProfile(149, 20, 7, 0),
    "ground beef": MacroProfile(254, 26, 17, 0),
    "beef": MacroProfile(254, 26, 17, 0),
    "salmon": MacroProfile(208, 25, 12, 0),
    "tuna": MacroProfile(144, 30, 1, 0),
    "eggs": MacroProfile(155, 13, 11, 1),
    "egg": MacroProfile(155, 13, 11, 1),
    # Dairy
    "cottage cheese": MacroProfile(98, 11, 4, 3),
    "4% cottage cheese": MacroProfile(98, 11, 4, 3),
    "cheddar cheese": MacroProfile(403, 25, 33, 1),
    "cheese": MacroProfile(403, 25, 33, 1),
    "milk": MacroProfile(42, 3, 1, 5),
    "almond milk": MacroProfile(15, 0.6, 1.1, 0.6),
    "unsweet almond milk": MacroProfile(15, 0.6, 1.1, 0.6),
    "greek yogurt": MacroProfile(59, 10, 0.4, 3.6),
    # Grains
    "rice": MacroProfile(130, 2.7, 0.3, 28),
    "brown rice": MacroProfile(111, 2.6, 0.9, 23),
    "white rice": MacroProfile(130, 2.7, 0.3, 28),
    "quinoa": MacroProfile(120, 4.4, 1.9, 22),
    "oats": MacroProfile(68, 2.4, 1.4, 12),
    "steel cut oats": MacroProfile(68, 2.4, 1.4, 12),
    "quick steel cut oats": MacroProfile(68, 2.4, 1.4, 12),
    "bread": MacroProfile(265, 9, 3.2, 49),
    "whole wheat bread": MacroProfile(247, 13, 4.2, 41),
    "bagel": MacroProfile(257, 10, 1.5, 50),
    "pasta": MacroProfile(131, 5, 1.1, 25),
    "tortilla": MacroProfile(218, 6, 3.3, 43),
    "corn tortilla": MacroProfile(218, 6, 3.3, 43),
    "tortillas": MacroProfile(218, 6, 3.3, 43),
    # Nuts
    "peanut butter": MacroProfile(588, 25, 50, 20),
    "almonds": MacroProfile(579, 21, 50, 22),
    "walnuts": MacroProfile(654, 15, 65, 14),
    # Fruits
    "banana": MacroProfile(89, 1.1, 0.3, 23),
    "apple": MacroProfile(52, 0.3, 0.2, 14),
    "berries": MacroProfile(57, 0.7, 0.3, 14),
    "blueberries": MacroProfile(57, 0.7, 0.3, 14),
    "strawberries": MacroProfile(32, 0.7, 0.3, 8),
    # Vegetables
    "broccoli": MacroProfile(34, 2.8, 0.4, 7),
    "spinach": MacroProfile(23, 2.9, 0.4, 3.6),
    "carrots": MacroProfile(41, 0.9, 0.2, 10),
    "sweet potato": MacroProfile(86, 1.6, 0.1, 20),
    # Oils
    "olive oil": MacroProfile(884, 0, 100, 0),
    "butter": MacroProfile(717, 0.9, 81, 0.1),
}


def lookup_fallback(item: str) -> MacroProfile | None:
    """Return per-100 g macros for an item name, or None when nothing matches."""
    key = match_fallback_key(item)
    if key is None:
        return None
    return FALLBACK_NUTRITION[key]


def match_fallback_key(item: str) -> str | None:
    """Return the table key an item name resolves to.

    Exact matches win. Otherwise the longest key contained in the item on word
    boundaries is used, e.g. "grilled chicken breast" -> "chicken breast".
    Failing that, an item of at least four characters contained in a key
    resolves to the shortest such key, e.g. "steel cut" -> "steel cut oats".
    """
    name = " ".join(item.lower().split())
    if not name:
        return None
    if name in FALLBACK_NUTRITION:
        return name

    contained = [key for key in FALLBACK_NUTRITION if _contains_words(name, key)]
    if contained:
        return max(contained, key=len)

    if len(name) < MIN_REVERSE_MATCH_LENGTH:
        return None
    containing = [key for key in FALLBACK_NUTRITION if _contains_words(key, name)]
    if containing:
        return min(containing, key=len)
    return None


def _contains_words(text: str, phrase: str) -> bool:
    pattern = rf"(?<![\w%]){re.escape(phrase)}(?![\w%])"
    return re.search(pattern, text) is not None
