"""Keyword-based grocery category classifier."""

from __future__ import annotations

import re
from typing import Pattern

from larder.models.inventory import DEFAULT_CATEGORY

# Keywords are regex fragments matched as whole words (plural suffixes allowed).
# Checked in order; multi-word phrases across every category are tried first.
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "Fresh Produce",
        (
            "apple", "banana", "orange", "grape", r"\w*berr(?:y|ie)", "fruit",
            "lettuce", "spinach", "carrot", "tomato", "cucumber", "pepper",
            "onion", "potato", "broccoli", "avocado", "lemon", "lime", "celery",
            "garlic", "mushroom", "kale", "zucchini", "cabbage", "cilantro",
            "parsley", "ginger", "mango", "pear", "peach", "melon", "squash",
            "cauliflower", "green bean", "green onion", "salad", "herb", "cherr(?:y|ie)",
            "produce",
        ),
    ),
    (
        "Dairy & Eggs",
        ("milk", "cheese", "yogurt", "yoghurt", "butter", "cream", "egg", "kefir", "margarine"),
    ),
    (
        "Meat & Seafood",
        (
            "chicken", "beef", "pork", "fish", "salmon", "tuna", "shrimp", "meat",
            "turkey", "bacon", "sausage", "ham", "steak", "lamb", "cod", "tilapia",
            "prawn", "wiener", "breast", "thigh",
        ),
    ),
    (
        "Pantry Staples",
        (
            "rice", "pasta", "flour", "sugar", "salt", "oil", "vinegar", "sauce",
            "spice", "bean", "lentil", "oat", "cereal", "soup", "noodle", "honey",
            "syrup", "ketchup", "mustard", "mayo", "peanut butter", "jam", "stock",
            "broth", "spaghetti",
        ),
    ),
    (
        "Bakery",
        ("bread", "bagel", "muffin", "croissant", "cake", "cookie", "bun", "roll", "tortilla", "pita"),
    ),
    (
        "Beverages",
        ("juice", "soda", "water", "coffee", "tea", "beer", "wine", "drink", "pop", "kombucha"),
    ),
    ("Frozen Foods", ("frozen", "ice cream", "pizza", "popsicle", "fries")),
    (
        "Snacks",
        ("chip", "cracker", "nut", "candy", "chocolate", "pretzel", "popcorn", "granola bar"),
    ),
    (
        "Household",
        ("detergent", "soap", "paper towel", "toilet paper", "tissue", "foil", "trash bag"),
    ),
    (
        "Personal Care",
        ("shampoo", "toothpaste", "deodorant", "lotion", "diaper", "wipe", "razor"),
    ),
)


def _compile(keywords: tuple[str, ...]) -> Pattern[str] | None:
    if not keywords:
        return None
    alternatives = "|".join(keywords)
    return re.compile(rf"\b(?:{alternatives})(?:s|es)?\b", re.IGNORECASE)


_PHRASE_PATTERNS: list[tuple[str, Pattern[str]]] = []
_WORD_PATTERNS: list[tuple[str, Pattern[str]]] = []
for _category, _keywords in CATEGORY_KEYWORDS:
    _phrases = _compile(tuple(keyword for keyword in _keywords if " " in keyword))
    _words = _compile(tuple(keyword for keyword in _keywords if " " not in keyword))
    if _phrases is not None:
        _PHRASE_PATTERNS.append((_category, _phrases))
    if _words is not None:
        _WORD_PATTERNS.append((_category, _words))


def classify_category(name: str) -> str:
    """Return the grocery category for ``name`` (defaults to pantry staples)."""

    for category, pattern in _PHRASE_PATTERNS:
        if pattern.search(name):
            return category
    for category, pattern in _WORD_PATTERNS:
        if pattern.search(name):
            return category
    return DEFAULT_CATEGORY


__all__ = ["CATEGORY_KEYWORDS", "classify_category"]
