"""Tests for the keyword category classifier."""

from __future__ import annotations

import pytest

from larder.models.inventory import GROCERY_CATEGORIES
from larder.ocr import classify_category
from larder.ocr.categories import CATEGORY_KEYWORDS


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Apples", "Fresh Produce"),
        ("Organic Spinach", "Fresh Produce"),
        ("Cheddar Cheese", "Dairy & Eggs"),
        ("Chicken Thighs", "Meat & Seafood"),
        ("Peanut Butter", "Pantry Staples"),
        ("Whole Wheat Bread", "Bakery"),
        ("Sparkling Water", "Beverages"),
        ("Vanilla Ice Cream", "Frozen Foods"),
        ("Popcorn", "Snacks"),
        ("Aluminum Foil", "Household"),
        ("Shampoo", "Personal Care"),
        ("Mystery Item", "Pantry Staples"),
    ],
)
def test_classify_category(name, expected):
    assert classify_category(name) == expected


def test_keyword_categories_are_known_grocery_categories():
    assert {category for category, _ in CATEGORY_KEYWORDS} <= set(GROCERY_CATEGORIES)


@pytest.mark.parametrize(
    ("name", "expected"),
    [("Green Tea", "Beverages"), ("Green Beans", "Fresh Produce"), ("Green Onions", "Fresh Produce")],
)
def test_green_only_counts_as_produce_in_phrases(name, expected):
    assert classify_category(name) == expected
