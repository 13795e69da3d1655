"""Pydantic models defining shared data contracts."""

from larder.models.inventory import (
    DEFAULT_CATEGORY,
    GROCERY_CATEGORIES,
    InventoryItem,
    ShoppingListItem,
)
from larder.models.receipt import (
    CandidateLineItem,
    MatchResult,
    MatchSource,
    ReceiptScanResult,
)

__all__ = [
    "DEFAULT_CATEGORY",
    "GROCERY_CATEGORIES",
    "InventoryItem",
    "ShoppingListItem",
    "CandidateLineItem",
    "MatchResult",
    "MatchSource",
    "ReceiptScanResult",
]
