"""Pantry and shopping-list item models."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

GROCERY_CATEGORIES = (
    "Fresh Produce",
    "Dairy & Eggs",
    "Meat & Seafood",
    "Pantry Staples",
    "Bakery",
    "Beverages",
    "Frozen Foods",
    "Snacks",
    "Household",
    "Personal Care",
    "Other",
)

# Most unclassified grocery lines are shelf-stable goods.
DEFAULT_CATEGORY = "Pantry Staples"


class InventoryItem(BaseModel):
    """Item tracked in the household pantry."""

    id: Optional[Union[str, int]] = Field(default=None)
    name: str
    category: str = Field(default="")
    unit: str = Field(default="")
    current_count: float = Field(default=0.0, alias="currentCount")
    min_count: float = Field(default=0.0, alias="minCount")
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")
    notes: Optional[str] = Field(default=None)

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class ShoppingListItem(InventoryItem):
    """Pantry item that has dropped below its minimum count."""

    needed: float = Field(default=0.0)


__all__ = ["DEFAULT_CATEGORY", "GROCERY_CATEGORIES", "InventoryItem", "ShoppingListItem"]
