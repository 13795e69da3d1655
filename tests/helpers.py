"""Test doubles shared across the matcher, cache and endpoint tests."""

from __future__ import annotations

from typing import List, Optional, Sequence

from larder.models.inventory import InventoryItem, ShoppingListItem


class FakeInventory:
    """In-memory pantry/shopping-list source that counts fetches."""

    def __init__(
        self,
        pantry: Sequence[InventoryItem] = (),
        shopping_list: Sequence[InventoryItem] = (),
    ) -> None:
        self.pantry: List[InventoryItem] = list(pantry)
        self.shopping_list: List[InventoryItem] = list(shopping_list)
        self.pantry_calls = 0
        self.shopping_calls = 0
        self.pantry_error: Optional[Exception] = None
        self.shopping_error: Optional[Exception] = None

    async def list_pantry(self) -> List[InventoryItem]:
        self.pantry_calls += 1
        if self.pantry_error is not None:
            raise self.pantry_error
        return list(self.pantry)

    async def list_shopping_list(self) -> List[InventoryItem]:
        self.shopping_calls += 1
        if self.shopping_error is not None:
            raise self.shopping_error
        return list(self.shopping_list)


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubMatchLLM:
    """Records calls and returns a canned mapping (or raises)."""

    def __init__(self, mapping: Optional[dict] = None, error: Optional[Exception] = None) -> None:
        self.mapping = mapping or {}
        self.error = error
        self.calls: list[tuple[list[str], list[str]]] = []

    async def match_names(self, unmatched, known):
        self.calls.append((list(unmatched), list(known)))
        if self.error is not None:
            raise self.error
        return dict(self.mapping)


def pantry_item(name: str, category: str = "Pantry Staples", unit: str = "units") -> InventoryItem:
    return InventoryItem(name=name, category=category, unit=unit, currentCount=1, minCount=1)


def shopping_item(name: str, category: str = "Pantry Staples", unit: str = "units") -> ShoppingListItem:
    return ShoppingListItem(name=name, category=category, unit=unit, needed=1)
