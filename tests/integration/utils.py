"""Shared helpers for integration tests."""

from __future__ import annotations

from fastapi import FastAPI

from larder.config import get_settings
from larder.matching import InventoryCache, InventoryMatcher
from larder.server import deps
from tests.helpers import FakeInventory


def auth_headers() -> dict[str, str]:
    token = get_settings().api_token
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


def override_matcher(app: FastAPI, inventory: FakeInventory) -> InventoryMatcher:
    """Route the matcher dependency to one backed by ``inventory``."""

    matcher = InventoryMatcher(InventoryCache(inventory.list_pantry, inventory.list_shopping_list))
    app.dependency_overrides[deps.get_matcher] = lambda: matcher
    return matcher
