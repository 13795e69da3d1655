"""Shared pytest fixtures for the Larder test suite."""

from __future__ import annotations

from typing import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from larder.config import get_settings
from larder.matching import InventoryCache, InventoryMatcher
from larder.server.app import create_app
from larder.server.deps import reset_matcher
from tests.helpers import FakeClock, FakeInventory, pantry_item, shopping_item

_SETTINGS_ENV = (
    "LARDER_API_TOKEN",
    "LARDER_LOG_LEVEL",
    "LARDER_LOG_FORMAT",
    "LARDER_LOG_REQUESTS",
    "LARDER_INVENTORY_BASE_URL",
    "LARDER_INVENTORY_TIMEOUT",
    "LARDER_CACHE_TTL",
    "LARDER_MATCH_THRESHOLD",
    "LARDER_MATCHER_LLM_ENABLED",
    "LARDER_MATCHER_LLM_BASE_URL",
    "LARDER_MATCHER_LLM_MODEL",
    "LARDER_MATCHER_LLM_PROVIDER",
    "LARDER_MATCHER_LLM_TEMPERATURE",
    "LARDER_MATCHER_LLM_MAX_TOKENS",
    "LARDER_MATCHER_LLM_TIMEOUT",
    "LARDER_OPENAI_API_KEY",
    "OPENAI_API_KEY",
)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Ensure each test sees default settings, no .env files and a fresh matcher."""

    for key in _SETTINGS_ENV:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    reset_matcher()
    yield
    reset_matcher()
    get_settings.cache_clear()


@pytest.fixture()
def app() -> Generator[FastAPI, None, None]:
    """Create a new FastAPI app instance for each test and reset overrides."""

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    """Return a test client bound to the FastAPI app."""

    return TestClient(app)


@pytest.fixture()
def fake_inventory() -> FakeInventory:
    return FakeInventory(
        pantry=[
            pantry_item("Peanut Butter", unit="jar"),
            pantry_item("Milk", category="Dairy & Eggs", unit="L"),
            pantry_item("Bread (Whole Wheat, Sliced)", category="Bakery", unit="loaf"),
        ],
        shopping_list=[
            shopping_item("Bananas", category="Fresh Produce", unit="bunch"),
        ],
    )


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def make_matcher(fake_inventory, fake_clock) -> Callable[..., InventoryMatcher]:
    """Build matchers over the fake inventory with a controllable clock."""

    def _factory(**kwargs) -> InventoryMatcher:
        cache = InventoryCache(
            fake_inventory.list_pantry,
            fake_inventory.list_shopping_list,
            ttl_seconds=60,
            clock=fake_clock,
        )
        return InventoryMatcher(cache, **kwargs)

    return _factory
