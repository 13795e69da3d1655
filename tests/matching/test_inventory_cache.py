"""Tests for the time-bounded inventory cache."""

from __future__ import annotations

import logging

import pytest
from prometheus_client import REGISTRY

from larder.matching import InventoryCache
from tests.helpers import FakeClock, FakeInventory, pantry_item, shopping_item


def _failures(collection: str) -> float:
    value = REGISTRY.get_sample_value(
        "larder_inventory_fetch_failures_total",
        {"collection": collection},
    )
    return value or 0.0


def _cache(inventory: FakeInventory, clock: FakeClock, ttl: float = 60) -> InventoryCache:
    return InventoryCache(
        inventory.list_pantry,
        inventory.list_shopping_list,
        ttl_seconds=ttl,
        clock=clock,
    )


@pytest.mark.asyncio
async def test_snapshot_is_reused_inside_the_window():
    inventory = FakeInventory(pantry=[pantry_item("Milk")])
    clock = FakeClock()
    cache = _cache(inventory, clock)

    first = await cache.get_or_refresh()
    clock.advance(59)
    second = await cache.get_or_refresh()

    assert first is second
    assert inventory.pantry_calls == 1
    assert inventory.shopping_calls == 1


@pytest.mark.asyncio
async def test_snapshot_is_refetched_after_the_window():
    inventory = FakeInventory(pantry=[pantry_item("Milk")])
    clock = FakeClock()
    cache = _cache(inventory, clock)

    await cache.get_or_refresh()
    clock.advance(61)
    inventory.pantry.append(pantry_item("Eggs"))
    snapshot = await cache.get_or_refresh()

    assert inventory.pantry_calls == 2
    assert [item.name for item in snapshot.pantry] == ["Milk", "Eggs"]


@pytest.mark.asyncio
async def test_invalidate_forces_refetch():
    inventory = FakeInventory()
    clock = FakeClock()
    cache = _cache(inventory, clock)

    await cache.get_or_refresh()
    cache.invalidate()
    assert not cache.is_fresh()
    await cache.get_or_refresh()

    assert inventory.pantry_calls == 2
    assert inventory.shopping_calls == 2


@pytest.mark.asyncio
async def test_failed_collection_degrades_to_empty(caplog):
    inventory = FakeInventory(shopping_list=[shopping_item("Bananas")])
    inventory.pantry_error = RuntimeError("pantry API down")
    cache = _cache(inventory, FakeClock())
    before = _failures("pantry")

    with caplog.at_level(logging.WARNING, logger="larder.matching.cache"):
        snapshot = await cache.get_or_refresh()

    assert snapshot.pantry == ()
    assert [item.name for item in snapshot.shopping_list] == ["Bananas"]
    assert _failures("pantry") == before + 1
    assert any("pantry" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_known_names_are_deduplicated_case_insensitively():
    inventory = FakeInventory(
        pantry=[pantry_item("Milk"), pantry_item("Eggs")],
        shopping_list=[shopping_item("milk"), shopping_item("Bread")],
    )
    snapshot = await _cache(inventory, FakeClock()).get_or_refresh()

    assert snapshot.known_names == ["Milk", "Eggs", "Bread"]
