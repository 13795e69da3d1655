"""Integration tests for receipt segmentation and scanning endpoints."""

from __future__ import annotations

from fastapi import status

from larder.matching import NOTHING_RECOGNIZED_MESSAGE
from tests.helpers import FakeInventory, pantry_item
from tests.integration.utils import auth_headers, override_matcher


def test_healthz(client):
    response = client.get("/healthz")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "ok"


def test_segment_returns_candidates(client):
    response = client.post("/receipts/segment", json={"text": "2 lbs apples $4.50\nVISA"})
    assert response.status_code == status.HTTP_200_OK
    payload = response.json()
    assert payload["layout"] == "generic"
    assert payload["items"] == [
        {"name": "Apples", "quantity": 2.0, "unit": "lbs", "category": "Fresh Produce"}
    ]


def test_segment_uses_store_hint(client):
    response = client.post(
        "/receipts/segment",
        json={"text": "22-DAIRY\n06820000451 PC MLK 2% 4L 5.49", "store_hint": "superstore"},
    )
    assert response.status_code == status.HTTP_200_OK
    payload = response.json()
    assert payload["layout"] == "superstore"
    assert payload["items"][0]["name"] == "PC Milk 2% 4L"
    assert payload["items"][0]["category"] == "Dairy & Eggs"


def test_segment_rejects_missing_text(client):
    response = client.post("/receipts/segment", json={"store_hint": "superstore"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    detail = response.json()["detail"]
    assert detail[0]["loc"][-1] == "text"


def test_scan_matches_against_inventory(app, client):
    inventory = FakeInventory(pantry=[pantry_item("Peanut Butter", unit="jar")])
    override_matcher(app, inventory)

    response = client.post(
        "/receipts/scan",
        json={"text": "aarut butler $5.99\n2 lbs apples $4.50\nTOTAL 10.49"},
        headers=auth_headers(),
    )
    assert response.status_code == status.HTTP_200_OK
    payload = response.json()
    assert payload["candidates_found"] == 2
    assert payload["message"] is None
    first, second = payload["items"]
    assert first["name"] == "Peanut Butter"
    assert first["source"] == "pantry"
    assert first["originalName"] == "Aarut Butler"
    assert first["unit"] == "jar"
    assert second["name"] == "Apples"
    assert second["source"] == "ocr-only"


def test_scan_reports_nothing_recognized(app, client):
    override_matcher(app, FakeInventory())

    response = client.post("/receipts/scan", json={"text": "SUBTOTAL 4.99\nTOTAL 4.99"})
    assert response.status_code == status.HTTP_200_OK
    payload = response.json()
    assert payload["items"] == []
    assert payload["message"] == NOTHING_RECOGNIZED_MESSAGE


def test_match_endpoint_and_cache_invalidation(app, client):
    inventory = FakeInventory(pantry=[pantry_item("Milk", category="Dairy & Eggs", unit="L")])
    override_matcher(app, inventory)
    body = {"items": [{"name": "MILK", "quantity": 2}, {"name": "Zzzz Qqqq"}]}

    response = client.post("/matcher/match", json=body)
    assert response.status_code == status.HTTP_200_OK
    results = response.json()
    assert [result["source"] for result in results] == ["pantry", "ocr-only"]
    assert results[0]["quantity"] == 2
    assert results[0]["originalName"] == "MILK"

    client.post("/matcher/match", json=body)
    assert inventory.pantry_calls == 1

    response = client.post("/matcher/cache/invalidate")
    assert response.status_code == status.HTTP_204_NO_CONTENT
    client.post("/matcher/match", json=body)
    assert inventory.pantry_calls == 2


def test_match_endpoint_rejects_blank_names(app, client):
    override_matcher(app, FakeInventory())

    response = client.post("/matcher/match", json={"items": [{"name": "   "}]})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
