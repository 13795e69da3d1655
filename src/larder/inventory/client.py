"""HTTP client for the pantry and shopping-list collections."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from larder.config import Settings, get_settings
from larder.models.inventory import InventoryItem, ShoppingListItem

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT", bound=InventoryItem)


class InventoryApiClient:
    """Minimal async wrapper around the pantry API (``/groceries``, ``/shopping-list``)."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def list_pantry(self) -> List[InventoryItem]:
        return await self._list("groceries", InventoryItem)

    async def list_shopping_list(self) -> List[ShoppingListItem]:
        return await self._list("shopping-list", ShoppingListItem)

    async def _list(self, path: str, model: Type[ItemT]) -> List[ItemT]:
        endpoint = f"{self._base_url}/{path}"
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.get(endpoint, headers={"Accept": "application/json"})
        response.raise_for_status()

        payload: Any = response.json()
        if isinstance(payload, dict):
            payload = payload.get("items", [])
        if not isinstance(payload, list):
            raise ValueError(f"Unexpected {path} payload type: {type(payload).__name__}")

        items: List[ItemT] = []
        for record in payload:
            try:
                items.append(model.model_validate(record))
            except ValidationError:
                logger.debug("Skipping invalid %s record: %r", path, record)
        return items


def build_inventory_client(settings: Optional[Settings] = None) -> InventoryApiClient:
    settings = settings or get_settings()
    return InventoryApiClient(settings.inventory_base_url, timeout=settings.inventory_timeout)


__all__ = ["InventoryApiClient", "build_inventory_client"]
