"""Read-only access to the pantry persistence API."""

from .client import InventoryApiClient, build_inventory_client

__all__ = ["InventoryApiClient", "build_inventory_client"]
