"""Time-bounded inventory snapshot shared by matcher calls."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence

from larder import metrics
from larder.models.inventory import InventoryItem

logger = logging.getLogger(__name__)

InventoryFetcher = Callable[[], Awaitable[Sequence[InventoryItem]]]

DEFAULT_TTL_SECONDS = 60.0


@dataclass(frozen=True)
class InventorySnapshot:
    pantry: tuple[InventoryItem, ...]
    shopping_list: tuple[InventoryItem, ...]
    fetched_at: float

    @property
    def known_names(self) -> list[str]:
        """Pantry then shopping-list names, first spelling wins."""

        seen: set[str] = set()
        names: list[str] = []
        for item in (*self.pantry, *self.shopping_list):
            key = item.name.strip().lower()
            if key and key not in seen:
                seen.add(key)
                names.append(item.name)
        return names


class InventoryCache:
    """Hold the last pantry/shopping-list snapshot and refresh it when stale.

    Concurrent callers racing past an expired snapshot may each trigger a
    refresh; the fetches are idempotent reads so no lock is taken.
    """

    def __init__(
        self,
        fetch_pantry: InventoryFetcher,
        fetch_shopping_list: InventoryFetcher,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetch_pantry = fetch_pantry
        self._fetch_shopping_list = fetch_shopping_list
        self._ttl_seconds = max(0.0, float(ttl_seconds))
        self._clock = clock
        self._snapshot: Optional[InventorySnapshot] = None

    @property
    def snapshot(self) -> Optional[InventorySnapshot]:
        return self._snapshot

    def is_fresh(self) -> bool:
        if self._snapshot is None:
            return False
        return self._clock() - self._snapshot.fetched_at < self._ttl_seconds

    async def get_or_refresh(self) -> InventorySnapshot:
        if self._snapshot is not None and self.is_fresh():
            return self._snapshot

        now = self._clock()
        pantry, shopping_list = await asyncio.gather(
            self._safe_fetch("pantry", self._fetch_pantry),
            self._safe_fetch("shopping_list", self._fetch_shopping_list),
        )
        self._snapshot = InventorySnapshot(
            pantry=tuple(pantry),
            shopping_list=tuple(shopping_list),
            fetched_at=now,
        )
        metrics.INVENTORY_CACHE_REFRESHES.inc()
        logger.info(
            "Cached %s pantry items and %s shopping list items",
            len(pantry),
            len(shopping_list),
        )
        return self._snapshot

    def invalidate(self) -> None:
        """Force the next ``get_or_refresh`` call to re-fetch both collections."""

        self._snapshot = None

    @staticmethod
    async def _safe_fetch(collection: str, fetch: InventoryFetcher) -> list[InventoryItem]:
        try:
            return list(await fetch())
        except Exception:
            metrics.INVENTORY_FETCH_FAILURES.labels(collection=collection).inc()
            logger.warning("Failed to fetch %s items; matching without them", collection, exc_info=True)
            return []


__all__ = ["DEFAULT_TTL_SECONDS", "InventoryCache", "InventoryFetcher", "InventorySnapshot"]
