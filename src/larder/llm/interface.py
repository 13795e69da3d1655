"""LLM runtime abstraction layer."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence


class InventoryMatchLLM(Protocol):
    """Protocol for LLM backends that map OCR names onto known inventory names."""

    async def match_names(
        self,
        unmatched: Sequence[str],
        known: Sequence[str],
    ) -> dict[str, Optional[str]]:
        """Return OCR name -> exact known name (or None when nothing fits)."""


class NullMatchLLM:
    """Backend used when no LLM is configured; never proposes a match."""

    async def match_names(
        self,
        unmatched: Sequence[str],
        known: Sequence[str],
    ) -> dict[str, Optional[str]]:
        return {}
