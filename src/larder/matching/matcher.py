"""Resolve segmented receipt candidates against the household inventory."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from larder import metrics
from larder.llm.interface import InventoryMatchLLM
from larder.matching.cache import InventoryCache, InventorySnapshot
from larder.matching.corrections import apply_ocr_corrections
from larder.matching.similarity import ScoredItem, find_best_match
from larder.models.inventory import InventoryItem
from larder.models.receipt import CandidateLineItem, MatchResult, ReceiptScanResult
from larder.ocr.segmenter import segment_receipt

logger = logging.getLogger(__name__)

DEFAULT_MATCH_THRESHOLD = 60.0
AI_MATCH_CONFIDENCE = 85.0
CORRECTED_CONFIDENCE = 50.0
DEFAULT_LLM_TIMEOUT = 30.0

NOTHING_RECOGNIZED_MESSAGE = (
    "No items found in receipt. Please try a clearer image or add items manually."
)


class InventoryMatcher:
    """Fuzzy-match candidates against pantry and shopping-list items.

    Every candidate yields exactly one ``MatchResult`` in input order. Items
    that clear the similarity threshold take the inventory item's name, unit
    and category. The rest stay ``ocr-only`` and may be upgraded by the
    optional LLM pass or cleaned by the static correction table.
    """

    def __init__(
        self,
        cache: InventoryCache,
        *,
        llm_client: Optional[InventoryMatchLLM] = None,
        threshold: float = DEFAULT_MATCH_THRESHOLD,
        llm_timeout: float = DEFAULT_LLM_TIMEOUT,
    ) -> None:
        self._cache = cache
        self._llm_client = llm_client
        self._threshold = threshold
        self._llm_timeout = llm_timeout

    @property
    def cache(self) -> InventoryCache:
        return self._cache

    def invalidate_cache(self) -> None:
        """Call after inventory writes so the next match sees fresh data."""

        self._cache.invalidate()

    async def match(self, candidates: Sequence[CandidateLineItem]) -> List[MatchResult]:
        if not candidates:
            return []

        snapshot = await self._cache.get_or_refresh()
        logger.debug(
            "Matching %s candidates against %s pantry and %s shopping list items",
            len(candidates),
            len(snapshot.pantry),
            len(snapshot.shopping_list),
        )

        results: List[MatchResult] = []
        unmatched: List[int] = []
        for index, candidate in enumerate(candidates):
            result = self._fuzzy_match(candidate, snapshot)
            if result.source == "ocr-only":
                unmatched.append(index)
            results.append(result)

        if unmatched and self._llm_client is not None:
            await self._apply_llm_matches(candidates, results, unmatched, snapshot)

        for index, result in enumerate(results):
            if result.source == "ocr-only":
                results[index] = self._apply_corrections(result)

        for result in results:
            metrics.MATCH_RESULTS.labels(source=result.source).inc()
        return results

    def _fuzzy_match(self, candidate: CandidateLineItem, snapshot: InventorySnapshot) -> MatchResult:
        pantry_match = find_best_match(candidate.name, snapshot.pantry)
        shopping_match = find_best_match(candidate.name, snapshot.shopping_list)

        best: Optional[ScoredItem] = pantry_match
        source = "pantry"
        if shopping_match is not None and (
            pantry_match is None or shopping_match.score > pantry_match.score
        ):
            best = shopping_match
            source = "shopping-list"

        if best is not None and best.score >= self._threshold:
            logger.debug(
                "Fuzzy matched %r -> %r (%.0f, %s)",
                candidate.name,
                best.item.name,
                best.score,
                source,
            )
            return self._from_inventory(candidate, best.item, best.score, source)

        return MatchResult(
            name=candidate.name,
            quantity=candidate.quantity,
            unit=candidate.unit,
            category=candidate.category,
            confidence=best.score if best is not None else 0.0,
            source="ocr-only",
        )

    @staticmethod
    def _from_inventory(
        candidate: CandidateLineItem,
        item: InventoryItem,
        confidence: float,
        source: str,
    ) -> MatchResult:
        return MatchResult(
            name=item.name,
            quantity=candidate.quantity,
            unit=item.unit or candidate.unit,
            category=item.category or candidate.category,
            confidence=min(100.0, max(0.0, confidence)),
            source=source,
            original_name=candidate.name if candidate.name != item.name else None,
        )

    async def _apply_llm_matches(
        self,
        candidates: Sequence[CandidateLineItem],
        results: List[MatchResult],
        unmatched: Sequence[int],
        snapshot: InventorySnapshot,
    ) -> None:
        known_names = snapshot.known_names
        if not known_names:
            return

        unmatched_names = list(dict.fromkeys(candidates[index].name for index in unmatched))
        try:
            mapping = await asyncio.wait_for(
                self._llm_client.match_names(unmatched_names, known_names),
                timeout=self._llm_timeout,
            )
        except Exception:
            metrics.MATCH_LLM_REQUESTS.labels(status="failed").inc()
            logger.warning("LLM matching pass failed; keeping fuzzy results", exc_info=True)
            return
        metrics.MATCH_LLM_REQUESTS.labels(status="ok").inc()

        by_name: dict[str, InventoryItem] = {}
        for item in (*snapshot.pantry, *snapshot.shopping_list):
            by_name.setdefault(item.name.strip().lower(), item)

        for index in unmatched:
            candidate = candidates[index]
            proposed = mapping.get(candidate.name)
            if not proposed:
                continue
            item = by_name.get(proposed.strip().lower())
            if item is None:
                logger.debug("LLM proposed unknown inventory name %r", proposed)
                continue
            results[index] = self._from_inventory(candidate, item, AI_MATCH_CONFIDENCE, "ai-matched")

    @staticmethod
    def _apply_corrections(result: MatchResult) -> MatchResult:
        corrected = apply_ocr_corrections(result.name)
        if not corrected or corrected == result.name:
            return result
        return result.model_copy(
            update={
                "name": corrected,
                "confidence": CORRECTED_CONFIDENCE,
                "original_name": result.name,
            }
        )


async def scan_receipt(
    text: str,
    matcher: InventoryMatcher,
    store_hint: Optional[str] = None,
) -> ReceiptScanResult:
    """Segment receipt text and match every candidate against the inventory."""

    layout, candidates = segment_receipt(text, store_hint)
    if not candidates:
        return ReceiptScanResult(
            layout=layout.value,
            candidates_found=0,
            items=[],
            message=NOTHING_RECOGNIZED_MESSAGE,
        )
    items = await matcher.match(candidates)
    return ReceiptScanResult(layout=layout.value, candidates_found=len(candidates), items=items)


__all__ = [
    "AI_MATCH_CONFIDENCE",
    "CORRECTED_CONFIDENCE",
    "DEFAULT_MATCH_THRESHOLD",
    "InventoryMatcher",
    "NOTHING_RECOGNIZED_MESSAGE",
    "scan_receipt",
]
