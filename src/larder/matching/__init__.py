"""Inventory matching: similarity scoring, corrections, cache and matcher."""

from .cache import InventoryCache, InventorySnapshot
from .corrections import OCR_CORRECTIONS, apply_ocr_corrections
from .matcher import NOTHING_RECOGNIZED_MESSAGE, InventoryMatcher, scan_receipt
from .similarity import ScoredItem, calculate_similarity, find_best_match, normalize_name

__all__ = [
    "InventoryCache",
    "InventoryMatcher",
    "InventorySnapshot",
    "NOTHING_RECOGNIZED_MESSAGE",
    "OCR_CORRECTIONS",
    "ScoredItem",
    "apply_ocr_corrections",
    "calculate_similarity",
    "find_best_match",
    "normalize_name",
    "scan_receipt",
]
