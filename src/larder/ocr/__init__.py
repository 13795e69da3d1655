"""Receipt text segmentation utilities."""

from .categories import classify_category
from .segmenter import (
    GenericSegmenter,
    ReceiptLayout,
    ReceiptSegmenter,
    SuperstoreSegmenter,
    detect_layout,
    get_segmenter,
    segment_receipt,
)

__all__ = [
    "GenericSegmenter",
    "ReceiptLayout",
    "ReceiptSegmenter",
    "SuperstoreSegmenter",
    "classify_category",
    "detect_layout",
    "get_segmenter",
    "segment_receipt",
]
