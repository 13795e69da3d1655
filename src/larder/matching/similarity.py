"""Name normalization and fuzzy similarity scoring for inventory matching."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional, Pattern, Sequence

from rapidfuzz.distance import Levenshtein

from larder.models.inventory import InventoryItem

# Applied in order after punctuation stripping. Replacements never produce a
# token that another entry rewrites, which keeps normalization idempotent.
OCR_NAME_FIXES: tuple[tuple[Pattern[str], str], ...] = tuple(
    (re.compile(pattern), replacement)
    for pattern, replacement in (
        (r"\boats?\b", "oats"),
        (r"\bbutler\b", "butter"),
        (r"\baarut\b", "peanut"),
        (r"\bquik\b", "quick"),
        (r"\bolve\b", "olive"),
        (r"\bvnegar\b", "vinegar"),
        (r"\bvinager\b", "vinegar"),
        (r"\bchiken\b", "chicken"),
        (r"\bchicen\b", "chicken"),
        (r"\bbean\b", "beans"),
        (r"\blamon\b", "lemon"),
        (r"\bsaan\b", "beans"),
        (r"\boninon\b", "onion"),
        (r"\bonoin\b", "onion"),
    )
)

STOPWORDS = frozenset(
    {"the", "a", "an", "organic", "fresh", "frozen", "canned", "dried", "raw", "cooked"}
)

CONTAINMENT_FLOOR = 70.0
TOKEN_OVERLAP_MIN = 50.0
WORD_BOOST_THRESHOLD = 80.0
WORD_BOOST = 20.0
_MIN_WORD_LENGTH = 3


def normalize_name(name: str) -> str:
    """Lowercase, drop punctuation, collapse whitespace and fix common OCR misreads."""

    normalized = re.sub(r"[^a-z0-9\s]", "", name.lower())
    normalized = re.sub(r"\s+", " ", normalized).strip()
    for pattern, replacement in OCR_NAME_FIXES:
        normalized = pattern.sub(replacement, normalized)
    return normalized


def _significant_tokens(value: str) -> list[str]:
    return [token for token in value.split() if token not in STOPWORDS and len(token) > 2]


def calculate_similarity(first: str, second: str) -> float:
    """Score how likely two names refer to the same item on a 0-100 scale."""

    left = first.lower().strip()
    right = second.lower().strip()
    if left == right:
        return 100.0
    if not left or not right:
        return 0.0

    if left in right or right in left:
        ratio = min(len(left), len(right)) / max(len(left), len(right)) * 100
        return max(ratio, CONTAINMENT_FLOOR)

    left_tokens = _significant_tokens(left)
    right_tokens = _significant_tokens(right)
    overlapping = [
        token
        for token in left_tokens
        if any(token == other or token in other or other in token for other in right_tokens)
    ]
    if overlapping:
        overlap = len(overlapping) / max(len(left_tokens), len(right_tokens)) * 100
        if overlap >= TOKEN_OVERLAP_MIN:
            return overlap

    longest = max(len(left), len(right))
    distance = Levenshtein.distance(left, right)
    return float(math.floor((longest - distance) / longest * 100 + 0.5))


@dataclass(frozen=True)
class ScoredItem:
    item: InventoryItem
    score: float


def _has_strong_word_pair(left_words: Sequence[str], right_words: Sequence[str]) -> bool:
    for left in left_words:
        if len(left) < _MIN_WORD_LENGTH:
            continue
        for right in right_words:
            if len(right) < _MIN_WORD_LENGTH:
                continue
            if calculate_similarity(left, right) > WORD_BOOST_THRESHOLD:
                return True
    return False


def find_best_match(name: str, items: Sequence[InventoryItem]) -> Optional[ScoredItem]:
    """Return the highest scoring inventory item for ``name``.

    The full normalized names are scored first. When any pair of words (three
    characters or longer) scores above 80 the item's score may be lifted by 20
    points, capped at 100, which rescues reordered names such as "Whole Wheat
    Bread" against "Bread, Whole Wheat, Sliced". Ties keep the earliest item.
    """

    if not items:
        return None

    normalized = normalize_name(name)
    words = normalized.split(" ")
    best: Optional[ScoredItem] = None
    for item in items:
        candidate = normalize_name(item.name)
        score = calculate_similarity(normalized, candidate)
        if best is None or score > best.score:
            best = ScoredItem(item=item, score=score)

        boosted = min(100.0, score + WORD_BOOST)
        if boosted > best.score and _has_strong_word_pair(words, candidate.split(" ")):
            best = ScoredItem(item=item, score=boosted)
    return best


__all__ = [
    "OCR_NAME_FIXES",
    "STOPWORDS",
    "ScoredItem",
    "calculate_similarity",
    "find_best_match",
    "normalize_name",
]
