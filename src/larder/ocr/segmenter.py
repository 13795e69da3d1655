"""Receipt text segmentation into candidate grocery line items.

Two pipelines share the ``ReceiptSegmenter`` interface:

* ``SuperstoreSegmenter`` understands the Loblaw-family layout (department
  section headers, barcode-prefixed lines, abbreviated product names) and only
  keeps lines that hit the product allow-list.
* ``GenericSegmenter`` handles any other receipt with pattern heuristics and a
  boilerplate reject filter.

Both drop any line they cannot positively read as an item.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Protocol

from larder import metrics
from larder.models.inventory import DEFAULT_CATEGORY
from larder.models.receipt import CandidateLineItem
from larder.ocr.abbreviations import ABBREVIATIONS, PRODUCT_KEYWORDS
from larder.ocr.categories import classify_category
from larder.ocr.patterns import is_boilerplate_line, is_boilerplate_name, is_store_junk

logger = logging.getLogger(__name__)


class ReceiptLayout(str, enum.Enum):
    """Receipt formats with a dedicated segmentation pipeline."""

    GENERIC = "generic"
    SUPERSTORE = "superstore"


STORE_SNIFF_KEYWORDS: tuple[str, ...] = (
    "superstore",
    "real canadian",
    "loblaws",
    "loblaw",
    "rcss",
    "pc optimum",
)


def detect_layout(text: str, store_hint: Optional[str] = None) -> ReceiptLayout:
    """Pick the segmentation pipeline from the receipt text and optional store hint."""

    haystack = f"{store_hint or ''}\n{text}".lower()
    haystack = re.sub(r"\s+", " ", haystack)
    if any(keyword in haystack for keyword in STORE_SNIFF_KEYWORDS):
        return ReceiptLayout.SUPERSTORE
    return ReceiptLayout.GENERIC


class ReceiptSegmenter(Protocol):
    """Turns raw OCR text into ordered candidate line items."""

    layout: ReceiptLayout

    def segment(self, text: str) -> List[CandidateLineItem]:
        """Return candidates in order of first appearance."""


def _collapse(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()


def _title_case(value: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in value.split())


# Longer lines are OCR run-ons (several items or a whole paragraph glued
# together), never a single item.
MAX_ITEM_LINE_LENGTH = 200


# ---------------------------------------------------------------------------
# Store layout pipeline
# ---------------------------------------------------------------------------

SECTION_CATEGORIES: dict[str, str] = {
    "grocery": "Pantry Staples",
    "dairy": "Dairy & Eggs",
    "frozen": "Frozen Foods",
    "produce": "Fresh Produce",
    "meat": "Meat & Seafood",
    "meats": "Meat & Seafood",
    "seafood": "Meat & Seafood",
    "deli": "Meat & Seafood",
    "bakery": "Bakery",
    "home": "Household",
    "baby": "Personal Care",
    "health": "Personal Care",
    "other": "Other",
}

_SECTION_HEADER = re.compile(r"^\s*\d{2}\s*[-–:.]?\s*(?P<dept>[A-Za-z]+)\b[^\d$]*$")
_LEADING_CODES = re.compile(r"^\s*(?:\(\d+\)\s*)?(?:\d{4,}\s+)?")
_STORE_TRAILING_PRICE = re.compile(r"\s*-?\$?(?<!\d)\d+[.,]\d{2}(?:\s+[A-Z]{1,2})?\s*-?\s*$")
_STORE_TAX_CODE = re.compile(r"\s+(?P<code>[A-Z]?MRJ|[A-Z]{1,2})\s*$")
_STORE_TRAILING_PUNCT = re.compile(r"[\s.,:;*#_\-]+$")
_MIN_STORE_NAME_LENGTH = 3


class SuperstoreSegmenter:
    """Segment Loblaw-family receipts using section headers and an allow-list."""

    layout = ReceiptLayout.SUPERSTORE

    def __init__(self, *, default_category: str = DEFAULT_CATEGORY) -> None:
        self._default_category = default_category

    def segment(self, text: str) -> List[CandidateLineItem]:
        items: List[CandidateLineItem] = []
        category = self._default_category
        for raw_line in text.splitlines():
            line = _collapse(raw_line)
            if not line or len(line) > MAX_ITEM_LINE_LENGTH:
                continue

            section = self._section_category(line)
            if section is not None:
                category = section
                continue

            if is_store_junk(line):
                continue

            cleaned = self._clean(line)
            if len(cleaned) < _MIN_STORE_NAME_LENGTH or not self._is_known_product(cleaned):
                continue

            items.append(CandidateLineItem(name=self._expand(cleaned), category=category))
        return items

    @staticmethod
    def _section_category(line: str) -> Optional[str]:
        match = _SECTION_HEADER.match(line)
        if not match:
            return None
        return SECTION_CATEGORIES.get(match.group("dept").lower())

    @staticmethod
    def _clean(line: str) -> str:
        cleaned = _LEADING_CODES.sub("", line)
        for _ in range(2):
            without_price = _STORE_TRAILING_PRICE.sub("", cleaned)
            if without_price == cleaned:
                break
            cleaned = without_price
            tax_code = _STORE_TAX_CODE.search(cleaned)
            # "PB" is a tax-code-shaped abbreviation for peanut butter
            if tax_code and tax_code.group("code").lower() not in ABBREVIATIONS:
                cleaned = cleaned[: tax_code.start()]
        cleaned = _STORE_TRAILING_PUNCT.sub("", cleaned)
        return _collapse(cleaned)

    @staticmethod
    def _token_key(token: str) -> str:
        return re.sub(r"[^a-z]", "", token.lower())

    def _is_known_product(self, cleaned: str) -> bool:
        for token in cleaned.split():
            key = self._token_key(token)
            if key and (key in PRODUCT_KEYWORDS or key in ABBREVIATIONS):
                return True
        return False

    def _expand(self, cleaned: str) -> str:
        words: List[str] = []
        for token in cleaned.split():
            key = self._token_key(token)
            if key in ABBREVIATIONS:
                words.append(ABBREVIATIONS[key])
            elif token.isalpha():
                words.append(token.capitalize())
            else:
                words.append(token)
        return " ".join(words)


# ---------------------------------------------------------------------------
# Generic pipeline
# ---------------------------------------------------------------------------

_WEIGHT_UNITS = r"kg|lbs?|oz|g"
_COUNT_UNITS = (
    r"pcs?|units?|lbs?|oz|kg|g|ml|l|packs?|box(?:es)?|bottles?|cans?|ct|ea|each|doz(?:en)?|bags?|bunch"
)

_UNIT_PRICE_SUFFIX = re.compile(r"\s+@\s*\$?\d+(?:\.\d+)?\s*(?:/\s*[A-Za-z]+)?.*$")
_DEAL_SUFFIX = re.compile(r"\s+\d+\s*/\s*\$?\d+(?:\.\d{2})?\s*$")
_TRAILING_PRICE = re.compile(r"\s*-?\$?(?<!\d)\d+[.,]\d{2}(?:\s*[A-Z])?\s*$")

# A number starts at a digit run boundary so the name and quantity never
# compete for the same characters.
_NUMBER = r"(?<![\d.])(?P<qty>\d+(?:\.\d+)?|\.\d+)"

_LEADING_WEIGHT = re.compile(
    rf"^{_NUMBER}\s*(?P<unit>{_WEIGHT_UNITS})\.?\s+(?P<name>.+)$", re.IGNORECASE
)
_TRAILING_WEIGHT = re.compile(
    rf"^(?P<name>.*?)\s*{_NUMBER}\s*(?P<unit>{_WEIGHT_UNITS})\.?$", re.IGNORECASE
)
_LEADING_MARKERS = re.compile(r"^[@#*+>•·\-]+\s*")
_TRAILING_LETTERS = re.compile(r"(?:\s+[A-Za-z])+$")
_LEADING_COUNT = re.compile(r"^(?P<qty>\d+)\s*[xX]?\s+(?P<name>.*[A-Za-z].*)$")
_TRAILING_COUNT = re.compile(
    rf"^(?P<name>.+?)\s+(?P<qty>\d+(?:\.\d+)?)\s*(?P<unit>{_COUNT_UNITS})\.?$", re.IGNORECASE
)
_TRAILING_MULTIPLIER = re.compile(r"^(?P<name>.+?)\s+[xX]\s*(?P<qty>\d+)$")

_MAX_LEADING_COUNT = 50
_MAX_CAPS_NAME_LENGTH = 30
_MIN_LINE_LENGTH = 3


@dataclass
class _ParsedLine:
    name: str
    quantity: float = 1.0
    unit: str = "units"
    explicit_unit: bool = False


def _to_quantity(raw: str) -> Optional[float]:
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def _strip_prices(line: str) -> str:
    stripped = _UNIT_PRICE_SUFFIX.sub("", line)
    stripped = _DEAL_SUFFIX.sub("", stripped)
    for _ in range(3):
        without_price = _TRAILING_PRICE.sub("", stripped)
        if without_price == stripped:
            break
        stripped = without_price
    return stripped.strip()


def _extract_quantity(body: str) -> _ParsedLine:
    if match := _LEADING_WEIGHT.match(body):
        quantity = _to_quantity(match.group("qty"))
        if quantity is not None:
            return _ParsedLine(match.group("name"), quantity, match.group("unit").lower(), True)

    if match := _TRAILING_WEIGHT.match(body):
        quantity = _to_quantity(match.group("qty"))
        if quantity is not None:
            return _ParsedLine(match.group("name").strip(), quantity, match.group("unit").lower(), True)

    if match := _LEADING_COUNT.match(body):
        count = int(match.group("qty"))
        if 0 < count <= _MAX_LEADING_COUNT:
            return _ParsedLine(match.group("name"), float(count))

    if match := _TRAILING_COUNT.match(body):
        quantity = _to_quantity(match.group("qty"))
        if quantity is not None:
            return _ParsedLine(match.group("name"), quantity, match.group("unit").lower(), True)

    if match := _TRAILING_MULTIPLIER.match(body):
        quantity = _to_quantity(match.group("qty"))
        if quantity is not None:
            return _ParsedLine(match.group("name"), quantity)

    return _ParsedLine(body)


def _clean_name(name: str, consumed_unit: Optional[str] = None) -> str:
    cleaned = _collapse(name)
    cleaned = _LEADING_MARKERS.sub("", cleaned)
    cleaned = re.sub(r"^\d{6,}\s+", "", cleaned)
    previous = None
    while previous != cleaned:
        previous = cleaned
        cleaned = re.sub(r"\s*\([^)]*\)\s*$", "", cleaned)
        cleaned = re.sub(r"\s+(?:REGULAR|REG)\.?$", "", cleaned, flags=re.IGNORECASE)
        cleaned = re.sub(r"\s+\d{4,}$", "", cleaned)
        cleaned = re.sub(r"\s+(?:ea|each|ct)\.?$", "", cleaned, flags=re.IGNORECASE)
        if consumed_unit:
            cleaned = re.sub(
                rf"\s+{re.escape(consumed_unit)}\.?$", "", cleaned, flags=re.IGNORECASE
            )
        cleaned = _TRAILING_LETTERS.sub("", cleaned)
        cleaned = cleaned.strip(" -:;,.*")
    return cleaned


def _is_rejected_name(name: str) -> bool:
    if len(name) < 2:
        return True
    if re.fullmatch(r"[\d\s.,/%#-]+", name):
        return True
    if re.fullmatch(r"\$\S*", name):
        return True
    if name.isupper() and len(name) > _MAX_CAPS_NAME_LENGTH:
        return True
    return is_boilerplate_name(name)


class GenericSegmenter:
    """Segment arbitrary receipts with quantity/unit heuristics."""

    layout = ReceiptLayout.GENERIC

    def segment(self, text: str) -> List[CandidateLineItem]:
        items: List[CandidateLineItem] = []
        for raw_line in text.splitlines():
            line = _collapse(raw_line)
            if len(line) < _MIN_LINE_LENGTH or len(line) > MAX_ITEM_LINE_LENGTH:
                continue
            if is_boilerplate_line(line):
                continue

            body = _LEADING_MARKERS.sub("", _strip_prices(line))
            if not body:
                continue

            parsed = _extract_quantity(body)
            if not parsed.name:
                # weight-only continuation line belongs to the previous item
                if items:
                    items[-1] = items[-1].model_copy(
                        update={"quantity": parsed.quantity, "unit": parsed.unit}
                    )
                continue

            name = _clean_name(parsed.name, parsed.unit if parsed.explicit_unit else None)
            if _is_rejected_name(name):
                continue

            title = _title_case(name)
            items.append(
                CandidateLineItem(
                    name=title,
                    quantity=parsed.quantity,
                    unit=parsed.unit,
                    category=classify_category(title),
                )
            )
        return items


_SEGMENTERS: dict[ReceiptLayout, ReceiptSegmenter] = {
    ReceiptLayout.GENERIC: GenericSegmenter(),
    ReceiptLayout.SUPERSTORE: SuperstoreSegmenter(),
}


def get_segmenter(layout: ReceiptLayout) -> ReceiptSegmenter:
    return _SEGMENTERS[layout]


def segment_receipt(
    text: str,
    store_hint: Optional[str] = None,
) -> tuple[ReceiptLayout, List[CandidateLineItem]]:
    """Detect the receipt layout and segment ``text`` into candidates."""

    if not text or not text.strip():
        return ReceiptLayout.GENERIC, []
    layout = detect_layout(text, store_hint)
    items = get_segmenter(layout).segment(text)
    metrics.RECEIPT_CANDIDATES.labels(layout=layout.value).inc(len(items))
    logger.debug("Segmented receipt layout=%s candidates=%s", layout.value, len(items))
    return layout, items


__all__ = [
    "GenericSegmenter",
    "MAX_ITEM_LINE_LENGTH",
    "ReceiptLayout",
    "ReceiptSegmenter",
    "STORE_SNIFF_KEYWORDS",
    "SuperstoreSegmenter",
    "detect_layout",
    "get_segmenter",
    "segment_receipt",
]
