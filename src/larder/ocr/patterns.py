"""Receipt boilerplate and junk-line pattern sets.

Everything here is data plus thin predicates over it. A line rejected by these
predicates is simply not an item; rejection is never reported as a failure.
"""

from __future__ import annotations

import re
from typing import Pattern

from rapidfuzz import fuzz, process

# Words that only ever appear on receipt chrome (totals, tenders, headers).
BOILERPLATE_WORDS: frozenset[str] = frozenset(
    {
        "subtotal", "sub", "total", "totals", "grand", "tax", "taxes", "hst", "gst",
        "pst", "qst", "vat", "balance", "change", "due", "amount", "cash", "card",
        "visa", "mastercard", "amex", "debit", "credit", "interac", "tend",
        "tender", "tendered", "approved", "approval", "auth", "authorization",
        "receipt", "thank", "thanks", "you", "customer", "copy", "cashier",
        "register", "terminal", "trans", "transaction", "ref", "reference",
        "invoice", "savings", "saved", "points", "member", "account", "acct",
        "payment", "purchase", "signature", "verified", "pin", "store", "welcome",
        "items", "sold", "merchant", "chip", "contactless", "retain", "records",
        "rounding", "optimum", "redeemed", "earned",
    }
)

_KEYWORD_LINE = re.compile(
    r"\b(?:sub\s*-?\s*total|total|tax(?:es)?|hst|gst|pst|qst|vat|balance|change\s+due|"
    r"cash|card|visa|master\s*card|amex|debit|credit|interac|approved|approval|"
    r"auth(?:orization)?|tend(?:er(?:ed)?)?|receipt|thank\s*you|customer\s+copy|"
    r"cashier|register|terminal|trans(?:action)?|ref(?:erence)?\s*#?|invoice|savings|"
    r"you\s+saved|points|member|account|acct|payment|purchase|signature|verified|"
    r"pin|store\s*#?|welcome|items?\s+sold|amount|merchant|retain|rounding)\b",
    re.IGNORECASE,
)

# Long keywords compared against OCR tokens with rapidfuzz to tolerate misreads
# such as "SUBT0TAL" or "APPR0VED".
FUZZY_BOILERPLATE_KEYWORDS: tuple[str, ...] = (
    "subtotal",
    "total",
    "approved",
    "mastercard",
    "debit",
    "credit",
    "balance",
    "change",
    "payment",
    "transaction",
    "purchase",
    "cashier",
    "receipt",
    "customer",
    "interac",
    "authorization",
    "thank",
)
FUZZY_KEYWORD_CUTOFF = 85.0
_FUZZY_MIN_TOKEN_LENGTH = 5

# House number, one or two name words, a street type and nothing item-like
# after it. "Dr" and "Ct" are left out because they also read as "Dr Pepper"
# and "12 ct".
STREET_ADDRESS = re.compile(
    r"^\d+\s+(?:[A-Za-z0-9.'-]+\s+){1,2}(?:st|street|ave|avenue|rd|road|blvd|boulevard|"
    r"drive|ln|lane|way|hwy|highway|cres|crescent|court|pkwy|parkway)\.?"
    r"(?:\s+(?:n|s|e|w|north|south|east|west)\.?)?\s*(?:[,#].*)?$",
    re.IGNORECASE,
)

STRUCTURAL_PATTERNS: tuple[Pattern[str], ...] = (
    # dates
    re.compile(r"\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b"),
    re.compile(r"\b\d{4}[/-]\d{1,2}[/-]\d{1,2}\b"),
    re.compile(r"\b\d{1,2}\.\d{1,2}\.\d{4}\b"),
    re.compile(
        r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?\s+\d{1,2},?\s+\d{2,4}\b",
        re.IGNORECASE,
    ),
    # times
    re.compile(r"\b\d{1,2}:\d{2}(?::\d{2})?\s*(?:[ap]\.?m\.?)?(?!\w)", re.IGNORECASE),
    # transaction / terminal identifiers and masked cards
    re.compile(r"(?:#|\bno\.?|\bid)\s*:?\s*\d{4,}", re.IGNORECASE),
    re.compile(r"\b(?=[A-Z0-9]*\d)(?=[A-Z0-9]*[A-Z])[A-Z0-9]{10,}\b"),
    re.compile(r"[*xX]{4,}\s*\d{2,4}\b"),
    # phone numbers
    re.compile(r"\(?\b\d{3}\)?[\s.-]\d{3}[\s.-]\d{4}\b"),
    # postal and ZIP codes
    re.compile(r"\b[ABCEGHJ-NPRSTVXY]\d[ABCEGHJ-NPRSTV-Z]\s?\d[ABCEGHJ-NPRSTV-Z]\d\b", re.IGNORECASE),
    re.compile(r"\b[A-Z]{2}\s+\d{5}(?:-\d{4})?\b"),
    STREET_ADDRESS,
    # email and web addresses
    re.compile(r"[\w.+-]+@[\w-]+\.[\w.]+"),
    re.compile(r"\b(?:www\.|https?://)\S+|\b\w+\.(?:com|ca|net|org)\b", re.IGNORECASE),
    # a bare price
    re.compile(r"^[-+]?\s*\$?\s*\d+[.,]\d{2}\s*[A-Za-z]?$"),
)

_PRICED_ITEM = re.compile(
    r"^(?P<name>[A-Za-z][A-Za-z&'.\- ]*?[A-Za-z])\s+\$?\d+\.\d{2}\s*[A-Za-z]?$"
)

# Store-layout receipts: anything matching one of these is never an item line.
STORE_JUNK_PATTERNS: tuple[Pattern[str], ...] = (
    re.compile(r"^[\W_]+$"),
    re.compile(r"^.{0,2}$"),
    # OCR garbage: nothing but one- and two-letter fragments
    re.compile(r"^(?:[^A-Za-z0-9\s]*[A-Za-z]{1,2}[^A-Za-z0-9\s]*\s*){1,4}$"),
    re.compile(r"\b(?:real\s+canadian|superstore|loblaws?|rcss|pc\s+optimum|optimum)\b", re.IGNORECASE),
    re.compile(r"\b(?:store|manager|cashier|welcome|thank\s*you|www|\.ca|\.com)\b", re.IGNORECASE),
    re.compile(r"\b(?:sub\s*total|total|hst|gst|pst|tax|balance|change|debit|credit|visa|mastercard|interac|approved|tend)\b", re.IGNORECASE),
    re.compile(r"^\s*[A-Z]\s*=\s*\w+"),
    # deal pricing: "2/$5.96", "2 @ $1.99", "3 FOR 5.00"
    re.compile(r"\b\d+\s*/\s*\$?\d+\.\d{2}\b"),
    re.compile(r"^\s*\d+\s*@\s*\$?\d"),
    re.compile(r"\b\d+\s+for\s+\$?\d+\.\d{2}\b", re.IGNORECASE),
    # weight continuation fragments: "1.23 kg @ $1.74/kg", ".370 kg"
    re.compile(r"^\s*(?:\d+(?:\.\d+)?|\.\d+)\s*(?:kg|lb|lbs|g)\b(?:\s*@.*)?$", re.IGNORECASE),
    re.compile(r"@\s*\$?\d+\.\d{2}\s*/\s*(?:kg|lb)", re.IGNORECASE),
    re.compile(r"\(?\b\d{3}\)?[\s.-]\d{3}[\s.-]\d{4}\b"),
    STREET_ADDRESS,
)


def matches_keyword(line: str) -> bool:
    """Return True when ``line`` contains a receipt boilerplate keyword."""

    if _KEYWORD_LINE.search(line):
        return True
    for token in re.findall(r"[A-Za-z0-9]+", line):
        letters = re.sub(r"[^a-z]", "", token.lower().replace("0", "o"))
        if len(letters) < _FUZZY_MIN_TOKEN_LENGTH:
            continue
        if process.extractOne(
            letters,
            FUZZY_BOILERPLATE_KEYWORDS,
            scorer=fuzz.ratio,
            score_cutoff=FUZZY_KEYWORD_CUTOFF,
        ):
            return True
    return False


def matches_structure(line: str) -> bool:
    """Return True for dates, times, ids, contact details and bare prices."""

    return any(pattern.search(line) for pattern in STRUCTURAL_PATTERNS)


def looks_like_priced_item(line: str) -> bool:
    """Item-shaped line: at least one non-boilerplate word followed by a price."""

    match = _PRICED_ITEM.match(line.strip())
    if not match:
        return False
    words = [word.lower() for word in re.findall(r"[A-Za-z]+", match.group("name"))]
    if len(words) < 2:
        return False
    return any(word not in BOILERPLATE_WORDS for word in words)


def is_boilerplate_line(line: str) -> bool:
    """Decide whether a raw generic-receipt line is receipt chrome."""

    if matches_structure(line):
        return True
    if matches_keyword(line):
        return not looks_like_priced_item(line)
    return False


def is_boilerplate_name(name: str) -> bool:
    """Decide whether a cleaned item name is really receipt chrome."""

    lowered = name.strip().lower()
    if not lowered:
        return True
    words = re.findall(r"[a-z]+", lowered)
    if words and all(word in BOILERPLATE_WORDS for word in words):
        return True
    return matches_structure(name)


def is_store_junk(line: str) -> bool:
    return any(pattern.search(line) for pattern in STORE_JUNK_PATTERNS)


__all__ = [
    "BOILERPLATE_WORDS",
    "FUZZY_BOILERPLATE_KEYWORDS",
    "STORE_JUNK_PATTERNS",
    "STREET_ADDRESS",
    "STRUCTURAL_PATTERNS",
    "is_boilerplate_line",
    "is_boilerplate_name",
    "is_store_junk",
    "looks_like_priced_item",
    "matches_keyword",
    "matches_structure",
]
