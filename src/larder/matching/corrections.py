"""Static correction table for known OCR misrecognitions of product names."""

from __future__ import annotations

import re
from typing import Pattern

# Ordered (pattern, replacement) pairs; earlier entries win.
OCR_CORRECTIONS: tuple[tuple[Pattern[str], str], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), replacement)
    for pattern, replacement in (
        (r"\baarut\s*butler\b", "Peanut Butter"),
        (r"\baarut\s*butter\b", "Peanut Butter"),
        (r"\bpearut\s*butter\b", "Peanut Butter"),
        (r"\bquick\s*oats?\s*\$?\d+%?", "Quick Oats"),
        (r"\bquik\s*oats?\b", "Quick Oats"),
        (r"\bchiken\b", "Chicken"),
        (r"\bchicen\b", "Chicken"),
        (r"\bolve\s*oil\b", "Olive Oil"),
        (r"\bolive\s*oil\s*&?\s*v[io]ne?gar\b", "Olive Oil & Vinegar"),
        (r"\bvnegar\b", "Vinegar"),
        (r"\bvinager\b", "Vinegar"),
        (r"\blamon\b", "Lemon"),
        (r"\bsaan\b", "Beans"),
        (r"\bbea[nm]\s*\(?\s*green\s*\)?", "Green Beans"),
        (r"\bonoin\b", "Onion"),
        (r"\boninon\b", "Onion"),
        # trailing price and percent fragments
        (r"\s*\$\d+\.?\d*%?\s*$", ""),
        (r"\s*\d+%\s*$", ""),
        # stray symbols
        (r"[^\w\s&()-]", ""),
    )
)


def apply_ocr_corrections(text: str) -> str:
    """Rewrite known misreadings, drop price debris and title-case lowercase text."""

    corrected = text
    for pattern, replacement in OCR_CORRECTIONS:
        corrected = pattern.sub(replacement, corrected)
    corrected = re.sub(r"\s+", " ", corrected).strip()
    if corrected and corrected == corrected.lower():
        corrected = corrected.title()
    return corrected


__all__ = ["OCR_CORRECTIONS", "apply_ocr_corrections"]
