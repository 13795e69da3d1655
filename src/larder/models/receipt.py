"""Pydantic models for receipt segmentation and inventory matching."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from larder.models.inventory import DEFAULT_CATEGORY

MatchSource = Literal["pantry", "shopping-list", "ocr-only", "ai-matched"]


class CandidateLineItem(BaseModel):
    """Provisional grocery item segmented from one or more receipt lines."""

    name: str = Field(min_length=1)
    quantity: float = Field(default=1.0, gt=0)
    unit: str = Field(default="units")
    category: str = Field(default=DEFAULT_CATEGORY)

    model_config = ConfigDict(from_attributes=True)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("name must not be blank")
        return stripped


class MatchResult(BaseModel):
    """Candidate resolved against the inventory (or left as OCR text)."""

    name: str
    quantity: float
    unit: str
    category: str
    confidence: float = Field(ge=0, le=100)
    source: MatchSource
    original_name: Optional[str] = Field(default=None, alias="originalName")

    model_config = ConfigDict(populate_by_name=True)


class ReceiptScanResult(BaseModel):
    """Outcome of segmenting and matching a whole receipt."""

    layout: str
    candidates_found: int = Field(default=0, ge=0)
    items: list[MatchResult] = Field(default_factory=list)
    message: Optional[str] = None


__all__ = ["CandidateLineItem", "MatchResult", "MatchSource", "ReceiptScanResult"]
