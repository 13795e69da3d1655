"""Tests for the store-layout (section header) segmentation pipeline."""

from __future__ import annotations

from larder.ocr import ReceiptLayout, SuperstoreSegmenter, detect_layout, segment_receipt

STORE_RECEIPT = """
REAL CANADIAN SUPERSTORE
2240 DANFORTH AVE
21-GROCERY
06038318640 PC PEANUT BUTTER MRJ 4.99
05870322112 NN PASTA SCE 1.79
PROMO 2X POINTS
22-DAIRY
06820000451 PC MLK 2% 4L 5.49
2 @ 2/$5.96
31-PRODUCE
4011 BANANAS 1.52
1.23 kg @ $1.74/kg
(2) ORG BBY SPN 3.99
SUBTOTAL 17.78
H=HST 13%
TOTAL 18.45
"""


def test_store_keywords_select_store_layout():
    assert detect_layout(STORE_RECEIPT) is ReceiptLayout.SUPERSTORE
    assert detect_layout("2 lbs apples $4.50") is ReceiptLayout.GENERIC


def test_store_hint_selects_store_layout():
    assert detect_layout("4011 BANANAS 1.52", store_hint="Real Canadian Superstore") is (
        ReceiptLayout.SUPERSTORE
    )


def test_store_receipt_uses_section_categories_and_expansions():
    layout, items = segment_receipt(STORE_RECEIPT)

    assert layout is ReceiptLayout.SUPERSTORE
    assert [(item.name, item.category) for item in items] == [
        ("PC Peanut Butter", "Pantry Staples"),
        ("No Name Pasta Sauce", "Pantry Staples"),
        ("PC Milk 2% 4L", "Dairy & Eggs"),
        ("Bananas", "Fresh Produce"),
        ("Organic Baby Spinach", "Fresh Produce"),
    ]
    assert all(item.quantity == 1 and item.unit == "units" for item in items)


def test_lines_before_any_header_use_default_category():
    items = SuperstoreSegmenter().segment("06038318640 PC PEANUT BUTTER MRJ 4.99")

    assert items[0].category == "Pantry Staples"


def test_lines_outside_the_allow_list_are_dropped():
    items = SuperstoreSegmenter().segment("31-PRODUCE\n0000123456 WIDGET THING 2.00\n~ ai")

    assert items == []


def test_abbreviation_shaped_like_tax_code_survives_cleaning():
    items = SuperstoreSegmenter().segment("21-GROCERY\n06038300000 PC PB 4.99")

    assert [item.name for item in items] == ["PC Peanut Butter"]


def test_run_on_store_line_is_dropped():
    text = "22-DAIRY\n" + "PC MLK " * 40 + "\n06820000451 PC MLK 2% 4L 5.49"

    items = SuperstoreSegmenter().segment(text)

    assert [item.name for item in items] == ["PC Milk 2% 4L"]
