"""Tests for receipt boilerplate and junk-line predicates."""

from __future__ import annotations

import pytest

from larder.ocr.patterns import (
    STREET_ADDRESS,
    is_boilerplate_line,
    is_boilerplate_name,
    is_store_junk,
    looks_like_priced_item,
)


@pytest.mark.parametrize(
    "line",
    [
        "SUBTOTAL",
        "Sub-Total 12.00",
        "Change Due 0.00",
        "APPR0VED",
        "03/14/2024",
        "12:45 PM",
        "Trans # 004512",
        "orders@example.com",
        "www.example.ca",
        "Beverly Hills CA 90210",
    ],
)
def test_receipt_chrome_is_boilerplate(line):
    assert is_boilerplate_line(line)


@pytest.mark.parametrize("line", ["Cashews 6.99", "Bananas 1.99", "Organic Spinach"])
def test_product_lines_are_not_boilerplate(line):
    assert not is_boilerplate_line(line)


def test_priced_item_needs_a_non_boilerplate_word():
    assert looks_like_priced_item("Store Brand Milk 3.99")
    assert not looks_like_priced_item("Total Savings 3.00")
    assert not looks_like_priced_item("Milk")


def test_boilerplate_names():
    assert is_boilerplate_name("Thank You")
    assert not is_boilerplate_name("Greek Yogurt")


@pytest.mark.parametrize(
    "line",
    ["***", "ab", "SUPERSTORE #1234", "H=HST", "2/$5.96", "2 @ $1.99", "3 FOR 5.00", ".370 kg"],
)
def test_store_junk(line):
    assert is_store_junk(line)


def test_store_item_line_is_not_junk():
    assert not is_store_junk("06038318640 PC PEANUT BUTTER MRJ 4.99")


@pytest.mark.parametrize(
    "line",
    ["123 Main St", "2240 DANFORTH AVE", "45 King Street West", "10 Elm Drive, Unit 4"],
)
def test_street_addresses(line):
    assert STREET_ADDRESS.match(line)
    assert is_boilerplate_line(line)


@pytest.mark.parametrize("line", ["2 Diet Dr Pepper 1.99", "12 Eggs Large 12 ct 3.99", "3 Rd Onions 2.00"])
def test_count_prefixed_items_are_not_addresses(line):
    assert not STREET_ADDRESS.match(line)
    assert not is_boilerplate_line(line)
