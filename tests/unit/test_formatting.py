"""Unit tests for display formatting helpers."""

from datetime import date

import pytest

from utilities.formatting import (
    format_currency, format_display_date, format_invoice_number, format_share_date, format_vehicle_number,
)


def test_invoice_number_padding() -> None:
    """Test four-digit padding and the draft placeholder."""
    assert format_invoice_number(7) == "0007"
    assert format_invoice_number(12345) == "12345"
    assert format_invoice_number(None) == "draft"


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "₹0"),
        (999, "₹999"),
        (5050, "₹5,050"),
        (123456, "₹1,23,456"),
        (1234567.5, "₹12,34,568"),
        (None, "₹0"),
    ],
)
def test_currency_uses_indian_grouping(amount, expected: str) -> None:
    """Test rupee formatting with lakh grouping and no decimals."""
    assert format_currency(amount) == expected


def test_dates() -> None:
    """Test the printed and shared date formats."""
    assert format_display_date(date(2026, 10, 8)) == "08 Oct 2026"
    assert format_display_date("2026-10-08") == "08 Oct 2026"
    assert format_share_date(date(2026, 10, 8)) == "08/10/2026"
    assert format_display_date(None) == ""


def test_vehicle_number() -> None:
    """Test registration number grouping and the length cap."""
    assert format_vehicle_number("mh15ab1234") == "MH 15 AB 1234"
    assert format_vehicle_number("MH-15") == "MH 15"
    assert len(format_vehicle_number("MH15AB12345678")) == 13
