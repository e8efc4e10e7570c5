"""Unit tests for the fare calculator."""

import math

import pytest

from core.invoices.dto.invoiceparts import AdditionalCharge
from core.invoices.service.farecalculator import clamp_amount, compute_total


def test_total_is_exact_sum() -> None:
    """Test that the total adds fare, allowance and every charge."""
    charges = [AdditionalCharge(type="Toll", amount=250), AdditionalCharge(type="Parking", amount=150)]

    assert compute_total(4500, 300, charges) == 5200


def test_total_accepts_mappings() -> None:
    """Test that charges may be plain dicts, as stored in drafts."""
    assert compute_total(1000, 0, [{"type": "Toll", "amount": 120}, {"type": "Other"}]) == 1120


def test_total_without_extras_is_fare() -> None:
    """Test that no charges and no allowance leaves the base fare."""
    assert compute_total(2000, 0, []) == 2000
    assert compute_total(2000, None) == 2000


def test_total_never_raises_on_missing_values() -> None:
    """Test that None inputs count as zero."""
    assert compute_total(None, None, None) == 0


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 0.0),
        ("", 0.0),
        ("abc", 0.0),
        (-50, 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        (True, 0.0),
        ("250.5", 250.5),
        (300, 300.0),
    ],
)
def test_clamp_amount(raw, expected) -> None:
    """Test that invalid or negative entries become zero."""
    result = clamp_amount(raw)

    assert result == expected
    assert not math.isnan(result)
