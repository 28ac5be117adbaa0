"""Tests for markup pricing with fixed-point decimals."""

from decimal import Decimal

import pytest

from casework.domain.exceptions import InvalidAmountException
from casework.domain.pricing import compute_final_price, to_decimal


@pytest.mark.parametrize(
    ("base", "markup", "expected"),
    [
        ("150", "20", "180.00"),
        ("10.05", "10", "11.06"),
        ("0.01", "50", "0.02"),  # 0.015 rounds half up
        ("100", "0", "100.00"),
        ("33.33", "33.333", "44.44"),
    ],
)
def test_compute_final_price(base, markup, expected) -> None:
    assert compute_final_price(Decimal(base), Decimal(markup)) == Decimal(expected)


def test_result_carries_currency_quantum() -> None:
    price = compute_final_price(Decimal("150"), Decimal("20"))
    assert str(price) == "180.00"


def test_custom_quantum() -> None:
    assert compute_final_price(Decimal("10"), Decimal("5"), Decimal("1")) == Decimal("11")


@pytest.mark.parametrize(("base", "markup"), [("0", "10"), ("-1", "10"), ("10", "-0.5")])
def test_invalid_inputs(base, markup) -> None:
    with pytest.raises(InvalidAmountException):
        compute_final_price(Decimal(base), Decimal(markup))


def test_to_decimal_goes_through_str_for_floats() -> None:
    assert to_decimal(0.1, "base_cost") == Decimal("0.1")
    assert to_decimal(150, "base_cost") == Decimal("150")


@pytest.mark.parametrize("value", ["abc", "NaN", "Infinity", None])
def test_to_decimal_rejects_non_numbers(value) -> None:
    with pytest.raises(InvalidAmountException) as exc_info:
        to_decimal(value, "markup_percent")
    assert exc_info.value.details["field"] == "markup_percent"
