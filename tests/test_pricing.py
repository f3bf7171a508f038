"""Tests for the checkout price calculation."""
from decimal import Decimal

import pytest

from academia.core.errors import InvalidDiscount, InvalidInput
from academia.pricing.calculator import (
    compute_final_price,
    discount_recommendation,
    from_minor_units,
    price_breakdown,
    to_minor_units,
)


@pytest.mark.parametrize("price", ["0", "9.99", "50", "1234.56"])
def test_no_discount_returns_original_price(price):
    assert compute_final_price(price) == Decimal(price).quantize(Decimal("0.01"))
    assert compute_final_price(price, 0) == Decimal(price).quantize(Decimal("0.01"))
    assert compute_final_price(price, None, "10") == Decimal(price).quantize(Decimal("0.01"))


@pytest.mark.parametrize("discount,minimum", [(None, None), (30, None), (150, 5), (99, 1000)])
def test_free_course_is_always_zero(discount, minimum):
    assert compute_final_price(0, discount, minimum) == Decimal("0.00")


def test_percentage_discount():
    assert compute_final_price(100, 30) == Decimal("70.00")
    assert compute_final_price("19.99", 15) == Decimal("16.99")  # 16.9915
    assert compute_final_price("10", "33.333") == Decimal("6.67")


def test_half_up_rounding_on_exact_half_cent():
    # 0.125 -> 0.13 (half-even daria 0.12)
    assert compute_final_price("0.25", 50) == Decimal("0.13")
    assert compute_final_price("10.05", 50) == Decimal("5.03")


def test_minimum_gain_floor_wins_when_discount_goes_below():
    # scenario: price=20, discount=10%, minimumGain=19 -> 18.00 < 19 -> 19.00
    final = compute_final_price(20, 10, 19)
    assert final == Decimal("19.00")
    assert to_minor_units(final) == 1900


def test_minimum_gain_ignored_when_discounted_price_is_above():
    assert compute_final_price(100, 30, 50) == Decimal("70.00")


def test_minimum_gain_is_rounded():
    assert compute_final_price(20, 50, "12.345") == Decimal("12.35")


def test_minimum_gain_never_exceeds_original_price():
    final = compute_final_price(20, 10, 25)
    assert final == Decimal("20.00")
    assert final <= Decimal("20")


@pytest.mark.parametrize("discount", [100, 150, "100.00"])
def test_discount_of_100_or_more_is_rejected(discount):
    with pytest.raises(InvalidDiscount):
        compute_final_price(100, discount)


def test_discount_errors_are_value_errors():
    with pytest.raises(ValueError):
        compute_final_price(100, 100)


@pytest.mark.parametrize(
    "args",
    [(-5, None, None), (100, -10, None), (100, 10, -1), ("abc", None, None), (True, None, None), ("NaN", None, None)],
)
def test_negative_or_malformed_inputs_are_rejected(args):
    with pytest.raises(InvalidInput):
        compute_final_price(*args)


def test_same_inputs_same_result():
    first = compute_final_price("49.90", "12.5", "40")
    second = compute_final_price("49.90", "12.5", "40")
    assert first == second == Decimal("43.66")


def test_float_inputs_use_their_decimal_text():
    assert compute_final_price(19.99, 10.0) == Decimal("17.99")


def test_minor_units_match_displayed_price():
    for price, pct, minimum in [(100, 30, None), ("0.25", 50, None), ("19.99", 15, None), (20, 10, 19)]:
        final = compute_final_price(price, pct, minimum)
        assert to_minor_units(final) == int(final * 100)


def test_from_minor_units():
    assert from_minor_units(7000) == Decimal("70.00")
    assert from_minor_units(1) == Decimal("0.01")


def test_price_breakdown_lost_gain():
    pb = price_breakdown(100, 30)
    assert pb.final_amount == Decimal("70.00")
    assert pb.amount_minor_units == 7000
    assert pb.lost_gain == Decimal("30.00")
    assert pb.has_discount is True

    no_discount = price_breakdown(50)
    assert no_discount.has_discount is False
    assert no_discount.lost_gain == Decimal("0.00")


@pytest.mark.parametrize(
    "price,expected",
    [(0, None), (10, "10-20%"), (20, "20-40%"), ("49.99", "20-40%"), (50, "30-60%")],
)
def test_discount_recommendation(price, expected):
    rec = discount_recommendation(price)
    if expected is None:
        assert rec is None
    else:
        assert expected in rec
