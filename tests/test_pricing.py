import pytest

from paydemo.order.pricing import (
    DiscountExceedsAmountError,
    NegativeFinalAmountError,
    calculate_final_amount,
)
from paydemo.shared.money import Money

ORIGINAL = Money(10000, "USD")


def _check_invariant(original, final, discount, tax):
    assert final.amount == original.amount - discount.amount + tax.amount
    assert final.currency == discount.currency == tax.currency == original.currency


def test_no_discount_no_tax_keeps_original():
    final, discount, tax = calculate_final_amount(ORIGINAL, "", 0, 0)
    assert final == ORIGINAL
    assert discount.is_zero()
    assert tax.is_zero()


def test_tax_only():
    final, discount, tax = calculate_final_amount(ORIGINAL, "", 0, 1000)
    assert final == Money(11000, "USD")
    assert discount.is_zero()
    _check_invariant(ORIGINAL, final, discount, tax)


def test_percentage_discount_with_tax():
    final, discount, tax = calculate_final_amount(ORIGINAL, "PERCENTAGE", 1000, 1000)
    assert discount == Money(1000, "USD")
    assert tax == Money(900, "USD")
    assert final == Money(9900, "USD")


@pytest.mark.parametrize("value", [0, 1, 500, 9999, 10000])
def test_fixed_discount_invariant(value):
    final, discount, tax = calculate_final_amount(ORIGINAL, "FIXED", value, 0)
    assert discount == Money(value, "USD")
    assert tax.is_zero()
    _check_invariant(ORIGINAL, final, discount, tax)


@pytest.mark.parametrize("bp", [0, 250, 1000, 10000])
def test_tax_on_discounted_amount_invariant(bp):
    final, discount, tax = calculate_final_amount(ORIGINAL, "PERCENTAGE", 2000, bp)
    assert tax == final.subtract(ORIGINAL.subtract(discount))
    _check_invariant(ORIGINAL, final, discount, tax)


def test_full_percentage_discount_gives_zero():
    final, discount, tax = calculate_final_amount(ORIGINAL, "PERCENTAGE", 10000, 1000)
    assert discount == ORIGINAL
    assert final.is_zero()
    assert tax.is_zero()


def test_fixed_discount_above_original_rejected():
    with pytest.raises(DiscountExceedsAmountError):
        calculate_final_amount(ORIGINAL, "FIXED", 10001, 0)


def test_negative_percentage_rejected():
    with pytest.raises(DiscountExceedsAmountError):
        calculate_final_amount(ORIGINAL, "PERCENTAGE", -1, 0)


def test_percentage_above_hundred_gives_negative_final():
    with pytest.raises(NegativeFinalAmountError):
        calculate_final_amount(ORIGINAL, "PERCENTAGE", 10001, 0)


def test_unknown_discount_type_is_ignored():
    final, discount, _ = calculate_final_amount(ORIGINAL, "BOGUS", 5000, 0)
    assert final == ORIGINAL
    assert discount.is_zero()


def test_negative_tax_rate_means_no_tax():
    final, _, tax = calculate_final_amount(ORIGINAL, "", 0, -500)
    assert tax.is_zero()
    assert final == ORIGINAL