"""Pure price calculation: original price minus discount plus tax."""

from __future__ import annotations

from paydemo.shared.money import Money, MoneyError

__all__ = [
    "PricingError",
    "DiscountExceedsAmountError",
    "NegativeFinalAmountError",
    "calculate_final_amount",
]


class PricingError(Exception):
    """Base class for pricing errors."""


class DiscountExceedsAmountError(PricingError):
    def __init__(self, message: str = "discount exceeds original amount") -> None:
        super().__init__(message)


class NegativeFinalAmountError(PricingError):
    def __init__(self, message: str = "final amount cannot be negative") -> None:
        super().__init__(message)


def calculate_final_amount(
    original: Money, discount_type: str, discount_value: int, tax_bp: int
) -> tuple[Money, Money, Money]:
    """Return ``(final, discount, tax)`` for a price.

    ``discount_type`` is "PERCENTAGE" (value in basis points), "FIXED" (value
    in cents) or anything else for no discount. Tax is charged on the
    discounted amount; a non-positive ``tax_bp`` means no tax.
    """
    discount = Money(0, original.currency)
    if discount_type == "PERCENTAGE":
        try:
            discount = original.multiply_basis_point(discount_value)
        except MoneyError:
            raise DiscountExceedsAmountError() from None
    elif discount_type == "FIXED":
        fixed = Money(discount_value, original.currency)
        if fixed.greater_than(original):
            raise DiscountExceedsAmountError()
        discount = fixed

    try:
        after_discount = original.subtract(discount)
    except MoneyError:
        raise NegativeFinalAmountError() from None

    tax = Money(0, original.currency)
    if tax_bp > 0:
        tax = after_discount.multiply_basis_point(tax_bp)

    return after_discount.add(tax), discount, tax