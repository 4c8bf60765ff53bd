"""Immutable money value object shared by every bounded context."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["MoneyError", "CurrencyMismatchError", "NegativeAmountError", "Money"]

_BASIS_POINTS = 10000


class MoneyError(ValueError):
    """Base class for money arithmetic errors."""


class CurrencyMismatchError(MoneyError):
    """Two amounts in different currencies were combined."""

    def __init__(self, message: str = "currency mismatch") -> None:
        super().__init__(message)


class NegativeAmountError(MoneyError):
    """A calculation would produce a negative amount."""

    def __init__(self, message: str = "amount cannot be negative") -> None:
        super().__init__(message)


def _truncating_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


@dataclass(frozen=True)
class Money:
    """An amount in the smallest currency unit (e.g. cents) with an ISO 4217 code."""

    amount: int
    currency: str

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def _check_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError()

    def greater_than(self, other: Money) -> bool:
        """Return whether this amount exceeds ``other`` (same currency required)."""
        self._check_currency(other)
        return self.amount > other.amount

    def add(self, other: Money) -> Money:
        """Return the sum of two amounts in the same currency."""
        self._check_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: Money) -> Money:
        """Return the difference; the result may not be negative."""
        self._check_currency(other)
        if self.amount < other.amount:
            raise NegativeAmountError()
        return Money(self.amount - other.amount, self.currency)

    def is_zero(self) -> bool:
        return self.amount == 0

    def multiply_basis_point(self, bp: int) -> Money:
        """Scale by ``bp`` basis points (1000 = 10.00%), truncating toward zero."""
        if bp < 0:
            raise NegativeAmountError()
        return Money(_truncating_div(self.amount * bp, _BASIS_POINTS), self.currency)