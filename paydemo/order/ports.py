"""Ports through which the order context reaches other contexts and storage."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod

from paydemo.order.model import Order
from paydemo.shared.money import Money

__all__ = [
    "ProductView",
    "CatalogQuery",
    "AppliedCoupon",
    "CouponApplier",
    "ChargeRequest",
    "ChargeResult",
    "PaymentCommand",
    "OrderRepository",
    "TaxRateQuery",
]


@dataclasses.dataclass(frozen=True)
class ProductView:
    """What the order context needs to know about a product."""

    id: str
    name: str
    amount: int
    currency: str
    is_active: bool


class CatalogQuery(ABC):
    @abstractmethod
    def find_product(self, product_id: str) -> ProductView:
        """Return the product; raise ProductNotFoundError if absent."""


@dataclasses.dataclass(frozen=True)
class AppliedCoupon:
    """A coupon that was applied: basis points for PERCENTAGE, cents for FIXED."""

    coupon_id: str
    discount_type: str
    discount_value: int


class CouponApplier(ABC):
    @abstractmethod
    def apply(self, coupon_code: str, user_id: str) -> AppliedCoupon:
        """Use the coupon once and return its discount."""

    @abstractmethod
    def rollback(self, coupon_code: str) -> None:
        """Undo one use of the coupon."""


@dataclasses.dataclass(frozen=True)
class ChargeRequest:
    """A request to authorize a payment for an order."""

    merchant_id: str
    user_id: str
    order_id: str
    amount: Money
    card_token: str = ""
    card_last4: str = ""
    card_brand: str = ""
    saved_card_id: str = ""
    save_card: bool = False
    payment_method: str = ""  # "CARD" or "PAYPAL"
    paypal_order_id: str = ""
    paypal_payer_id: str = ""


@dataclasses.dataclass(frozen=True)
class ChargeResult:
    transaction_id: str
    status: str = ""
    provider_ref: str = ""


class PaymentCommand(ABC):
    """Operations the order context performs on the payment side."""

    @abstractmethod
    def charge(self, request: ChargeRequest) -> ChargeResult:
        """Authorize a payment."""

    @abstractmethod
    def capture(self, user_id: str, transaction_id: str) -> None:
        """Capture an authorized payment."""

    @abstractmethod
    def refund(self, user_id: str, transaction_id: str) -> None:
        """Refund a captured payment."""


class OrderRepository(ABC):
    @abstractmethod
    def save(self, order: Order) -> None:
        """Insert or update an order."""

    @abstractmethod
    def find_by_id(self, order_id: str) -> Order:
        """Return the order; raise OrderNotFoundError if absent."""


class TaxRateQuery(ABC):
    @abstractmethod
    def find_tax_rate(self, product_id: str, currency: str) -> int:
        """Return the tax rate in basis points (1000 = 10.00%)."""