"""Order aggregate, price breakdown, domain events and errors."""

from __future__ import annotations

import dataclasses
import uuid
from datetime import datetime, timezone
from enum import Enum

from paydemo.shared.events import DomainEvent
from paydemo.shared.money import Money

__all__ = [
    "Money",
    "OrderError",
    "OrderNotFoundError",
    "InvalidStateTransitionError",
    "ProductNotFoundError",
    "ProductNotActiveError",
    "MerchantRequiredError",
    "PaymentFailedError",
    "OrderStatus",
    "PriceBreakdown",
    "OrderCreated",
    "OrderPaid",
    "OrderRefunded",
    "Order",
    "new_order_id",
    "new_order",
]


class OrderError(Exception):
    """Base class for order domain errors."""


class OrderNotFoundError(OrderError):
    def __init__(self, message: str = "order not found") -> None:
        super().__init__(message)


class InvalidStateTransitionError(OrderError):
    def __init__(self, message: str = "invalid order state transition") -> None:
        super().__init__(message)


class ProductNotFoundError(OrderError):
    def __init__(self, message: str = "product not found") -> None:
        super().__init__(message)


class ProductNotActiveError(OrderError):
    def __init__(self, message: str = "product is not active") -> None:
        super().__init__(message)


class MerchantRequiredError(OrderError):
    def __init__(self, message: str = "merchant_id is required") -> None:
        super().__init__(message)


class PaymentFailedError(OrderError):
    def __init__(self, message: str = "payment authorization failed") -> None:
        super().__init__(message)


class OrderStatus(str, Enum):
    PENDING_PAYMENT = "PENDING_PAYMENT"
    AUTHORIZED = "AUTHORIZED"
    PAID = "PAID"
    REFUNDED = "REFUNDED"
    FAILED = "FAILED"


@dataclasses.dataclass(frozen=True)
class PriceBreakdown:
    """Original price, discount, tax and the final amount charged."""

    original_amount: Money
    discount_amount: Money
    tax_amount: Money
    final_amount: Money


@dataclasses.dataclass(frozen=True)
class OrderCreated(DomainEvent):
    order_id: str
    user_id: str
    amount: int
    currency: str
    occurred_at: datetime

    def event_name(self) -> str:
        return "order.created"


@dataclasses.dataclass(frozen=True)
class OrderPaid(DomainEvent):
    order_id: str
    transaction_id: str
    amount: int
    currency: str
    occurred_at: datetime

    def event_name(self) -> str:
        return "order.paid"


@dataclasses.dataclass(frozen=True)
class OrderRefunded(DomainEvent):
    order_id: str
    transaction_id: str
    occurred_at: datetime

    def event_name(self) -> str:
        return "order.refunded"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_order_id() -> str:
    """Return a fresh, unique order ID."""
    return str(uuid.uuid4())


@dataclasses.dataclass
class Order:
    """Order aggregate root.

    PENDING_PAYMENT -> AUTHORIZED -> PAID -> REFUNDED, or PENDING_PAYMENT -> FAILED.
    """

    id: str
    user_id: str
    merchant_id: str
    product_id: str
    product_name: str
    price: PriceBreakdown
    coupon_id: str = ""
    status: OrderStatus = OrderStatus.PENDING_PAYMENT
    transaction_id: str = ""
    created_at: datetime = dataclasses.field(default_factory=_utc_now)
    paid_at: datetime | None = None
    events: list[DomainEvent] = dataclasses.field(default_factory=list)

    def _require(self, status: OrderStatus) -> None:
        if self.status is not status:
            raise InvalidStateTransitionError()

    def mark_authorized(self, transaction_id: str) -> None:
        """PENDING_PAYMENT -> AUTHORIZED, recording the payment transaction."""
        self._require(OrderStatus.PENDING_PAYMENT)
        self.status = OrderStatus.AUTHORIZED
        self.transaction_id = transaction_id

    def mark_paid(self) -> None:
        """AUTHORIZED -> PAID."""
        self._require(OrderStatus.AUTHORIZED)
        now = _utc_now()
        self.status = OrderStatus.PAID
        self.paid_at = now
        self.events.append(
            OrderPaid(
                order_id=self.id,
                transaction_id=self.transaction_id,
                amount=self.price.final_amount.amount,
                currency=self.price.final_amount.currency,
                occurred_at=now,
            )
        )

    def mark_refunded(self) -> None:
        """PAID -> REFUNDED."""
        self._require(OrderStatus.PAID)
        self.status = OrderStatus.REFUNDED
        self.events.append(
            OrderRefunded(
                order_id=self.id,
                transaction_id=self.transaction_id,
                occurred_at=_utc_now(),
            )
        )

    def mark_failed(self) -> None:
        """PENDING_PAYMENT -> FAILED, when authorization is declined."""
        self._require(OrderStatus.PENDING_PAYMENT)
        self.status = OrderStatus.FAILED

    def clear_events(self) -> list[DomainEvent]:
        """Return the pending events and forget them."""
        events, self.events = self.events, []
        return events


def new_order(
    user_id: str,
    merchant_id: str,
    product_id: str,
    product_name: str,
    price: PriceBreakdown,
    coupon_id: str,
) -> Order:
    """Create a PENDING_PAYMENT order and record an ``order.created`` event."""
    order = Order(
        id=new_order_id(),
        user_id=user_id,
        merchant_id=merchant_id,
        product_id=product_id,
        product_name=product_name,
        price=price,
        coupon_id=coupon_id,
    )
    order.events.append(
        OrderCreated(
            order_id=order.id,
            user_id=user_id,
            amount=price.final_amount.amount,
            currency=price.final_amount.currency,
            occurred_at=order.created_at,
        )
    )
    return order