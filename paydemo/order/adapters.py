"""Adapters for the order context's ports: coupons, storage and tax rates."""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime, timezone

from paydemo.coupon.model import CouponNotApplicableError, CouponNotFoundError
from paydemo.coupon.repository import CouponRepository
from paydemo.order.model import Order, OrderNotFoundError
from paydemo.order.ports import AppliedCoupon, CouponApplier, OrderRepository, TaxRateQuery

__all__ = ["CouponAdapter", "InMemoryOrderRepository", "StaticTaxQuery"]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CouponAdapter(CouponApplier):
    """Applies and rolls back coupons stored in a coupon repository."""

    def __init__(
        self, repo: CouponRepository, clock: Callable[[], datetime] = _utc_now
    ) -> None:
        self._repo = repo
        self._clock = clock

    def apply(self, coupon_code: str, user_id: str) -> AppliedCoupon:
        try:
            coupon = self._repo.find_by_code(coupon_code)
        except Exception:
            raise CouponNotFoundError() from None
        now = self._clock()
        if not coupon.is_applicable(now):
            raise CouponNotApplicableError()
        coupon.apply(user_id, now)
        self._repo.save(coupon)
        return AppliedCoupon(
            coupon_id=coupon.id,
            discount_type=coupon.rule.type.value,
            discount_value=coupon.rule.value,
        )

    def rollback(self, coupon_code: str) -> None:
        coupon = self._repo.find_by_code(coupon_code)
        coupon.rollback()
        self._repo.save(coupon)


class InMemoryOrderRepository(OrderRepository):
    """Thread-safe in-memory order storage."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._orders: dict[str, Order] = {}

    def save(self, order: Order) -> None:
        with self._lock:
            self._orders[order.id] = order

    def find_by_id(self, order_id: str) -> Order:
        with self._lock:
            try:
                return self._orders[order_id]
            except KeyError:
                raise OrderNotFoundError() from None


class StaticTaxQuery(TaxRateQuery):
    """A fixed tax rate in basis points, with per-product overrides."""

    def __init__(self, default_bp: int) -> None:
        self._default_bp = default_bp
        self._overrides: dict[str, int] = {}

    def with_override(self, product_id: str, bp: int) -> StaticTaxQuery:
        """Set the rate for one product; returns self for chaining."""
        self._overrides[product_id] = bp
        return self

    def find_tax_rate(self, product_id: str, currency: str) -> int:
        return self._overrides.get(product_id, self._default_bp)