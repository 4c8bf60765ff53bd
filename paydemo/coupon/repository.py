"""Coupon repository port and its in-memory implementation."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from paydemo.coupon.model import Coupon, CouponNotFoundError

__all__ = ["CouponRepository", "InMemoryCouponRepository"]


class CouponRepository(ABC):
    """Storage for coupon aggregates."""

    @abstractmethod
    def save(self, coupon: Coupon) -> None:
        """Insert or update a coupon."""

    @abstractmethod
    def find_by_id(self, coupon_id: str) -> Coupon:
        """Return the coupon; raise CouponNotFoundError if absent."""

    @abstractmethod
    def find_by_code(self, code: str) -> Coupon:
        """Return the coupon; raise CouponNotFoundError if absent."""


class InMemoryCouponRepository(CouponRepository):
    """Thread-safe in-memory coupon storage indexed by ID and code."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_id: dict[str, Coupon] = {}
        self._by_code: dict[str, Coupon] = {}

    def save(self, coupon: Coupon) -> None:
        with self._lock:
            self._by_id[coupon.id] = coupon
            self._by_code[coupon.code] = coupon

    def find_by_id(self, coupon_id: str) -> Coupon:
        with self._lock:
            try:
                return self._by_id[coupon_id]
            except KeyError:
                raise CouponNotFoundError() from None

    def find_by_code(self, code: str) -> Coupon:
        with self._lock:
            try:
                return self._by_code[code]
            except KeyError:
                raise CouponNotFoundError() from None