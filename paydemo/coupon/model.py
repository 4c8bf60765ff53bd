"""Coupon aggregate, its value objects, domain event and errors."""

from __future__ import annotations

import dataclasses
import uuid
from datetime import datetime
from enum import Enum

from paydemo.shared.events import DomainEvent

__all__ = [
    "CouponError",
    "CouponNotFoundError",
    "CouponNotApplicableError",
    "CouponCodeConflictError",
    "DiscountType",
    "DiscountRule",
    "CouponStatus",
    "CouponApplied",
    "Coupon",
    "new_coupon",
]


class CouponError(Exception):
    """Base class for coupon domain errors."""


class CouponNotFoundError(CouponError):
    """No coupon exists for the given ID or code."""

    def __init__(self, message: str = "coupon not found") -> None:
        super().__init__(message)


class CouponNotApplicableError(CouponError):
    """The coupon is expired, exhausted or not active."""

    def __init__(self, message: str = "coupon is expired, exhausted or inactive") -> None:
        super().__init__(message)


class CouponCodeConflictError(CouponError):
    """A coupon with the same code already exists."""

    def __init__(self, message: str = "coupon code already exists") -> None:
        super().__init__(message)


class DiscountType(str, Enum):
    """How a discount value is interpreted."""

    PERCENTAGE = "PERCENTAGE"  # basis points, 1000 = 10.00%
    FIXED = "FIXED"  # smallest currency unit, e.g. cents


@dataclasses.dataclass(frozen=True)
class DiscountRule:
    """A discount: basis points for PERCENTAGE, cents for FIXED."""

    type: DiscountType
    value: int


class CouponStatus(str, Enum):
    ACTIVE = "ACTIVE"
    EXHAUSTED = "EXHAUSTED"
    EXPIRED = "EXPIRED"


@dataclasses.dataclass(frozen=True)
class CouponApplied(DomainEvent):
    """Raised when a coupon is successfully applied."""

    coupon_id: str
    user_id: str
    occurred_at: datetime

    def event_name(self) -> str:
        return "coupon.applied"


@dataclasses.dataclass
class Coupon:
    """Coupon aggregate root: ACTIVE -> EXHAUSTED | EXPIRED."""

    id: str
    code: str
    rule: DiscountRule
    max_uses: int  # 0 means unlimited
    valid_from: datetime
    valid_until: datetime
    used_count: int = 0
    status: CouponStatus = CouponStatus.ACTIVE
    events: list[DomainEvent] = dataclasses.field(default_factory=list)

    def _limit_reached(self) -> bool:
        return self.max_uses > 0 and self.used_count >= self.max_uses

    def is_applicable(self, now: datetime) -> bool:
        """Active, within its validity window and with uses left."""
        if self.status is not CouponStatus.ACTIVE:
            return False
        if now < self.valid_from or now > self.valid_until:
            return False
        return not self._limit_reached()

    def apply(self, user_id: str, now: datetime) -> None:
        """Use the coupon once; becomes EXHAUSTED when the limit is reached."""
        if not self.is_applicable(now):
            raise CouponNotApplicableError()
        self.used_count += 1
        if self._limit_reached():
            self.status = CouponStatus.EXHAUSTED
        self.events.append(CouponApplied(coupon_id=self.id, user_id=user_id, occurred_at=now))

    def rollback(self) -> None:
        """Undo one use and restore ACTIVE if the coupon was exhausted."""
        if self.used_count > 0:
            self.used_count -= 1
        if self.status is CouponStatus.EXHAUSTED:
            self.status = CouponStatus.ACTIVE

    def mark_expired(self) -> None:
        self.status = CouponStatus.EXPIRED

    def clear_events(self) -> list[DomainEvent]:
        """Return the pending events and forget them."""
        events, self.events = self.events, []
        return events


def new_coupon(
    code: str,
    rule: DiscountRule,
    max_uses: int,
    valid_from: datetime,
    valid_until: datetime,
) -> Coupon:
    """Create an ACTIVE coupon with a fresh ID."""
    return Coupon(
        id=str(uuid.uuid4()),
        code=code,
        rule=rule,
        max_uses=max_uses,
        valid_from=valid_from,
        valid_until=valid_until,
    )