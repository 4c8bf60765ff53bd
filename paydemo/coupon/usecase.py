"""Use cases of the coupon context: creating and looking up coupons."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime

from paydemo.coupon.model import (
    Coupon,
    CouponCodeConflictError,
    CouponNotApplicableError,
    CouponNotFoundError,
    DiscountRule,
    DiscountType,
    new_coupon,
)
from paydemo.coupon.repository import CouponRepository

__all__ = ["CreateCouponRequest", "CouponUseCase"]

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class CreateCouponRequest:
    """Input for creating a coupon.

    ``discount_type`` is "PERCENTAGE" (value in basis points) or "FIXED"
    (value in cents); ``max_uses`` of 0 means unlimited.
    """

    code: str
    discount_type: str
    discount_value: int
    max_uses: int
    valid_from: datetime
    valid_until: datetime


class CouponUseCase:
    """Orchestrates the coupon context's use cases."""

    def __init__(self, repo: CouponRepository) -> None:
        self._repo = repo

    def create_coupon(self, request: CreateCouponRequest) -> Coupon:
        """Check the code is unused, build the coupon and store it."""
        try:
            self._repo.find_by_code(request.code)
        except CouponNotFoundError:
            pass
        else:
            raise CouponCodeConflictError()

        try:
            discount_type = DiscountType(request.discount_type)
        except ValueError:
            raise CouponNotApplicableError() from None

        coupon = new_coupon(
            request.code,
            DiscountRule(type=discount_type, value=request.discount_value),
            request.max_uses,
            request.valid_from,
            request.valid_until,
        )
        self._repo.save(coupon)
        self._publish_events(coupon)
        return coupon

    def get_coupon_by_code(self, code: str) -> Coupon:
        """Return the coupon with this code; raise CouponNotFoundError if absent."""
        return self._repo.find_by_code(code)

    @staticmethod
    def _publish_events(coupon: Coupon) -> None:
        for event in coupon.clear_events():
            logger.info("[DomainEvent] %s: %r", event.event_name(), event)