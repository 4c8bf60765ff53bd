"""Order use cases: price, create, authorize, capture, refund and look up orders."""

from __future__ import annotations

import dataclasses
import logging

from paydemo.order.model import (
    MerchantRequiredError,
    Order,
    OrderNotFoundError,
    PaymentFailedError,
    PriceBreakdown,
    ProductNotActiveError,
    new_order,
)
from paydemo.order.ports import (
    AppliedCoupon,
    CatalogQuery,
    ChargeRequest,
    CouponApplier,
    OrderRepository,
    PaymentCommand,
    TaxRateQuery,
)
from paydemo.order.pricing import calculate_final_amount
from paydemo.shared.money import Money

__all__ = ["CreateOrderRequest", "PaymentDetail", "OrderUseCase"]

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class CreateOrderRequest:
    """What the order context needs to create an order."""

    merchant_id: str
    user_id: str
    product_id: str
    coupon_code: str = ""


@dataclasses.dataclass(frozen=True)
class PaymentDetail:
    """Payment details passed through unchanged to the payment side."""

    card_token: str = ""
    card_last4: str = ""
    card_brand: str = ""
    saved_card_id: str = ""
    save_card: bool = False
    payment_method: str = ""  # "CARD" or "PAYPAL"
    paypal_order_id: str = ""
    paypal_payer_id: str = ""


@dataclasses.dataclass(frozen=True)
class _Pricing:
    breakdown: PriceBreakdown
    coupon: AppliedCoupon | None


class OrderUseCase:
    """Looks up the product, applies a coupon and tax, then authorizes payment.

    Payment only charges the order's final amount; all pricing is decided here.
    """

    def __init__(
        self,
        repo: OrderRepository,
        catalog: CatalogQuery,
        coupon_applier: CouponApplier | None,
        tax_query: TaxRateQuery | None,
        payment: PaymentCommand,
    ) -> None:
        self._repo = repo
        self._catalog = catalog
        self._coupon_applier = coupon_applier
        self._tax_query = tax_query
        self._payment = payment

    def create_order(self, request: CreateOrderRequest, payment: PaymentDetail) -> Order:
        """Create an order and authorize its payment; returns an AUTHORIZED order.

        If authorization fails the coupon is rolled back, the order is stored as
        FAILED and PaymentFailedError is raised with the order on its ``order``
        attribute.
        """
        if not request.merchant_id:
            raise MerchantRequiredError()

        product = self._catalog.find_product(request.product_id)
        if not product.is_active:
            raise ProductNotActiveError()

        original = Money(product.amount, product.currency)
        pricing = self._resolve_pricing(
            request.user_id, request.product_id, original, request.coupon_code
        )
        coupon_id = pricing.coupon.coupon_id if pricing.coupon is not None else ""
        final = pricing.breakdown.final_amount

        order = new_order(
            request.user_id,
            request.merchant_id,
            request.product_id,
            product.name,
            pricing.breakdown,
            coupon_id,
        )
        logger.info(
            "[OrderUseCase] CreateOrder: order=%s, user=%s, product=%s, final=%d %s",
            order.id,
            request.user_id,
            product.name,
            final.amount,
            final.currency,
        )

        try:
            result = self._payment.charge(
                ChargeRequest(
                    merchant_id=request.merchant_id,
                    user_id=request.user_id,
                    order_id=order.id,
                    amount=final,
                    card_token=payment.card_token,
                    card_last4=payment.card_last4,
                    card_brand=payment.card_brand,
                    saved_card_id=payment.saved_card_id,
                    save_card=payment.save_card,
                    payment_method=payment.payment_method,
                    paypal_order_id=payment.paypal_order_id,
                    paypal_payer_id=payment.paypal_payer_id,
                )
            )
        except Exception as exc:
            self._rollback_coupon(request.coupon_code)
            order.mark_failed()
            try:
                self._repo.save(order)
            except Exception as save_exc:
                logger.error("[OrderUseCase] failed to save failed order: %s", save_exc)
            failure = PaymentFailedError()
            failure.order = order
            raise failure from exc

        order.mark_authorized(result.transaction_id)
        try:
            self._repo.save(order)
        except Exception:
            self._rollback_coupon(request.coupon_code)
            raise
        self._publish_events(order)
        return order

    def capture_order(self, user_id: str, order_id: str) -> Order:
        """Capture the payment of the user's order: AUTHORIZED -> PAID."""
        order = self.get_order(user_id, order_id)
        self._payment.capture(user_id, order.transaction_id)
        order.mark_paid()
        self._repo.save(order)
        self._publish_events(order)
        return order

    def refund_order(self, user_id: str, order_id: str) -> Order:
        """Refund the user's order: PAID -> REFUNDED."""
        order = self.get_order(user_id, order_id)
        self._payment.refund(user_id, order.transaction_id)
        order.mark_refunded()
        self._repo.save(order)
        self._publish_events(order)
        return order

    def get_order(self, user_id: str, order_id: str) -> Order:
        """Return the order if it belongs to the user; else OrderNotFoundError."""
        order = self._repo.find_by_id(order_id)
        if order.user_id != user_id:
            raise OrderNotFoundError()
        return order

    def _resolve_pricing(
        self, user_id: str, product_id: str, original: Money, coupon_code: str
    ) -> _Pricing:
        coupon: AppliedCoupon | None = None
        discount_type = ""
        discount_value = 0
        if coupon_code and self._coupon_applier is not None:
            coupon = self._coupon_applier.apply(coupon_code, user_id)
            discount_type = coupon.discount_type
            discount_value = coupon.discount_value

        tax_bp = self._query_tax_rate(product_id, original.currency)
        try:
            final, discount, tax = calculate_final_amount(
                original, discount_type, discount_value, tax_bp
            )
        except Exception:
            self._rollback_coupon(coupon_code)
            raise
        return _Pricing(PriceBreakdown(original, discount, tax, final), coupon)

    def _query_tax_rate(self, product_id: str, currency: str) -> int:
        if self._tax_query is None:
            return 0
        try:
            return self._tax_query.find_tax_rate(product_id, currency)
        except Exception as exc:
            logger.warning(
                "[OrderUseCase] TaxRateQuery failed (productID=%s, currency=%s): %s — using 0",
                product_id,
                currency,
                exc,
            )
            return 0

    def _rollback_coupon(self, coupon_code: str) -> None:
        if not coupon_code or self._coupon_applier is None:
            return
        try:
            self._coupon_applier.rollback(coupon_code)
        except Exception as exc:
            logger.error("[OrderUseCase] coupon rollback failed: %s", exc)

    @staticmethod
    def _publish_events(order: Order) -> None:
        for event in order.clear_events():
            logger.info("[DomainEvent] %s: %r", event.event_name(), event)