"""HTTP adapter for the order context."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from paydemo.order.model import (
    InvalidStateTransitionError,
    MerchantRequiredError,
    Order,
    OrderNotFoundError,
    PaymentFailedError,
    ProductNotActiveError,
    ProductNotFoundError,
)
from paydemo.order.usecase import CreateOrderRequest, OrderUseCase, PaymentDetail
from paydemo.shared import httputil
from paydemo.shared.auth import user_id_from_context
from paydemo.shared.httputil import Request, Response, Router

__all__ = ["OrderHandler", "map_error_status"]

_CREATE_FIELDS: dict[str, type] = {
    "merchant_id": str,
    "product_id": str,
    "coupon_code": str,
    "payment_method": str,
    "token_id": str,
    "last4": str,
    "brand": str,
    "saved_card_id": str,
    "save_card": bool,
    "paypal_order_id": str,
    "paypal_payer_id": str,
}
_ORDER_ID_FIELDS: dict[str, type] = {"order_id": str}
_OMIT_WHEN_EMPTY = ("discount_amount", "tax_amount", "coupon_id", "transaction_id")


def _decode_object(request: Request, fields: dict[str, type]) -> dict[str, Any]:
    data = request.json()
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("request body must be a JSON object")
    decoded: dict[str, Any] = {}
    for name, kind in fields.items():
        value = data.get(name)
        if value is None:
            value = kind()
        elif not isinstance(value, kind):
            raise ValueError(f"{name} must be of type {kind.__name__}")
        decoded[name] = value
    return decoded


def _to_response(order: Order) -> dict[str, Any]:
    body: dict[str, Any] = {
        "id": order.id,
        "user_id": order.user_id,
        "merchant_id": order.merchant_id,
        "product_id": order.product_id,
        "product_name": order.product_name,
        "status": order.status.value,
        "original_amount": order.price.original_amount.amount,
        "discount_amount": order.price.discount_amount.amount,
        "tax_amount": order.price.tax_amount.amount,
        "final_amount": order.price.final_amount.amount,
        "currency": order.price.final_amount.currency,
        "coupon_id": order.coupon_id,
        "transaction_id": order.transaction_id,
    }
    for name in _OMIT_WHEN_EMPTY:
        if not body[name]:
            del body[name]
    return body


def map_error_status(err: BaseException) -> int:
    """Map an order domain error to an HTTP status code."""
    if isinstance(err, (OrderNotFoundError, ProductNotFoundError)):
        return HTTPStatus.NOT_FOUND
    if isinstance(err, InvalidStateTransitionError):
        return HTTPStatus.CONFLICT
    if isinstance(err, (ProductNotActiveError, MerchantRequiredError)):
        return HTTPStatus.BAD_REQUEST
    if isinstance(err, PaymentFailedError):
        return HTTPStatus.UNPROCESSABLE_ENTITY
    return HTTPStatus.INTERNAL_SERVER_ERROR


def _unauthorized() -> Response:
    return httputil.error("unauthorized", HTTPStatus.UNAUTHORIZED)


class OrderHandler:
    """Serves ``/orders``, ``/orders/capture`` and ``/orders/refund``."""

    def __init__(self, use_case: OrderUseCase) -> None:
        self._use_case = use_case

    def register_routes(self, router: Router) -> None:
        router.add("/orders", self.handle_orders)
        router.add("/orders/capture", self.handle_capture)
        router.add("/orders/refund", self.handle_refund)

    def handle_orders(self, request: Request) -> Response:
        """POST creates an order; GET with ``?id=`` looks one up."""
        if request.method == "POST":
            return self._create_order(request)
        if request.method == "GET":
            return self._get_order(request)
        return httputil.error("method not allowed", HTTPStatus.METHOD_NOT_ALLOWED)

    def handle_capture(self, request: Request) -> Response:
        """POST ``{"order_id": ...}``: capture an authorized order."""
        return self._order_action(request, self._use_case.capture_order)

    def handle_refund(self, request: Request) -> Response:
        """POST ``{"order_id": ...}``: refund a paid order."""
        return self._order_action(request, self._use_case.refund_order)

    def _create_order(self, request: Request) -> Response:
        try:
            body = _decode_object(request, _CREATE_FIELDS)
        except ValueError:
            return httputil.error("invalid request body", HTTPStatus.BAD_REQUEST)

        if not body["merchant_id"]:
            return httputil.error("merchant_id is required", HTTPStatus.BAD_REQUEST)
        if not body["product_id"]:
            return httputil.error("product_id is required", HTTPStatus.BAD_REQUEST)
        method = body["payment_method"] or "CARD"
        if method == "CARD" and not body["saved_card_id"] and not body["token_id"]:
            return httputil.error(
                "saved_card_id or token_id is required for CARD payment",
                HTTPStatus.BAD_REQUEST,
            )
        if method == "PAYPAL" and (not body["paypal_order_id"] or not body["paypal_payer_id"]):
            return httputil.error(
                "paypal_order_id and paypal_payer_id are required for PAYPAL payment",
                HTTPStatus.BAD_REQUEST,
            )

        user_id = user_id_from_context(request.context)
        if user_id is None:
            return _unauthorized()

        try:
            order = self._use_case.create_order(
                CreateOrderRequest(
                    merchant_id=body["merchant_id"],
                    user_id=user_id,
                    product_id=body["product_id"],
                    coupon_code=body["coupon_code"],
                ),
                PaymentDetail(
                    card_token=body["token_id"],
                    card_last4=body["last4"],
                    card_brand=body["brand"],
                    saved_card_id=body["saved_card_id"],
                    save_card=body["save_card"],
                    payment_method=method,
                    paypal_order_id=body["paypal_order_id"],
                    paypal_payer_id=body["paypal_payer_id"],
                ),
            )
        except Exception as exc:
            return httputil.use_case_error(exc, map_error_status)
        return httputil.ok(_to_response(order))

    def _get_order(self, request: Request) -> Response:
        order_id = request.query.get("id", "")
        if not order_id:
            return httputil.error("id query parameter is required", HTTPStatus.BAD_REQUEST)
        user_id = user_id_from_context(request.context)
        if user_id is None:
            return _unauthorized()
        try:
            order = self._use_case.get_order(user_id, order_id)
        except Exception as exc:
            return httputil.use_case_error(exc, map_error_status)
        return httputil.ok(_to_response(order))

    def _order_action(self, request: Request, action) -> Response:
        if request.method != "POST":
            return httputil.error("method not allowed", HTTPStatus.METHOD_NOT_ALLOWED)
        user_id = user_id_from_context(request.context)
        if user_id is None:
            return _unauthorized()
        try:
            order_id = _decode_object(request, _ORDER_ID_FIELDS)["order_id"]
        except ValueError:
            order_id = ""
        if not order_id:
            return httputil.error("order_id is required", HTTPStatus.BAD_REQUEST)
        try:
            order = action(user_id, order_id)
        except Exception as exc:
            return httputil.use_case_error(exc, map_error_status)
        return httputil.ok(_to_response(order))