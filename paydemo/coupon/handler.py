"""HTTP adapter for the coupon context."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from http import HTTPStatus
from typing import Any

from paydemo.coupon.model import (
    Coupon,
    CouponCodeConflictError,
    CouponNotApplicableError,
    CouponNotFoundError,
)
from paydemo.coupon.usecase import CouponUseCase, CreateCouponRequest
from paydemo.shared import httputil
from paydemo.shared.httputil import Request, Response, Router

__all__ = ["CouponHandler", "map_error_status"]

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})"
)

_FIELD_TYPES: dict[str, type] = {
    "code": str,
    "discount_type": str,
    "discount_value": int,
    "max_uses": int,
    "valid_from": str,
    "valid_until": str,
}
_ZERO_VALUES: dict[type, Any] = {str: "", int: 0}


def _parse_rfc3339(text: str) -> datetime:
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise ValueError(f"not an RFC 3339 timestamp: {text!r}")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        if hours > 23 or minutes > 59:
            raise ValueError(f"invalid time zone offset: {zone}")
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
    )


def _format_rfc3339(moment: datetime) -> str:
    base = moment.strftime("%Y-%m-%dT%H:%M:%S")
    offset = moment.utcoffset()
    if not offset:
        return base + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    total_minutes = abs(int(offset.total_seconds())) // 60
    return f"{base}{sign}{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def _decode_create_body(request: Request) -> dict[str, Any]:
    data = request.json()
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("request body must be a JSON object")
    fields: dict[str, Any] = {}
    for name, kind in _FIELD_TYPES.items():
        value = data.get(name)
        if value is None:
            value = _ZERO_VALUES[kind]
        elif kind is int and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValueError(f"{name} must be an integer")
        elif kind is str and not isinstance(value, str):
            raise ValueError(f"{name} must be a string")
        fields[name] = value
    return fields


def _to_response(coupon: Coupon) -> dict[str, Any]:
    return {
        "coupon_id": coupon.id,
        "code": coupon.code,
        "discount_type": coupon.rule.type.value,
        "discount_value": coupon.rule.value,
        "max_uses": coupon.max_uses,
        "used_count": coupon.used_count,
        "valid_from": _format_rfc3339(coupon.valid_from),
        "valid_until": _format_rfc3339(coupon.valid_until),
        "status": coupon.status.value,
    }


def map_error_status(err: BaseException) -> int:
    """Map a coupon domain error to an HTTP status code."""
    if isinstance(err, CouponNotFoundError):
        return HTTPStatus.NOT_FOUND
    if isinstance(err, CouponCodeConflictError):
        return HTTPStatus.CONFLICT
    if isinstance(err, CouponNotApplicableError):
        return HTTPStatus.BAD_REQUEST
    return HTTPStatus.INTERNAL_SERVER_ERROR


class CouponHandler:
    """Serves ``/coupons``: POST creates a coupon, GET looks one up by code."""

    def __init__(self, use_case: CouponUseCase) -> None:
        self._use_case = use_case

    def register_routes(self, router: Router) -> None:
        router.add("/coupons", self.handle_coupons)

    def handle_coupons(self, request: Request) -> Response:
        if request.method == "POST":
            return self._create_coupon(request)
        if request.method == "GET":
            return self._get_coupon(request)
        return httputil.error("method not allowed", HTTPStatus.METHOD_NOT_ALLOWED)

    def _create_coupon(self, request: Request) -> Response:
        try:
            body = _decode_create_body(request)
        except ValueError:
            return httputil.error("invalid request body", HTTPStatus.BAD_REQUEST)

        if not body["code"]:
            return httputil.error("code is required", HTTPStatus.BAD_REQUEST)
        if not body["discount_type"]:
            return httputil.error("discount_type is required", HTTPStatus.BAD_REQUEST)

        try:
            valid_from = _parse_rfc3339(body["valid_from"])
        except ValueError:
            return httputil.error("valid_from must be RFC3339 format", HTTPStatus.BAD_REQUEST)
        try:
            valid_until = _parse_rfc3339(body["valid_until"])
        except ValueError:
            return httputil.error("valid_until must be RFC3339 format", HTTPStatus.BAD_REQUEST)

        try:
            coupon = self._use_case.create_coupon(
                CreateCouponRequest(
                    code=body["code"],
                    discount_type=body["discount_type"],
                    discount_value=body["discount_value"],
                    max_uses=body["max_uses"],
                    valid_from=valid_from,
                    valid_until=valid_until,
                )
            )
        except Exception as exc:
            return httputil.use_case_error(exc, map_error_status)
        return httputil.created(_to_response(coupon))

    def _get_coupon(self, request: Request) -> Response:
        code = request.query.get("code", "")
        if not code:
            return httputil.error("code query parameter is required", HTTPStatus.BAD_REQUEST)
        try:
            coupon = self._use_case.get_coupon_by_code(code)
        except Exception as exc:
            return httputil.use_case_error(exc, map_error_status)
        return httputil.ok(_to_response(coupon))