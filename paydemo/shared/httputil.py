"""Minimal HTTP request/response types, routing and JSON response helpers."""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Callable, Mapping
from enum import Enum
from http import HTTPStatus
from typing import Any

__all__ = [
    "Request",
    "Response",
    "Router",
    "Handler",
    "ok",
    "created",
    "error",
    "use_case_error",
]

logger = logging.getLogger(__name__)

_JSON_HEADERS = {"Content-Type": "application/json"}


@dataclasses.dataclass(frozen=True)
class Request:
    """An incoming request. Header names are stored lower-cased."""

    method: str
    path: str
    query: Mapping[str, str] = dataclasses.field(default_factory=dict)
    headers: Mapping[str, str] = dataclasses.field(default_factory=dict)
    body: bytes | str = b""
    context: Mapping[Any, Any] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "headers", {name.lower(): value for name, value in self.headers.items()}
        )

    def json(self) -> Any:
        """Decode the body as JSON; raises ValueError if it is not valid JSON."""
        return json.loads(self.body)


@dataclasses.dataclass
class Response:
    """An outgoing response."""

    status: int = HTTPStatus.OK
    headers: dict[str, str] = dataclasses.field(default_factory=dict)
    body: bytes = b""

    def json(self) -> Any:
        """Decode the body as JSON."""
        return json.loads(self.body)


Handler = Callable[[Request], Response]


class Router:
    """Dispatches requests to handlers registered for exact paths."""

    def __init__(self) -> None:
        self._routes: dict[str, Handler] = {}

    def add(self, path: str, handler: Handler) -> None:
        """Register ``handler`` for ``path``; a path may be registered once."""
        if path in self._routes:
            raise ValueError(f"multiple registrations for {path}")
        self._routes[path] = handler

    def dispatch(self, request: Request) -> Response:
        """Call the handler registered for the request's path."""
        handler = self._routes.get(request.path)
        if handler is None:
            return Response(
                HTTPStatus.NOT_FOUND,
                {"Content-Type": "text/plain; charset=utf-8"},
                b"404 page not found\n",
            )
        return handler(request)


def _to_jsonable(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _json_response(status: int, data: Any, label: str) -> Response:
    try:
        body = (json.dumps(data, default=_to_jsonable) + "\n").encode()
    except (TypeError, ValueError) as exc:
        logger.error("[httputil] %s encode error: %s", label, exc)
        body = b""
    return Response(status, dict(_JSON_HEADERS), body)


def ok(data: Any) -> Response:
    """A 200 JSON response."""
    return _json_response(HTTPStatus.OK, data, "OK")


def created(data: Any) -> Response:
    """A 201 JSON response."""
    return _json_response(HTTPStatus.CREATED, data, "Created")


def error(message: str, status: int) -> Response:
    """A JSON error response of the form ``{"error": message}``."""
    return _json_response(status, {"error": message}, "Error")


def use_case_error(err: BaseException, map_status: Callable[[BaseException], int]) -> Response:
    """Map a business error to a response; server errors hide their message."""
    status = map_status(err)
    message = str(err)
    if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
        message = "internal server error"
    return error(message, status)