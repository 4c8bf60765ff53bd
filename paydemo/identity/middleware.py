"""Authentication middleware that puts the user ID on the request context."""

from __future__ import annotations

import dataclasses
from http import HTTPStatus

from paydemo.identity.auth import AuthUseCase
from paydemo.shared import httputil
from paydemo.shared.auth import user_id_from_context, with_user_id
from paydemo.shared.httputil import Handler, Request, Response

__all__ = ["AuthMiddleware", "user_id_from_context", "with_user_id"]

_BEARER_PREFIX = "Bearer "


class AuthMiddleware:
    """Rejects requests without a valid bearer token; passes the rest on."""

    def __init__(self, auth_use_case: AuthUseCase) -> None:
        self._auth = auth_use_case

    def handle(self, next_handler: Handler) -> Handler:
        """Wrap ``next_handler`` so it only sees authenticated requests."""

        def authenticated(request: Request) -> Response:
            header = request.headers.get("authorization", "")
            token = header[len(_BEARER_PREFIX):] if header.startswith(_BEARER_PREFIX) else header
            if not token:
                return httputil.error("missing authorization token", HTTPStatus.UNAUTHORIZED)

            try:
                user = self._auth.authenticate(token)
            except Exception as exc:
                return httputil.error(str(exc), HTTPStatus.UNAUTHORIZED)

            context = with_user_id(request.context, user.id)
            return next_handler(dataclasses.replace(request, context=context))

        return authenticated