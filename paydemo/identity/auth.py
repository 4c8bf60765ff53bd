"""Authentication use case: resolve an access token to an active user."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from paydemo.identity.model import (
    InvalidTokenError,
    SessionExpiredError,
    SessionRepository,
    User,
    UserBannedError,
    UserRepository,
)

__all__ = ["AuthUseCase"]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuthUseCase:
    """Validates access tokens against sessions and users."""

    def __init__(
        self,
        users: UserRepository,
        sessions: SessionRepository,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._clock = clock

    def authenticate(self, access_token: str) -> User:
        """Return the user owning a live session for ``access_token``."""
        try:
            session = self._sessions.find_by_access_token(access_token)
        except Exception as exc:
            raise InvalidTokenError() from exc
        if session.is_expired(self._clock()):
            raise SessionExpiredError()

        user = self._users.find_by_id(session.user_id)
        if user.is_banned():
            raise UserBannedError()
        return user