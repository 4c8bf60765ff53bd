"""In-memory user and session repositories seeded with demo accounts."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from paydemo.identity.model import (
    InvalidTokenError,
    Session,
    SessionRepository,
    User,
    UserNotFoundError,
    UserRepository,
    UserStatus,
)

__all__ = ["InMemorySessionRepository", "InMemoryUserRepository"]


def _demo_sessions() -> list[Session]:
    now = datetime.now(timezone.utc)
    day = timedelta(hours=24)
    return [
        Session("sess_1", "user_alice", "token_alice", now + day),
        Session("sess_2", "user_bob", "token_bob", now + day),
        Session("sess_3", "user_banned", "token_banned", now + day),
        Session("sess_4", "user_alice", "token_expired", now - timedelta(hours=1)),
    ]


def _demo_users() -> list[User]:
    return [
        User("user_alice", "alice_game_123", "game_1", UserStatus.ACTIVE),
        User("user_bob", "bob_game_456", "game_1", UserStatus.ACTIVE),
        User("user_banned", "banned_789", "game_1", UserStatus.BANNED),
    ]


class InMemorySessionRepository(SessionRepository):
    """Sessions keyed by access token; seeded with demo sessions by default."""

    def __init__(self, sessions: Iterable[Session] | None = None) -> None:
        self._lock = threading.Lock()
        seed = _demo_sessions() if sessions is None else sessions
        self._data = {session.access_token: session for session in seed}

    def find_by_access_token(self, token: str) -> Session:
        with self._lock:
            try:
                return self._data[token]
            except KeyError:
                raise InvalidTokenError() from None


class InMemoryUserRepository(UserRepository):
    """Users keyed by ID; seeded with demo users by default."""

    def __init__(self, users: Iterable[User] | None = None) -> None:
        self._lock = threading.Lock()
        seed = _demo_users() if users is None else users
        self._data = {user.id: user for user in seed}

    def find_by_id(self, user_id: str) -> User:
        with self._lock:
            try:
                return self._data[user_id]
            except KeyError:
                raise UserNotFoundError() from None