"""Identity context: users, sessions, their errors and repository ports."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum

__all__ = [
    "IdentityError",
    "UserNotFoundError",
    "UserBannedError",
    "InvalidTokenError",
    "SessionExpiredError",
    "UserStatus",
    "User",
    "Session",
    "UserRepository",
    "SessionRepository",
]


class IdentityError(Exception):
    """Base class for identity domain errors."""


class UserNotFoundError(IdentityError):
    def __init__(self, message: str = "user not found") -> None:
        super().__init__(message)


class UserBannedError(IdentityError):
    def __init__(self, message: str = "user is banned") -> None:
        super().__init__(message)


class InvalidTokenError(IdentityError):
    def __init__(self, message: str = "invalid access token") -> None:
        super().__init__(message)


class SessionExpiredError(IdentityError):
    def __init__(self, message: str = "session expired") -> None:
        super().__init__(message)


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    BANNED = "BANNED"


@dataclasses.dataclass
class User:
    """A user; ``external_id`` is the account ID on the game platform."""

    id: str
    external_id: str
    game_id: str
    status: UserStatus

    def is_banned(self) -> bool:
        return self.status is UserStatus.BANNED


@dataclasses.dataclass
class Session:
    """A login session identified by its access token."""

    id: str
    user_id: str
    access_token: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """True once ``now`` is strictly after the expiry time."""
        return now > self.expires_at


class UserRepository(ABC):
    @abstractmethod
    def find_by_id(self, user_id: str) -> User:
        """Return the user; raise UserNotFoundError if absent."""


class SessionRepository(ABC):
    @abstractmethod
    def find_by_access_token(self, token: str) -> Session:
        """Return the session; raise InvalidTokenError if absent."""