from datetime import datetime, timedelta, timezone

import pytest

from paydemo.identity.auth import AuthUseCase
from paydemo.identity.model import (
    InvalidTokenError,
    Session,
    SessionExpiredError,
    UserBannedError,
    UserNotFoundError,
)
from paydemo.identity.repository import InMemorySessionRepository, InMemoryUserRepository


def make_sessions():
    now = datetime.now(timezone.utc)
    later = now + timedelta(hours=24)
    return InMemorySessionRepository([
        Session("sess_1", "user_alice", "token", later),
        Session("sess_3", "user_banned", "secret", later),
        Session("sess_4", "user_alice", "placeholder", now - timedelta(hours=1)),
        Session("sess_5", "user_ghost", "password", later),
    ])


@pytest.fixture
def use_case():
    return AuthUseCase(InMemoryUserRepository(), make_sessions())


def test_authenticate_returns_user(use_case):
    user = use_case.authenticate("token")
    assert user.id == "user_alice"
    assert user.is_banned() is False


def test_unknown_token_is_invalid():
    uc = AuthUseCase(InMemoryUserRepository(), InMemorySessionRepository([]))
    with pytest.raises(InvalidTokenError):
        uc.authenticate("token")


def test_expired_session(use_case):
    with pytest.raises(SessionExpiredError):
        use_case.authenticate("placeholder")


def test_banned_user(use_case):
    with pytest.raises(UserBannedError):
        use_case.authenticate("secret")


def test_session_of_missing_user(use_case):
    with pytest.raises(UserNotFoundError):
        use_case.authenticate("password")


def test_clock_decides_expiry():
    future = datetime.now(timezone.utc) + timedelta(days=2)
    uc = AuthUseCase(InMemoryUserRepository(), make_sessions(), clock=lambda: future)
    with pytest.raises(SessionExpiredError):
        uc.authenticate("token")