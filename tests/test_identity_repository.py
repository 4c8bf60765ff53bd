from datetime import datetime, timedelta, timezone

import pytest

from paydemo.identity.model import (
    InvalidTokenError,
    Session,
    User,
    UserNotFoundError,
    UserStatus,
)
from paydemo.identity.repository import InMemorySessionRepository, InMemoryUserRepository


def test_default_users_are_seeded():
    repo = InMemoryUserRepository()
    alice = repo.find_by_id("user_alice")
    assert alice.external_id == "alice_game_123"
    assert alice.game_id == "game_1"
    assert alice.status is UserStatus.ACTIVE
    assert repo.find_by_id("user_bob").external_id == "bob_game_456"
    assert repo.find_by_id("user_banned").is_banned() is True


def test_unknown_user_raises():
    with pytest.raises(UserNotFoundError):
        InMemoryUserRepository().find_by_id("user_nobody")


def test_custom_users_replace_seed():
    carol = User("user_carol", "carol_1", "game_2", UserStatus.ACTIVE)
    repo = InMemoryUserRepository([carol])
    assert repo.find_by_id("user_carol") is carol
    with pytest.raises(UserNotFoundError):
        repo.find_by_id("user_alice")


def test_custom_session_found_by_token():
    session = Session(
        id="sess_x",
        user_id="user_alice",
        access_token="token",
        expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
    )
    repo = InMemorySessionRepository([session])
    assert repo.find_by_access_token("token") is session


def test_unknown_token_raises():
    with pytest.raises(InvalidTokenError):
        InMemorySessionRepository().find_by_access_token("token")


def test_empty_session_repository():
    with pytest.raises(InvalidTokenError):
        InMemorySessionRepository([]).find_by_access_token("secret")