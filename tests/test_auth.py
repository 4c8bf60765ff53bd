from paydemo.shared.auth import user_id_from_context, with_user_id


def test_round_trip():
    ctx = with_user_id({}, "user_alice")
    assert user_id_from_context(ctx) == "user_alice"


def test_missing_user_id():
    assert user_id_from_context({}) is None
    assert user_id_from_context(None) is None


def test_original_context_unchanged():
    original = {"request_id": "r1"}
    ctx = with_user_id(original, "user_bob")
    assert user_id_from_context(original) is None
    assert original == {"request_id": "r1"}
    assert ctx["request_id"] == "r1"


def test_overwrite():
    ctx = with_user_id(with_user_id(None, "first"), "second")
    assert user_id_from_context(ctx) == "second"


def test_plain_string_key_does_not_count():
    assert user_id_from_context({"user_id": "user_alice"}) is None