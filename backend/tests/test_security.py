import pytest

from halal_gains.core.security import (
    REFRESH_TOKEN,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_password_hash,
    user_id_from_token,
    verify_password,
)


def test_password_hash_round_trip():
    hashed = get_password_hash("ramadan-strong")
    assert hashed != "ramadan-strong"
    assert verify_password("ramadan-strong", hashed)
    assert not verify_password("wrong", hashed)


def test_access_token_carries_user_id():
    token = create_access_token(42)
    assert user_id_from_token(token) == 42
    assert decode_token(token)["type"] == "access"


def test_refresh_token_is_not_an_access_token():
    token = create_refresh_token(7)
    assert user_id_from_token(token, REFRESH_TOKEN) == 7
    with pytest.raises(ValueError):
        user_id_from_token(token)


def test_garbage_token_is_rejected():
    with pytest.raises(ValueError):
        decode_token("not-a-jwt")
