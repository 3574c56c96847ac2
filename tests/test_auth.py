import datetime
import os
import sys

import jwt
import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from auth import TokenService, hash_password, verify_password
from errors import AuthError


def test_password_hashing():
    hashed = hash_password("secret1")
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("", hashed)
    with pytest.raises(ValueError):
        hash_password("")


def test_token_round_trip():
    tokens = TokenService("s3cret")
    identity = tokens.verify(tokens.issue({"id": 4, "email": "a@b.c", "role": "ADMIN"}))
    assert identity.id == 4
    assert identity.is_admin


def test_token_rejections():
    tokens = TokenService("s3cret")
    other = TokenService("different")
    with pytest.raises(AuthError):
        tokens.verify(other.issue({"id": 1, "email": "a@b.c", "role": "USER"}))
    expired = jwt.encode(
        {
            "id": 1,
            "email": "a@b.c",
            "role": "USER",
            "exp": datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(hours=1),
        },
        "s3cret",
        algorithm="HS256",
    )
    with pytest.raises(AuthError):
        tokens.verify(expired)
    with pytest.raises(AuthError) as exc:
        tokens.identity_from_header("Token abc")
    assert exc.value.message == "Missing token"
