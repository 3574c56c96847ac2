"""Password hashing and bearer-token utilities.

Tokens are stateless HS256 JWTs carrying the user's id, email and role.
Raw passwords and tokens are never logged.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass

import jwt
from loguru import logger
from passlib.context import CryptContext

from errors import AuthError

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller as decoded from a token."""

    id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Raises:
        ValueError: If password is empty
    """
    if not password:
        raise ValueError("Password cannot be empty")
    # bcrypt hard limit: 72 bytes
    return pwd_context.hash(password[:72])


def verify_password(plain: str, hashed: str) -> bool:
    if not plain or not hashed:
        return False
    return pwd_context.verify(plain[:72], hashed)


class TokenService:
    """Issues and verifies access tokens."""

    ALGORITHM = "HS256"

    def __init__(self, secret: str, expire_days: int = 7) -> None:
        self.secret = secret
        self.expire_days = expire_days

    def issue(self, user: dict) -> str:
        now = datetime.datetime.now(datetime.timezone.utc)
        payload = {
            "id": int(user["id"]),
            "email": user["email"],
            "role": user["role"],
            "iat": now,
            "exp": now + datetime.timedelta(days=self.expire_days),
        }
        return jwt.encode(payload, self.secret, algorithm=self.ALGORITHM)

    def verify(self, token: str) -> Identity:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.ALGORITHM])
            return Identity(
                id=int(payload["id"]),
                email=str(payload["email"]),
                role=str(payload["role"]),
            )
        except (jwt.PyJWTError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Token rejected: {type(e).__name__}")
            raise AuthError("Invalid token") from e

    def identity_from_header(self, authorization: str | None) -> Identity:
        """Resolve an ``Authorization: Bearer`` header value."""
        header = authorization or ""
        if not header.startswith("Bearer "):
            raise AuthError("Missing token")
        return self.verify(header[len("Bearer "):])
