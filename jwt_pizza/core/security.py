from typing import Any

import jwt
from passlib.context import CryptContext

from jwt_pizza.core.config import Settings
from jwt_pizza.core.errors import InvalidToken


def build_password_context(settings: Settings) -> CryptContext:
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.bcrypt_rounds,
    )


def hash_password(context: CryptContext, password: str) -> str:
    return context.hash(password)


def verify_password(context: CryptContext, password: str, hashed_password: str) -> bool:
    return context.verify(password, hashed_password)


def extract_signature(token: str) -> str:
    """Return the third dot-separated segment, or "" when there are fewer than three."""
    parts = token.split(".")
    if len(parts) > 2:
        return parts[2]
    return ""


class TokenCodec:
    """Signs and verifies session tokens with the configured secret."""

    def __init__(self, settings: Settings):
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm

    def sign(self, payload: dict[str, Any]) -> str:
        # No exp claim: revocation is the only invalidation mechanism
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        if not isinstance(token, str) or token.count(".") != 2:
            raise InvalidToken()
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.PyJWTError as exc:
            raise InvalidToken(str(exc)) from exc
        if not isinstance(payload, dict) or "id" not in payload:
            raise InvalidToken("missing identity claims")
        return payload
