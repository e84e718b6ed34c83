"""Credential Service — bcrypt password hashing and HS256 bearer tokens.

Invariants:
    - Passwords are stored only as salted bcrypt hashes
    - Tokens always carry the subject's email, iat, and an absolute exp
    - verify_token distinguishes TokenExpiredError from InvalidTokenError

Design Decisions:
    - bcrypt work runs in a worker thread (asyncio.to_thread), off the event loop
    - PyJWT with a single shared secret; no key rotation
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

from artist_registry.config import Settings
from artist_registry.core.errors import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"


class CredentialService:
    """Hashes/verifies passwords and issues/verifies bearer tokens."""

    def __init__(
        self,
        secret_key: str,
        token_ttl_seconds: int = 3600,
        bcrypt_rounds: int = 10,
    ):
        self._secret_key = secret_key
        self._token_ttl = timedelta(seconds=token_ttl_seconds)
        self._bcrypt_rounds = bcrypt_rounds

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialService":
        return cls(
            settings.secret_key,
            token_ttl_seconds=settings.token_ttl_seconds,
            bcrypt_rounds=settings.bcrypt_rounds,
        )

    # ─── Passwords ──────────────────────────────────────────────

    def _hash_sync(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self._bcrypt_rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def _verify_sync(plaintext: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # stored value is not a bcrypt hash
            return False

    async def hash_password(self, plaintext: str) -> str:
        return await asyncio.to_thread(self._hash_sync, plaintext)

    async def verify_password(self, plaintext: str, hashed: str) -> bool:
        return await asyncio.to_thread(self._verify_sync, plaintext, hashed)

    # ─── Tokens ─────────────────────────────────────────────────

    def issue_token(self, claims: dict[str, Any]) -> str:
        """Sign claims with an expiry of now + token TTL."""
        now = datetime.now(timezone.utc)
        payload = {**claims, "iat": now, "exp": now + self._token_ttl}
        return jwt.encode(payload, self._secret_key, algorithm=TOKEN_ALGORITHM)

    def verify_token(self, token: str) -> dict[str, Any]:
        """Return the token's claims or raise TokenExpiredError / InvalidTokenError."""
        try:
            return jwt.decode(
                token, self._secret_key, algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            logger.warning(f"Error verifying token: {e}")
            raise InvalidTokenError() from e
