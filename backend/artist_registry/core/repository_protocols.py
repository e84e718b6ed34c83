"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Token verification and password hashing reached only through these Protocols

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
"""

from typing import Any, Protocol


class TokenVerifier(Protocol):
    """Verifies a bearer token — raises TokenExpiredError / InvalidTokenError."""
    def verify_token(self, token: str) -> dict[str, Any]: ...


class TokenIssuer(Protocol):
    def issue_token(self, claims: dict[str, Any]) -> str: ...


class PasswordHasher(Protocol):
    """One-way salted password hashing — implemented by shell."""
    async def hash_password(self, plaintext: str) -> str: ...
    async def verify_password(self, plaintext: str, hashed: str) -> bool: ...
