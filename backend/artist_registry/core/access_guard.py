"""Access Guard — pure allow/deny decision for a bearer-token Authorization header.

Invariants:
    - Stateless: the decision depends only on the header and the verifier
    - Missing, invalid and expired tokens are distinct denial reasons
    - An allowed decision carries the verified claims; a denied one carries none

Design Decisions:
    - Decision object instead of raising: the FastAPI dependency maps reasons to errors,
      keeping this module free of HTTP concerns
"""

from dataclasses import dataclass, field
from typing import Any

from artist_registry.core.domain_types import DenialReason
from artist_registry.core.errors import InvalidTokenError, TokenExpiredError
from artist_registry.core.repository_protocols import TokenVerifier


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    reason: DenialReason | None = None
    claims: dict[str, Any] = field(default_factory=dict)


def extract_bearer_token(header: str | None) -> str | None:
    """Return the credential part of 'Bearer <token>', or None when absent."""
    if not header:
        return None
    parts = header.strip().split(None, 1)
    if len(parts) == 2:
        return parts[1].strip() or None
    # A lone value is a token sent without a scheme; verification decides its fate
    return parts[0] if parts and parts[0].lower() != "bearer" else None


def evaluate_authorization(
    header: str | None, verifier: TokenVerifier,
) -> AccessDecision:
    """Decide whether a request carrying this Authorization header may proceed."""
    token = extract_bearer_token(header)
    if token is None:
        return AccessDecision(allowed=False, reason=DenialReason.MISSING)
    try:
        claims = verifier.verify_token(token)
    except TokenExpiredError:
        return AccessDecision(allowed=False, reason=DenialReason.EXPIRED)
    except InvalidTokenError:
        return AccessDecision(allowed=False, reason=DenialReason.INVALID)
    return AccessDecision(allowed=True, claims=claims)
