"""Domain Types — entity kinds, enumerated domains, and pagination values.

Invariants:
    - EntityKind values are the storage table names
    - GENDERS and GENRES are the only values the gender/genre enum types accept
    - PageRequest.page >= 1 and PageRequest.limit >= 1 (enforced by resolve_page)

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - Enumerated domains declared once as Literals; the tuples derive from them
      so the ORM enum types and the request schemas cannot drift apart
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, NewType, get_args


# ─── Identity Types ──────────────────────────────────────────────

EntityId = NewType("EntityId", int)


# ─── Enumerated Domains ──────────────────────────────────────────

Gender = Literal["m", "f", "o"]
Genre = Literal["rnb", "country", "classic", "rock", "jazz"]

GENDERS: tuple[str, ...] = get_args(Gender)
GENRES: tuple[str, ...] = get_args(Genre)


class EntityKind(str, Enum):
    """Every persisted entity kind — value is its table name."""
    ADMIN = "admins"
    USER = "users"
    ARTIST = "artists"
    SONG = "songs"


class DenialReason(str, Enum):
    """Why the access guard refused a request."""
    MISSING = "missing"
    INVALID = "invalid"
    EXPIRED = "expired"


# ─── Pagination ──────────────────────────────────────────────────

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page:
    """One ordered slice of an entity table plus the table's row count."""
    items: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0


def _coerce_positive(raw: object, default: int) -> int:
    try:
        value = int(str(raw))
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def resolve_page(page: object = None, limit: object = None) -> PageRequest:
    """Build a PageRequest from raw query values, falling back to 1/10."""
    return PageRequest(
        page=_coerce_positive(page, DEFAULT_PAGE),
        limit=_coerce_positive(limit, DEFAULT_LIMIT),
    )
