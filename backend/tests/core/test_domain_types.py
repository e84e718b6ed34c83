"""Domain Types — verifies entity kinds, enumerated domains, and page resolution.

Tests:
    - EntityKind values are table names
    - Enumerated domains match the storage enum types
    - resolve_page falls back to 1/10 for absent, non-numeric, and out-of-range input
"""

from artist_registry.core.domain_types import (
    GENDERS, GENRES, EntityKind, PageRequest, resolve_page,
)


def test_entity_kind_values_are_table_names():
    assert {k.value for k in EntityKind} == {"admins", "users", "artists", "songs"}


def test_enumerated_domains():
    assert GENDERS == ("m", "f", "o")
    assert set(GENRES) == {"rnb", "country", "classic", "rock", "jazz"}


def test_resolve_page_defaults_when_absent():
    assert resolve_page() == PageRequest(page=1, limit=10)


def test_resolve_page_parses_numeric_strings():
    request = resolve_page("3", "5")
    assert request.page == 3
    assert request.limit == 5
    assert request.offset == 10


def test_resolve_page_non_numeric_falls_back():
    assert resolve_page("abc", "1.5") == PageRequest(page=1, limit=10)


def test_resolve_page_rejects_zero_and_negative():
    assert resolve_page("0", "-4") == PageRequest(page=1, limit=10)


def test_first_page_has_zero_offset():
    assert PageRequest(page=1, limit=25).offset == 0
