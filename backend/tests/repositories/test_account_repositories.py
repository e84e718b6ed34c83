"""Account Repositories — verifies admin/user persistence, hashing, and login.

Invariants:
    - create then get returns stored fields verbatim, never the password
    - Passwords reach storage hashed on create and on update
    - Duplicate email -> DuplicateResourceError, exactly one row remains
    - Reads on an unprovisioned table are empty / not-found
    - update({}) changes nothing but updated_at, which advances
"""

from datetime import date

import pytest

from artist_registry.core.domain_types import EntityKind, PageRequest
from artist_registry.core.errors import (
    AuthenticationError, DuplicateResourceError, ResourceNotFoundError,
)
from artist_registry.schemas.accounts import AdminRegister, UserCreate


@pytest.fixture
def new_user(account_payload):
    def build(**overrides):
        return UserCreate(**account_payload(**overrides)).model_dump()
    return build


@pytest.fixture
def new_admin(account_payload):
    def build(**overrides):
        return AdminRegister(**account_payload(**overrides)).model_dump()
    return build


async def test_list_before_any_write_is_empty(user_repo, provisioner):
    page = await user_repo.list(PageRequest())
    assert page.items == []
    assert page.total == 0
    assert not await provisioner.exists(EntityKind.USER)


async def test_create_provisions_and_returns_id(user_repo, provisioner, new_user):
    user_id = await user_repo.create(new_user())
    assert isinstance(user_id, int)
    assert await provisioner.exists(EntityKind.USER)


async def test_create_then_get_round_trips_without_password(user_repo, new_user):
    fields = new_user()
    user_id = await user_repo.create(fields)
    user = await user_repo.get(user_id)

    assert "password" not in user
    assert user["id"] == user_id
    for key in ("first_name", "last_name", "email", "phone", "gender", "address"):
        assert user[key] == fields[key]
    assert user["dob"] == date(1990, 12, 10)
    assert user["created_at"] is not None
    assert user["updated_at"] is not None


async def test_password_is_stored_hashed(user_repo, credentials, new_user):
    await user_repo.create(new_user())
    row = await user_repo.find_by_email("a@x.com")
    assert row.password != "correct-horse"
    assert await credentials.verify_password("correct-horse", row.password)


async def test_password_supplied_to_update_is_stored_hashed(
    user_repo, credentials, new_user,
):
    user_id = await user_repo.create(new_user())
    updated = await user_repo.update(user_id, {"password": "plaintext-secret"})
    assert "password" not in updated

    row = await user_repo.find_by_email("a@x.com")
    assert row.password != "plaintext-secret"
    assert await credentials.verify_password("plaintext-secret", row.password)


async def test_duplicate_email_is_conflict_and_keeps_one_row(admin_repo, new_admin):
    await admin_repo.create(new_admin())
    with pytest.raises(DuplicateResourceError) as exc_info:
        await admin_repo.create(new_admin(first_name="Other"))
    assert exc_info.value.http_status == 409

    page = await admin_repo.list()
    assert page.total == 1
    assert page.items[0]["first_name"] == "Ada"


async def test_get_missing_is_not_found(user_repo, new_user):
    with pytest.raises(ResourceNotFoundError):
        await user_repo.get(1)
    await user_repo.create(new_user())
    with pytest.raises(ResourceNotFoundError):
        await user_repo.get(999)


async def test_list_is_ordered_and_paginated(user_repo, new_user):
    ids = [
        await user_repo.create(new_user(email=f"user{i}@x.com", first_name=f"U{i}"))
        for i in range(5)
    ]
    first = await user_repo.list(PageRequest(page=1, limit=2))
    second = await user_repo.list(PageRequest(page=2, limit=2))
    last = await user_repo.list(PageRequest(page=3, limit=2))

    assert [u["id"] for u in first.items] == ids[:2]
    assert [u["id"] for u in second.items] == ids[2:4]
    assert [u["id"] for u in last.items] == ids[4:]
    assert first.total == second.total == last.total == 5
    assert all("password" not in u for u in first.items)


async def test_empty_update_only_advances_updated_at(user_repo, new_user):
    user_id = await user_repo.create(new_user())
    before = await user_repo.get(user_id)

    await user_repo.update(user_id, {})
    after = await user_repo.get(user_id)

    assert after["updated_at"] > before["updated_at"]
    unchanged = {k: v for k, v in before.items() if k != "updated_at"}
    assert {k: after[k] for k in unchanged} == unchanged


async def test_partial_update_keeps_unsupplied_fields(user_repo, new_user):
    user_id = await user_repo.create(new_user())
    updated = await user_repo.update(user_id, {"address": "Pokhara", "phone": None})

    assert updated["address"] == "Pokhara"
    assert updated["phone"] == "9800000000"
    assert updated["first_name"] == "Ada"
    assert "password" not in updated


async def test_update_missing_never_creates(user_repo, new_user):
    await user_repo.create(new_user())
    with pytest.raises(ResourceNotFoundError):
        await user_repo.update(42, {"address": "Nowhere"})
    assert (await user_repo.list()).total == 1


async def test_delete_removes_row(user_repo, new_user):
    user_id = await user_repo.create(new_user())
    await user_repo.delete(user_id)
    with pytest.raises(ResourceNotFoundError):
        await user_repo.get(user_id)
    with pytest.raises(ResourceNotFoundError):
        await user_repo.delete(user_id)


async def test_login_returns_token_for_email(admin_repo, credentials, new_admin):
    await admin_repo.create(new_admin())
    token = await admin_repo.login("a@x.com", "correct-horse")
    assert credentials.verify_token(token)["email"] == "a@x.com"


async def test_login_unknown_email(admin_repo, new_admin):
    with pytest.raises(AuthenticationError, match="Invalid email!"):
        await admin_repo.login("a@x.com", "correct-horse")
    await admin_repo.create(new_admin())
    with pytest.raises(AuthenticationError, match="Invalid email!"):
        await admin_repo.login("b@x.com", "correct-horse")


async def test_login_wrong_password(admin_repo, new_admin):
    await admin_repo.create(new_admin())
    with pytest.raises(AuthenticationError, match="Incorrect password!"):
        await admin_repo.login("a@x.com", "wrong-password")


async def test_unknown_field_is_rejected(user_repo, new_user):
    with pytest.raises(ValueError, match="nickname"):
        await user_repo.create({**new_user(), "nickname": "ada"})
