"""Root conftest — shared test configuration and database/client fixtures.

Invariants:
    - Environment is pinned before the application is imported
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - No tables exist at the start of a test: repositories provision on first write
    - get_db_manager and get_credentials dependencies overridden for route tests

Design Decisions:
    - SQLite in-memory on a StaticPool: every session sees the same database
    - bcrypt at 4 rounds: same code path, fast enough for many registrations per test
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import artist_registry.infrastructure.database as db_module  # noqa: E402
from artist_registry.api.dependencies import get_credentials  # noqa: E402
from artist_registry.infrastructure.credentials import CredentialService  # noqa: E402
from artist_registry.infrastructure.database import (  # noqa: E402
    DatabaseSessionManager, get_db_manager,
)
from artist_registry.infrastructure.schema import SchemaProvisioner  # noqa: E402
from artist_registry.main import app  # noqa: E402
from artist_registry.repositories import (  # noqa: E402
    AdminRepository, ArtistRepository, SongRepository, UserRepository,
)

TEST_SECRET = "test-secret-key"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    yield engine
    await engine.dispose()


@pytest.fixture
async def db_manager(test_engine):
    """DatabaseSessionManager bound to the test engine (skips pool sizing args)."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    return manager


@pytest.fixture
def provisioner(test_engine):
    return SchemaProvisioner(test_engine)


@pytest.fixture
def credentials():
    return CredentialService(TEST_SECRET, token_ttl_seconds=3600, bcrypt_rounds=4)


@pytest.fixture
def admin_repo(db_manager, provisioner, credentials):
    return AdminRepository(db_manager, provisioner, credentials, credentials)


@pytest.fixture
def user_repo(db_manager, provisioner, credentials):
    return UserRepository(db_manager, provisioner, credentials)


@pytest.fixture
def artist_repo(db_manager, provisioner):
    return ArtistRepository(db_manager, provisioner)


@pytest.fixture
def song_repo(db_manager, provisioner, artist_repo):
    return SongRepository(db_manager, provisioner, artist_repo)


@pytest.fixture
async def client(db_manager, credentials):
    """FastAPI test client with DB and credential dependencies overridden."""
    app.dependency_overrides[get_db_manager] = lambda: db_manager
    app.dependency_overrides[get_credentials] = lambda: credentials

    # Readiness probe reads the module singleton directly
    original_manager = db_module.db_manager
    db_module.db_manager = db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def auth_headers(credentials):
    token = credentials.issue_token({"email": "admin@x.com"})
    return {"Authorization": f"Bearer {token}"}


# ─── Payload factories ──────────────────────────────────────────

def _account_payload(**overrides) -> dict:
    payload = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "a@x.com",
        "password": "correct-horse",
        "phone": "9800000000",
        "dob": "1990-12-10",
        "gender": "f",
        "address": "Kathmandu",
    }
    payload.update(overrides)
    return payload


def _artist_payload(**overrides) -> dict:
    payload = {
        "name": "Nina Simone",
        "dob": "1933-02-21",
        "gender": "f",
        "address": "Tryon, North Carolina",
        "first_release_year": 1990,
        "no_of_albums_released": 3,
    }
    payload.update(overrides)
    return payload


def _song_payload(artist_id: int, **overrides) -> dict:
    payload = {
        "artist_id": artist_id,
        "title": "Feeling Good",
        "album_name": "I Put a Spell on You",
        "genre": "jazz",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def account_payload():
    return _account_payload


@pytest.fixture
def artist_payload():
    return _artist_payload


@pytest.fixture
def song_payload():
    return _song_payload
