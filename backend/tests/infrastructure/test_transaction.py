"""Transaction Executor — verifies commit, rollback, re-raise, and release on every path.

Tests:
    - Success: begin, commit, close in that order
    - Failure: rollback, original exception re-raised, close
    - Commit failure: rollback and close
    - Against SQLite: a failed transaction leaves no row behind
"""

import pytest
from sqlalchemy import func, select

from artist_registry.core.domain_types import EntityKind
from artist_registry.models import Artist
from artist_registry.schemas.catalog import ArtistCreate


class _RecordingSession:
    def __init__(self, log, fail_commit=False):
        self.log = log
        self.fail_commit = fail_commit

    async def begin(self):
        self.log.append("begin")

    async def commit(self):
        self.log.append("commit")
        if self.fail_commit:
            raise RuntimeError("commit failed")

    async def rollback(self):
        self.log.append("rollback")

    async def close(self):
        self.log.append("close")


@pytest.fixture
def recorded(db_manager, monkeypatch):
    log: list[str] = []
    state = {"fail_commit": False}
    monkeypatch.setattr(
        db_manager, "_session_factory",
        lambda: _RecordingSession(log, state["fail_commit"]),
    )
    return log, state


async def test_success_commits_and_closes(db_manager, recorded):
    log, _ = recorded
    async with db_manager.transaction():
        log.append("work")
    assert log == ["begin", "work", "commit", "close"]


async def test_failure_rolls_back_reraises_and_closes(db_manager, recorded):
    log, _ = recorded

    class Boom(Exception):
        pass

    with pytest.raises(Boom):
        async with db_manager.transaction():
            raise Boom()
    assert log == ["begin", "rollback", "close"]


async def test_commit_failure_rolls_back_and_closes(db_manager, recorded):
    log, state = recorded
    state["fail_commit"] = True
    with pytest.raises(RuntimeError, match="commit failed"):
        async with db_manager.transaction():
            pass
    assert log == ["begin", "commit", "rollback", "close"]


async def test_read_session_always_closes(db_manager, recorded):
    log, _ = recorded
    with pytest.raises(ValueError):
        async with db_manager.session():
            raise ValueError()
    assert log == ["close"]


async def test_failed_transaction_persists_nothing(db_manager, provisioner, artist_payload):
    await provisioner.ensure(EntityKind.ARTIST)
    values = ArtistCreate(**artist_payload()).model_dump()
    with pytest.raises(RuntimeError):
        async with db_manager.transaction() as db:
            db.add(Artist(**values))
            await db.flush()
            raise RuntimeError("after insert")

    async with db_manager.session() as db:
        assert await db.scalar(select(func.count(Artist.id))) == 0


async def test_health_check_reports_connectivity(db_manager):
    assert await db_manager.health_check()
