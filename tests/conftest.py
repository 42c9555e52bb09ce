from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ledgerreports.db.session import Base
from ledgerreports.report.store import ReportRequestStore
import ledgerreports.db.models  # noqa: F401 — register all models


@pytest.fixture()
async def engine():
    # StaticPool: every session shares the one in-memory database
    eng = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest.fixture()
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture()
async def session(session_factory) -> AsyncSession:
    async with session_factory() as sess:
        yield sess


@pytest.fixture()
def store(session_factory) -> ReportRequestStore:
    return ReportRequestStore(session_factory)


@pytest.fixture()
def ledger_dir(tmp_path) -> Path:
    path = tmp_path / "tmp"
    path.mkdir()
    return path


@pytest.fixture()
def output_dir(tmp_path) -> Path:
    return tmp_path / "out"


@pytest.fixture()
def write_ledger(ledger_dir):
    """Write ledger rows (list of CSV lines) to a file in the ledger directory."""

    def _write(name: str, lines: list[str]) -> Path:
        path = ledger_dir / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
