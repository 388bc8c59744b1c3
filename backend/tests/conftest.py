"""Shared pytest fixtures for backend tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from sampoorna.config import AppSettings, reload_settings
from sampoorna.main import create_app
from sampoorna.services.settings_store import SettingsStore, get_settings_store, reset_settings_store
from sampoorna.storage import DatabaseManager, User
from sampoorna.storage.database import get_db_manager, shutdown_database


@pytest.fixture
def app_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AppSettings:
    """Point the database and upload directory at a per-test temp dir."""

    monkeypatch.setenv("SAMPOORNA_DATABASE_PATH", str(tmp_path / "sampoorna.db"))
    monkeypatch.setenv("SAMPOORNA_UPLOAD_ROOT", str(tmp_path / "uploads"))
    monkeypatch.setenv("SAMPOORNA_MAX_LOGO_BYTES", "1024")
    reset_settings_store()
    return reload_settings()


@pytest_asyncio.fixture
async def db(app_settings: AppSettings) -> AsyncIterator[DatabaseManager]:
    manager = await get_db_manager()
    assert manager.db_path == app_settings.database_path
    yield manager
    await shutdown_database()
    reset_settings_store()


@pytest_asyncio.fixture
async def store(db: DatabaseManager) -> SettingsStore:
    return await get_settings_store()


@pytest_asyncio.fixture
async def client(db: DatabaseManager) -> AsyncIterator[AsyncClient]:
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http


@pytest_asyncio.fixture
async def worker(db: DatabaseManager) -> dict[str, object]:
    async with db.session() as session:
        user = User(name="Latha Nair", email="latha@example.org", role="aww")
        session.add(user)
        await session.flush()
        return {"id": user.id, "name": user.name, "email": user.email}
