from __future__ import annotations

from pathlib import Path

import pytest

from userboard.core.config import Settings
from userboard.kv.store import KVStore

SECRET = "tests-secret-key"


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        JWT_SECRET=SECRET,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'kv.sqlite3'}",
    )


@pytest.fixture()
async def store(settings: Settings):
    kv = KVStore.from_url(settings.DATABASE_URL)
    await kv.init()
    try:
        yield kv
    finally:
        await kv.close()
