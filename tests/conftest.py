"""Shared test fixtures for all test modules."""

import os
import tempfile

import httpx
import pytest

# ── Environment overrides (must be set before importing moviematch modules) ──
_tmp = tempfile.mkdtemp(prefix="mm_pytest_")
os.environ["MOVIEMATCH_DATA_DIR"] = _tmp
os.environ["MOVIEMATCH_DB_PATH"] = os.path.join(_tmp, "test.db")
os.environ["MOVIEMATCH_GEMINI_API_KEY"] = "default-gemini-key"
os.environ["MOVIEMATCH_OMDB_API_KEY"] = "default-omdb-key"


class FakeAsyncClient:
    """Replaces httpx.AsyncClient: replays queued responses and records every request."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def __call__(self, *args, **kwargs):
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def _respond(self, method, url, kwargs):
        self.calls.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def get(self, url, **kwargs):
        return await self._respond("GET", url, kwargs)

    async def post(self, url, **kwargs):
        return await self._respond("POST", url, kwargs)


@pytest.fixture
def fake_http(monkeypatch):
    """Install a FakeAsyncClient answering with the given responses, in order."""

    def install(*responses):
        fake = FakeAsyncClient(responses)
        monkeypatch.setattr(httpx, "AsyncClient", fake)
        return fake

    return install


@pytest.fixture
async def db():
    """Fresh app_settings table on the shared connection."""
    from moviematch.database import close_db, get_db, init_db

    await init_db()
    conn = await get_db()
    await conn.execute("DELETE FROM app_settings")
    await conn.commit()
    yield conn
    await close_db()


@pytest.fixture
async def store(db):
    from moviematch.services.credential_store import CredentialStore

    credential_store = CredentialStore()
    await credential_store.load()
    return credential_store
