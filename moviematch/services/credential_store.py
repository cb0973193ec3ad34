"""API key storage backed by the app_settings table.

Saved keys override the defaults from settings. A single store is created
at start-up and handed to routes through ``get_credential_store``.
"""

import logging

from fastapi import Request

from moviematch.config import settings
from moviematch.database import get_db
from moviematch.models.settings import Credentials

logger = logging.getLogger(__name__)

# Short names accepted by set()/clear(), mapped to the stored key names
KEY_NAMES = {
    "gemini": "gemini_api_key",
    "omdb": "omdb_api_key",
}


def resolve_key_name(which: str) -> str:
    """Map ``gemini``/``omdb`` (or the full key name) to the stored key name."""
    if which in KEY_NAMES:
        return KEY_NAMES[which]
    if which in KEY_NAMES.values():
        return which
    raise ValueError(f"Unknown key: {which}")


class CredentialStore:
    def __init__(self, defaults: Credentials | None = None):
        if defaults is None:
            defaults = Credentials(
                gemini_api_key=settings.gemini_api_key,
                omdb_api_key=settings.omdb_api_key,
            )
        self._defaults = defaults
        self._current = defaults.model_copy()

    async def load(self) -> Credentials:
        """Read persisted keys, keeping defaults for any that were never saved."""
        db = await get_db()
        cursor = await db.execute(
            "SELECT key, value FROM app_settings WHERE key IN (?, ?)",
            tuple(KEY_NAMES.values()),
        )
        stored = {row[0]: row[1] for row in await cursor.fetchall() if row[1]}
        self._current = self._defaults.model_copy(update=stored)
        logger.info("Loaded %d saved API key(s)", len(stored))
        return self.get()

    def get(self) -> Credentials:
        return self._current.model_copy()

    async def set(self, which: str, value: str) -> Credentials:
        """Persist a key and make it visible to the next get() immediately."""
        key_name = resolve_key_name(which)
        db = await get_db()
        await db.execute(
            """INSERT INTO app_settings (key, value) VALUES (?, ?)
               ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                              updated_at = datetime('now')""",
            (key_name, value),
        )
        await db.commit()
        self._current = self._current.model_copy(update={key_name: value})
        logger.info("Saved %s", key_name)
        return self.get()

    async def clear(self, which: str) -> Credentials:
        """Remove a saved key; the configured default applies again."""
        key_name = resolve_key_name(which)
        db = await get_db()
        await db.execute("DELETE FROM app_settings WHERE key = ?", (key_name,))
        await db.commit()
        self._current = self._current.model_copy(
            update={key_name: getattr(self._defaults, key_name)}
        )
        logger.info("Removed saved %s", key_name)
        return self.get()


def get_credential_store(request: Request) -> CredentialStore:
    """FastAPI dependency returning the store created in the app lifespan."""
    return request.app.state.credential_store
