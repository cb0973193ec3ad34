"""Initial database schema: key/value application settings."""

import aiosqlite


async def upgrade(db: aiosqlite.Connection) -> None:
    """Create the app_settings table used for persisted API keys."""
    await db.execute("""
        CREATE TABLE app_settings (
            key        TEXT PRIMARY KEY,
            value      TEXT NOT NULL,
            updated_at TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)
    await db.commit()
