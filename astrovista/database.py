"""SQLite connection management and schema setup."""

from pathlib import Path

import aiosqlite
from fastapi import Request

from astrovista.config import settings

SCHEMA = """
    CREATE TABLE IF NOT EXISTS apods (
        date            TEXT PRIMARY KEY,
        explanation     TEXT,
        hdurl           TEXT,
        media_type      TEXT,
        service_version TEXT,
        title           TEXT,
        url             TEXT
    )
"""


async def init_db(db_path: Path | None = None) -> aiosqlite.Connection:
    """Open the database connection and make sure the apods table exists."""
    path = db_path or settings.db_path
    path.parent.mkdir(parents=True, exist_ok=True)

    db = await aiosqlite.connect(str(path))

    # Enable WAL mode for better read concurrency
    await db.execute("PRAGMA journal_mode=WAL")
    await db.execute("PRAGMA busy_timeout=5000")

    await db.execute(SCHEMA)
    await db.commit()
    return db


async def close_db(db: aiosqlite.Connection | None) -> None:
    """Close the database connection."""
    if db is not None:
        await db.close()


async def get_db(request: Request) -> aiosqlite.Connection:
    """FastAPI dependency returning the connection opened at startup."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return db


def rows_to_dicts(cursor: aiosqlite.Cursor, rows) -> list[dict]:
    columns = [desc[0] for desc in cursor.description]
    return [dict(zip(columns, row)) for row in rows]
