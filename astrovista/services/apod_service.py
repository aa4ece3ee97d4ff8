"""APOD record storage: lookups, listing, and ingest."""

import logging
import random

import aiosqlite

from astrovista.database import rows_to_dicts
from astrovista.errors import ConflictError
from astrovista.models.apod import Apod
from astrovista.services.search_service import APOD_COLUMNS

logger = logging.getLogger(__name__)


async def _fetch_one(db: aiosqlite.Connection, sql: str, params=()) -> dict | None:
    cursor = await db.execute(sql, params)
    row = await cursor.fetchone()
    if row is None:
        return None
    return rows_to_dicts(cursor, [row])[0]


async def get_latest(db: aiosqlite.Connection) -> dict | None:
    """Most recent APOD by date."""
    return await _fetch_one(
        db, f"SELECT {APOD_COLUMNS} FROM apods ORDER BY date DESC LIMIT 1"
    )


async def get_by_date(db: aiosqlite.Connection, date: str) -> dict | None:
    return await _fetch_one(
        db, f"SELECT {APOD_COLUMNS} FROM apods WHERE date = ?", (date,)
    )


async def count_all(db: aiosqlite.Connection) -> int:
    cursor = await db.execute("SELECT COUNT(*) FROM apods")
    return (await cursor.fetchone())[0]


async def get_random(db: aiosqlite.Connection) -> dict | None:
    """One APOD at a pseudo-random offset, or None when the table is empty."""
    total = await count_all(db)
    if total == 0:
        return None
    return await _fetch_one(
        db,
        f"SELECT {APOD_COLUMNS} FROM apods ORDER BY date ASC LIMIT 1 OFFSET ?",
        (random.randrange(total),),
    )


async def list_all(db: aiosqlite.Connection) -> list[dict]:
    cursor = await db.execute(f"SELECT {APOD_COLUMNS} FROM apods ORDER BY date ASC")
    return rows_to_dicts(cursor, await cursor.fetchall())


async def list_date_range(
    db: aiosqlite.Connection,
    start_date: str | None,
    end_date: str | None,
) -> list[dict]:
    """APODs with start_date <= date <= end_date; a missing bound is open."""
    sql = f"SELECT {APOD_COLUMNS} FROM apods WHERE 1=1"
    params: list = []
    if start_date:
        sql += " AND date >= ?"
        params.append(start_date)
    if end_date:
        sql += " AND date <= ?"
        params.append(end_date)
    sql += " ORDER BY date ASC"

    cursor = await db.execute(sql, params)
    return rows_to_dicts(cursor, await cursor.fetchall())


async def insert_apod(db: aiosqlite.Connection, apod: Apod) -> dict:
    """Store a new APOD. Raises ConflictError if its date is already present.

    The existence check is advisory; the primary key on date is what
    actually prevents duplicates.
    """
    if await get_by_date(db, apod.date) is not None:
        raise ConflictError()

    fields = apod.model_dump()
    columns = ", ".join(fields.keys())
    placeholders = ", ".join(["?"] * len(fields))

    try:
        await db.execute(
            f"INSERT INTO apods ({columns}) VALUES ({placeholders})",
            list(fields.values()),
        )
    except aiosqlite.IntegrityError:
        await db.rollback()
        raise ConflictError()
    await db.commit()

    logger.info("Stored APOD for %s (%s)", apod.date, apod.title)
    return fields
