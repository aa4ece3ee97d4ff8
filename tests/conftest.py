"""Shared test fixtures for all test modules."""

import os
import sqlite3
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest

# ── Environment overrides (must be set before importing astrovista modules) ──
_tmp = tempfile.mkdtemp(prefix="astrovista_pytest_")
os.environ["ASTROVISTA_DB_PATH"] = os.path.join(_tmp, "test.db")
os.environ["ASTROVISTA_NASA_API_KEY"] = "test-nasa-key"
os.environ["ASTROVISTA_CORS_ORIGINS"] = "http://localhost:3000"


SAMPLE_APODS = [
    {
        "date": "2024-01-01",
        "explanation": "A stellar nursery in Orion.",
        "hdurl": "https://apod.nasa.gov/apod/image/2401/orion_hd.jpg",
        "media_type": "image",
        "service_version": "v1",
        "title": "Orion Nebula",
        "url": "https://apod.nasa.gov/apod/image/2401/orion.jpg",
    },
    {
        "date": "2024-01-02",
        "explanation": "Our nearest large galactic neighbour.",
        "hdurl": "https://apod.nasa.gov/apod/image/2401/m31_hd.jpg",
        "media_type": "image",
        "service_version": "v1",
        "title": "Andromeda Galaxy",
        "url": "https://apod.nasa.gov/apod/image/2401/m31.jpg",
    },
    {
        "date": "2024-01-03",
        "explanation": "Totality in under a minute.",
        "hdurl": None,
        "media_type": "video",
        "service_version": "v1",
        "title": "Solar Eclipse Timelapse",
        "url": "https://www.youtube.com/embed/eclipse",
    },
    {
        "date": "2024-01-04",
        "explanation": "A dark cloud shaped like a horse.",
        "hdurl": "https://apod.nasa.gov/apod/image/2401/horsehead_hd.jpg",
        "media_type": "image",
        "service_version": "v1",
        "title": "The Horsehead Nebula",
        "url": "https://apod.nasa.gov/apod/image/2401/horsehead.jpg",
    },
    {
        "date": "2024-01-05",
        "explanation": "A storm larger than Earth.",
        "hdurl": "https://apod.nasa.gov/apod/image/2401/jupiter_hd.jpg",
        "media_type": "image",
        "service_version": "v1",
        "title": "Jupiter's Great Red Spot",
        "url": "https://apod.nasa.gov/apod/image/2401/jupiter.jpg",
    },
    {
        "date": "2024-01-06",
        "explanation": "Flying through a simulated nebula.",
        "hdurl": None,
        "media_type": "video",
        "service_version": "v1",
        "title": "Nebula Flythrough",
        "url": "https://www.youtube.com/embed/flythrough",
    },
]

INSERT_SQL = """INSERT INTO apods
    (date, explanation, hdurl, media_type, service_version, title, url)
    VALUES (:date, :explanation, :hdurl, :media_type, :service_version, :title, :url)"""


def seed_file(path, rows) -> None:
    """Create the apods table in a fresh SQLite file and fill it."""
    from astrovista.database import SCHEMA

    conn = sqlite3.connect(str(path))
    try:
        conn.execute(SCHEMA)
        conn.executemany(INSERT_SQL, rows)
        conn.commit()
    finally:
        conn.close()


@pytest.fixture
def sample_apods():
    return [dict(a) for a in SAMPLE_APODS]


@pytest.fixture
async def db(tmp_path):
    """A seeded connection for service-level tests."""
    from astrovista.database import close_db, init_db

    conn = await init_db(tmp_path / "service.db")
    await conn.executemany(INSERT_SQL, SAMPLE_APODS)
    await conn.commit()
    yield conn
    await close_db(conn)


@pytest.fixture
async def empty_db(tmp_path):
    from astrovista.database import close_db, init_db

    conn = await init_db(tmp_path / "empty.db")
    yield conn
    await close_db(conn)


def _make_client(db_path):
    from fastapi.testclient import TestClient

    from astrovista.config import settings
    from astrovista.main import app

    original = settings.db_path
    settings.db_path = db_path
    try:
        with TestClient(app) as client:
            yield client
    finally:
        settings.db_path = original


@pytest.fixture
def client(tmp_path):
    """API client backed by a database holding SAMPLE_APODS."""
    db_path = tmp_path / "api.db"
    seed_file(db_path, SAMPLE_APODS)
    yield from _make_client(db_path)


@pytest.fixture
def empty_client(tmp_path):
    yield from _make_client(tmp_path / "api_empty.db")


def mock_nasa_client(mock_client_cls, payload=None, status_code=200, exc=None):
    """Wire a patched httpx.AsyncClient class to return one canned response."""
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.json.return_value = payload

    mock_client = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    if exc is not None:
        mock_client.get = AsyncMock(side_effect=exc)
    else:
        mock_client.get = AsyncMock(return_value=mock_response)
    mock_client_cls.return_value = mock_client
    return mock_client
