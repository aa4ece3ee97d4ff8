"""Single-record APOD routes: latest, random, by date, and ingest."""

import logging

import aiosqlite
from fastapi import APIRouter, Depends

from astrovista.auth import require_api_key
from astrovista.database import get_db
from astrovista.errors import ConflictError, NotFoundError
from astrovista.models.apod import Apod
from astrovista.models.search import ErrorResponse
from astrovista.ratelimit import limit_ingest
from astrovista.services import apod_service
from astrovista.services.nasa_client import fetch_apod

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/apod", tags=["apod"])


@router.get("", response_model=Apod, responses={404: {"model": ErrorResponse}})
async def latest_apod(db: aiosqlite.Connection = Depends(get_db)):
    """Get the most recent APOD."""
    apod = await apod_service.get_latest(db)
    if not apod:
        raise NotFoundError(cause="No APOD available")
    return apod


@router.post(
    "",
    response_model=Apod,
    status_code=201,
    dependencies=[Depends(limit_ingest)],
    responses={
        401: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
    },
)
async def ingest_apod(
    api_key: str = Depends(require_api_key),
    db: aiosqlite.Connection = Depends(get_db),
):
    """Pull today's APOD from NASA and store it.

    Rate limited before the API key is even looked at.
    """
    apod = await fetch_apod(api_key)
    try:
        return await apod_service.insert_apod(db, apod)
    except ConflictError:
        logger.info("APOD for %s already stored, skipping", apod.date)
        raise


# ── Static path routes (must come BEFORE /{date} to avoid conflicts) ─────────

@router.get("/random", response_model=Apod, responses={404: {"model": ErrorResponse}})
async def random_apod(db: aiosqlite.Connection = Depends(get_db)):
    """Get one APOD chosen at random."""
    apod = await apod_service.get_random(db)
    if not apod:
        raise NotFoundError(cause="No random APOD available")
    return apod


@router.get("/{date}", response_model=Apod, responses={404: {"model": ErrorResponse}})
async def apod_by_date(date: str, db: aiosqlite.Connection = Depends(get_db)):
    """Get the APOD for an exact YYYY-MM-DD date."""
    apod = await apod_service.get_by_date(db, date)
    if not apod:
        raise NotFoundError(cause=f"No APOD found for date: {date}", message="APOD not found")
    return apod
