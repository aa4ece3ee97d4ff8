"""AstroVista FastAPI application."""

import logging
import time
from contextlib import asynccontextmanager

import aiosqlite
from fastapi import FastAPI, Request

from astrovista.config import settings

# Configure logging so our INFO messages appear in container logs
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
# Keep noisy libraries at WARNING
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
from fastapi.middleware.cors import CORSMiddleware

from astrovista.auth import StaticKeyVerifier
from astrovista.database import close_db, init_db
from starlette.exceptions import HTTPException as StarletteHTTPException

from astrovista.errors import APIError, api_error_handler, http_error_handler, store_error_handler
from astrovista.ratelimit import RateLimiter
from astrovista.routers import apod, apods

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    # Startup
    app.state.db = await init_db()
    app.state.key_verifier = StaticKeyVerifier(settings.nasa_api_key)
    app.state.ingest_limiter = RateLimiter(
        limit=settings.ingest_rate_limit,
        window=settings.ingest_rate_window_seconds,
    )

    if not settings.nasa_api_key:
        logger.warning(
            "ASTROVISTA_NASA_API_KEY is not set. POST /apod will reject every request."
        )
    logger.info("Database ready at %s", settings.db_path)

    yield
    # Shutdown
    await close_db(app.state.db)
    app.state.db = None


app = FastAPI(
    title="AstroVista",
    description="Astronomy Picture of the Day archive API",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    took_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s -> %d (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        took_ms,
    )
    return response


app.add_exception_handler(APIError, api_error_handler)
app.add_exception_handler(aiosqlite.Error, store_error_handler)
app.add_exception_handler(StarletteHTTPException, http_error_handler)

app.include_router(apod.router)
app.include_router(apods.router)


# Health check
@app.get("/health")
async def health():
    return {"status": "ok", "version": VERSION}


def run() -> None:
    """Serve the app with uvicorn (console script: astrovista)."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
