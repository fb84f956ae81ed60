"""
Dictation API

Transcript history plus per-user personalization: corrections are learned
from every saved edit and applied to the next transcriptions.

Run:
    python main.py
    uvicorn main:app --reload
    gunicorn main:app -c gunicorn.conf.py
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from core import database, models, schemas
from routers import corrections, transcripts
from utils.exceptions import DictationError
from utils.logging import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup, release pooled connections on shutdown."""
    logger.info(
        f"{settings.APP_NAME} v{settings.APP_VERSION} starting "
        f"(personalization={'on' if settings.PERSONALIZATION_ENABLED else 'off'}, "
        f"min_count={settings.PERSONALIZATION_MIN_COUNT})"
    )

    async with database.engine.begin() as conn:
        await conn.run_sync(models.Base.metadata.create_all)
    logger.info("Transcript and correction tables ready")

    yield

    await database.engine.dispose()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.APP_NAME,
    description="Voice dictation transcripts, personalized from each user's own edits",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(DictationError)
async def dictation_exception_handler(request: Request, exc: DictationError):
    """Map domain errors to their status code and a {"error", "message", "details"} body."""
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} -> {exc.status_code} {exc.__class__.__name__}: {exc.message}",
            extra={"details": exc.details},
        )
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.__class__.__name__}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.include_router(transcripts.router)
app.include_router(corrections.router)


@app.get("/", tags=["Health"])
async def root():
    return {"app": settings.APP_NAME, "version": settings.APP_VERSION, "status": "ok"}


@app.get("/health", response_model=schemas.HealthResponse, tags=["Health"])
async def health_check():
    """
    Database reachability and which services have been built.

    Reports "degraded" rather than failing when the database is down;
    personalization fails open in that state.
    """
    from core.dependencies import get_initialized_services

    db_ok = await database.check_database_health()
    return {
        "status": "ok" if db_ok else "degraded",
        "database": db_ok,
        "personalization_enabled": settings.PERSONALIZATION_ENABLED,
        "min_count": settings.PERSONALIZATION_MIN_COUNT,
        "services_loaded": get_initialized_services(),
    }


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )
