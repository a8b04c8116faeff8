import structlog
from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy import text

from moodlog.db.base import get_db
from moodlog.core.config import settings
from moodlog.core.logging_config import setup_logging
from moodlog.routers import mood as mood_router
from moodlog.core.errors import (
    MoodLogException,
    moodlog_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

setup_logging(json_mode=settings.log_json, level=settings.LOG_LEVEL)
logger = structlog.get_logger()

app = FastAPI(
    title="moodlog API",
    description=(
        "**Personal mood log**\n\n"
        "Records discrete mood entries and aggregates them into averages, "
        "frequency histograms and daily trends.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="2.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(MoodLogException, moodlog_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(mood_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """
    Returns `{"status": "ok", "db": "ok"}` when both the API and the database
    are reachable. Returns HTTP 503 if the DB is down.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except SQLAlchemyError as exc:
        logger.warning("health_db_unreachable", error=str(exc))
        db_status = "unreachable"

    if db_status != "ok":
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": db_status},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
