"""Rehab Tracker - FastAPI Application Entry Point."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path
from sqlalchemy.exc import SQLAlchemyError

from rehab_tracker.config import get_settings
from rehab_tracker.database import engine, init_db, SessionLocal
from rehab_tracker.errors import ServiceError, StorageError
from rehab_tracker.logging_config import setup_logging
from rehab_tracker.routers import (
    auth_router,
    users_router,
    exercises_router,
    assignments_router,
    progress_router,
    notifications_router,
)
from rehab_tracker.seed import seed_defaults
from rehab_tracker.services.media_store import URL_PREFIX

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging()
    # Startup: Create database tables
    init_db(engine)
    if settings.seed_default_trainer:
        db = SessionLocal()
        try:
            seed_defaults(db)
        finally:
            db.close()
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    logger.info("%s started", settings.app_name)
    yield


app = FastAPI(
    title="Rehab Tracker API",
    description="Rehabilitation exercise assignments, progress logging and compliance for trainers and athletes",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        settings.frontend_url,
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============== Error handling ==============

@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "detail": jsonable_encoder(exc.errors()),
            "code": "VALIDATION_ERROR",
        },
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=StorageError().to_dict())


# Include routers
app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(exercises_router, prefix="/api")
app.include_router(assignments_router, prefix="/api")
app.include_router(progress_router, prefix="/api")
app.include_router(notifications_router, prefix="/api")

# Exercise videos written by the media store
app.mount(URL_PREFIX, StaticFiles(directory=settings.upload_dir, check_dir=False), name="videos")


@app.get("/")
def root():
    """Root endpoint with API info."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}
