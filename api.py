"""
FitTrack FastAPI Application

Main entry point for the FitTrack check-in API.
The check-in backend (MongoDB or the offline demo store) is chosen once
at startup from OFFLINE_DEMO.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Common library imports
from common.database import MongoDB, get_main_database, set_main_database
from common.utils import success_response, error_response
from common.utils.exceptions import APIException

# App-specific imports
from fittrack.config import settings
from fittrack.dependencies import create_repository, init_tracking_services

# Import routers
from fittrack.routers import (
    checkin_router,
    dashboard_router,
    profile_router,
    demo_router,
)

logging.basicConfig(
    level=settings.get_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Database Instance
# =============================================================================
main_db = MongoDB()


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Connects the database (remote mode only) and initializes the
    check-in repository.
    """
    # Startup
    logger.info("Starting FitTrack API...")

    if settings.OFFLINE_DEMO:
        repository = create_repository(settings)
    else:
        await main_db.connect(
            uri=settings.MONGODB_URI,
            database_name=settings.MONGODB_DATABASE,
        )
        set_main_database(main_db)
        repository = create_repository(settings, db=get_main_database().db)

    if not await repository.initialize():
        logger.warning("Check-in backend initialization reported a failure")

    init_tracking_services(repository, settings)
    logger.info(f"FitTrack API started ({'offline demo' if settings.OFFLINE_DEMO else 'remote'} mode)")

    yield

    # Shutdown
    logger.info("Shutting down FitTrack API...")
    if main_db.is_connected:
        await main_db.disconnect()
    logger.info("FitTrack API shut down complete.")


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title="FitTrack API",
    description="Daily fitness check-ins: meals, water, sleep and activities",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.is_development() else None,
    redoc_url="/redoc" if settings.is_development() else None,
)

# =============================================================================
# CORS Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Error Envelope
# =============================================================================
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Render APIException details in the standard error envelope."""
    detail = exc.detail if isinstance(exc.detail, dict) else {"message": str(exc.detail)}
    details = detail.get("details")
    errors = details.get("errors") if isinstance(details, dict) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(
            detail.get("message", "Error"),
            code=detail.get("code"),
            details=details,
            errors=errors,
        ),
        headers=exc.headers,
    )


# =============================================================================
# Include Routers (all under /api/v1 prefix)
# =============================================================================
API_PREFIX = "/api/v1"

app.include_router(checkin_router, prefix=API_PREFIX, tags=["Check-in"])
app.include_router(dashboard_router, prefix=API_PREFIX, tags=["Dashboard"])
app.include_router(profile_router, prefix=API_PREFIX, tags=["Profile"])
app.include_router(demo_router, prefix=API_PREFIX, tags=["Demo"])


# =============================================================================
# Health Check Endpoint
# =============================================================================
@app.get("/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Returns the status of the API and the active backend.
    """
    return success_response({
        "status": "ok",
        "version": "1.0.0",
        "mode": "offline" if settings.OFFLINE_DEMO else "remote",
        "database": main_db.is_connected,
    })


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
