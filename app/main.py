"""
FastAPI application entry point.

LittleSteps Forecaster - time machine for a childcare centre's classroom
pipeline. Children move between age-banded classrooms as they grow; the
forecast endpoint shows who is where at any month, past or future.
"""
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.config import settings, ensure_directories, setup_logging
from app.database import init_db
from app.schemas.common import HealthResponse
from app.routers import (
    classrooms,
    children,
    forecast,
)
import logging

setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    **LittleSteps Forecaster API**

    Classroom enrollment dashboard backend for a childcare centre.

    ## Key Features

    * **Classrooms**: age-banded rooms with seat capacity and staff ratio
    * **Children**: birth and enrollment dates; classroom is never stored
    * **Forecast**: who sits in which classroom at any target date,
      capacity alerts, upcoming transitions and a +/-12 month trend

    ## Important Concept

    Classroom membership is always recomputed from birth dates, so moving
    the target date (or editing a classroom's age band) immediately
    reshuffles every roster.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    ensure_directories()
    init_db()
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)


# Include routers with prefixes
app.include_router(
    classrooms.router,
    prefix=f"{settings.API_PREFIX}/classrooms",
    tags=["Classrooms"]
)
app.include_router(
    children.router,
    prefix=f"{settings.API_PREFIX}/children",
    tags=["Children"]
)
app.include_router(
    forecast.router,
    prefix=f"{settings.API_PREFIX}/forecast",
    tags=["Forecast"]
)


# Root endpoint
@app.get("/", tags=["Root"])
def root():
    """API root endpoint with basic information."""
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "description": "Classroom enrollment forecasting for childcare centres",
        "docs": "/docs",
        "redoc": "/redoc",
        "endpoints": {
            "classrooms": f"{settings.API_PREFIX}/classrooms",
            "children": f"{settings.API_PREFIX}/children",
            "forecast": f"{settings.API_PREFIX}/forecast",
            "health": f"{settings.API_PREFIX}/health"
        }
    }


# Health check
@app.get(f"{settings.API_PREFIX}/health", response_model=HealthResponse, tags=["Health"])
def health_check():
    """Health check endpoint."""
    from app.database import engine
    from sqlalchemy import text

    # Check database connection
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        logger.warning("Database health check failed: %s", e)
        db_status = f"unhealthy: {str(e)}"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "version": settings.VERSION,
        "database": db_status
    }


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return "; ".join(parts) or "Invalid request"


# Exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "status_code": exc.status_code
        }
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    message = _describe_validation_errors(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=400,
        content={
            "error": message,
            "status_code": 400
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "status_code": 500
        }
    )
