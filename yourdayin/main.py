"""
FastAPI application entry point for the YourDayIn backend.

This module creates the FastAPI app instance, registers the error handlers
and all routers.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from yourdayin.config import settings
from yourdayin.errors import YourDayInError
from yourdayin.routes.directions import router as directions_router
from yourdayin.routes.health import router as health_router
from yourdayin.routes.places import router as places_router
from yourdayin.routes.recommendations import router as recommendations_router

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    Environment-based configuration:
    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS env var
    - ENVIRONMENT=testing/development: Allows all origins for local dev

    The map frontend is a browser app, so production deployments must list
    its origin explicitly.

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed. Set CORS_ALLOWED_ORIGINS for the web client."
            )
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


# Create FastAPI app
app = FastAPI(
    title="YourDayIn API",
    description="Place recommendations with coordinates and loop routes",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


# Custom validation error handler to log detailed errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log detailed validation errors for debugging.

    Missing or malformed input is rejected here, before any provider call.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": jsonable_encoder(exc.errors()),
        }
    )


@app.exception_handler(YourDayInError)
async def domain_exception_handler(request: Request, exc: YourDayInError):
    """Render service errors as {"error": code, "details": message}."""
    logger.error(
        f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.error_code,
            "details": exc.message,
        }
    )


# Configure CORS with environment-based origins
cors_origins = _get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(places_router)
app.include_router(recommendations_router)
app.include_router(directions_router)

logger.info("FastAPI app initialized successfully")
