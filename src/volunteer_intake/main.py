"""
Volunteer Intake API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging
- Temporary upload directory
- CORS and request size middleware
- API routing
- Health check endpoints
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from volunteer_intake import __version__
from volunteer_intake.api import api_router
from volunteer_intake.core.config import DEFAULT_APPROVAL_TOKEN, get_settings
from volunteer_intake.core.middleware import BodySizeLimitMiddleware

logger = logging.getLogger(__name__)

settings = get_settings()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan manager.

    Handles startup checks:
    - Logging configuration
    - Upload directory creation
    - Approval token sanity check
    """
    # Startup
    configure_logging(settings.log_level)
    print(f"Starting Volunteer Intake API in {settings.python_env} mode...")

    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    print(f"[OK] Upload directory ready: {settings.upload_dir}")

    if settings.approval_token == DEFAULT_APPROVAL_TOKEN:
        if settings.is_production:
            raise RuntimeError("APPROVAL_TOKEN must be set in production")
        logger.warning("APPROVAL_TOKEN not set - using insecure default token")

    if not settings.resend_api_key:
        print("[WARN] RESEND_API_KEY not set - emails will be logged, not sent")

    yield  # Application runs here

    # Shutdown
    print("Shutting down Volunteer Intake API...")


app = FastAPI(
    title="Volunteer Intake API",
    description="Onakpa Emmanuel Foundation volunteer registration and approval API",
    version=__version__,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router)

app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_request_bytes)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint - API welcome message."""
    return {
        "message": "Volunteer Intake API",
        "status": "running",
        "environment": settings.python_env,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}
