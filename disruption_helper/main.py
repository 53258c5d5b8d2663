"""
Flight Disruption Helper - Main FastAPI Application
Explains what happened to a flight and what the traveller may be owed
"""

import logging
import logging.config
from contextlib import asynccontextmanager
from typing import Dict, Any
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load .env file explicitly (before importing config)
from dotenv import load_dotenv
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from disruption_helper.core.config import get_settings
from disruption_helper.api.endpoints import router as api_router

# Initialize settings
settings = get_settings()

# Configure logging
logging.config.dictConfig(settings.get_log_config())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events
    """
    logger.info("=" * 60)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"AeroDataBox: {'Enabled' if settings.flight_status_configured else 'Disabled'}")
    logger.info(f"Google Gemini: {'Enabled' if settings.explanation_configured else 'Disabled'}")
    logger.info("=" * 60)

    yield

    logger.info(f"Shutting down {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    **Flight Disruption Helper API**

    Answers "what happened to my flight, and what am I owed?"

    - **Status reconciliation**: live AeroDataBox status wins over what the traveller typed
    - **Eligibility advisory**: non-authoritative Unknown / Unlikely / Maybe estimate
    - **Gated explanations**: Gemini text only for verified facts or with an explicit unverified disclosure
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception Handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Keep the status code (e.g. 405 for non-POST calls), answer in JSON"""
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "status": "error",
            "message": exc.detail,
        },
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.error(f"Unhandled exception on {request.url.path}: {str(exc)}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "status": "error",
            "message": "Internal server error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred"
        }
    )


app.include_router(api_router)


@app.get("/", tags=["Root"])
async def root() -> Dict[str, Any]:
    """
    Root endpoint - API information
    """
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "docs": "/docs",
        "health": "/api/health",
        "endpoints": {
            "disruption_helper": "POST /api/disruption-helper",
            "health": "GET /api/health"
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "disruption_helper.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development(),
        log_level=settings.log_level.lower()
    )
