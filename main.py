"""FastAPI application factory and main entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

import config
import logging_config
from api import router as api_router
from auth.errors import MissingSecretError, UnauthorizedError
from db import close_db, init_db

# Setup logging
logging_config.setup_logging(config.settings.LOG_LEVEL)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    await init_db()
    yield
    # Shutdown
    await close_db()


# Create FastAPI app
app = FastAPI(
    title="Storefront Backend",
    description="Telegram Mini App storefront: trust and admin session API",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(request: Request, exc: UnauthorizedError):
    """Send browsers back to the login page; API clients get a plain 401."""
    if "text/html" in request.headers.get("accept", ""):
        return RedirectResponse(
            config.settings.ADMIN_LOGIN_PATH,
            status_code=status.HTTP_303_SEE_OTHER,
        )
    return await http_exception_handler(request, exc)


@app.exception_handler(MissingSecretError)
async def missing_secret_handler(request: Request, exc: MissingSecretError):
    """Configuration defects surface as a generic 500."""
    logger.error("Authentication secret missing: %s", exc.name)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Server configuration error"},
    )


# Include API router
app.include_router(api_router.api_router, prefix=config.settings.API_PREFIX)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Storefront Backend API",
        "version": "0.1.0",
    }
