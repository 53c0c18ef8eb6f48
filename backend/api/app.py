"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.database import init_supabase_client, reset_client_cache
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    GameHubError,
    NotFoundError,
    ValidationError,
)
from .models.errors import ErrorResponse, FieldError, ValidationErrorResponse
from .routes import admin, auth, health
from modules.games.routes import router as games_router
from modules.reviews.routes import router as reviews_router
from modules.favorites.routes import router as favorites_router
from modules.users.routes import router as users_router


logger = logging.getLogger(__name__)

# Most specific first; the first matching base decides the status
STATUS_BY_ERROR: list[tuple[type[GameHubError], int]] = [
    (NotFoundError, 404),
    (ValidationError, 400),
    (ConflictError, 409),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (ExternalServiceError, 502),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    await init_supabase_client()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    # Shutdown
    reset_client_cache()
    logger.info(f"Shutting down {settings.app_name}")


def status_for(exc: GameHubError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def gamehub_error_handler(request: Request, exc: GameHubError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(**exc.to_dict()).model_dump(),
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        fields.append(FieldError(field=".".join(location) or "request", message=error.get("msg", "")))
    body = ValidationErrorResponse(details={"fields": fields})
    return JSONResponse(status_code=400, content=body.model_dump())


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    message = str(exc) if get_settings().debug else "An unexpected error occurred"
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="UNEXPECTED_ERROR", message=message).model_dump(),
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Game catalog, reviews and favorites API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Error handlers
    app.add_exception_handler(GameHubError, gamehub_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(games_router, prefix="/api/games", tags=["games"])
    app.include_router(reviews_router, prefix="/api/reviews", tags=["reviews"])
    app.include_router(favorites_router, prefix="/api/favorites", tags=["favorites"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(admin.router, prefix="/api/admin", tags=["admin"])

    return app


# Application instance for uvicorn
app = create_app()
