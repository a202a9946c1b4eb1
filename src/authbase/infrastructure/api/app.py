"""FastAPI application for authbase.

``create_app`` assembles routes, error mapping and middleware. The lifespan
builds the long-lived resources (database, session store, token service,
password hasher), keeps them on ``app.state`` and releases them on shutdown.
Tests skip the lifespan and call ``wire_services`` with their own resources.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from authbase.application.ports import SessionStore
from authbase.core.config import Settings, get_settings
from authbase.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from authbase.domain.exceptions import (
    AccessTokenInvalid,
    AuthError,
    JwtSecretUndefined,
    RefreshTokenInvalid,
    UserNotCreated,
)
from authbase.infrastructure.auth import BcryptPasswordHasher, TokenService, utc_now
from authbase.infrastructure.auth.token_service import Clock
from authbase.infrastructure.persistence.database import DatabaseManager, init_database
from authbase.infrastructure.sessions import create_session_store

logger = get_logger(__name__)


def wire_services(
    app: FastAPI,
    *,
    db: DatabaseManager,
    session_store: SessionStore,
    clock: Clock = utc_now,
) -> None:
    """Attach connected resources and the services built on them to ``app.state``.

    Args:
        app: FastAPI application instance.
        db: A connected database manager.
        session_store: The refresh-token session store.
        clock: Issuance clock for the token service.
    """
    settings: Settings = app.state.settings
    app.state.db = db
    app.state.session_store = session_store
    app.state.token_service = TokenService.from_settings(settings, session_store, clock=clock)
    app.state.password_hasher = BcryptPasswordHasher(rounds=settings.password_hash_rounds)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open resources on startup and close them on shutdown.

    Raises:
        JwtSecretUndefined: If no signing secret is configured.
        RuntimeError: If the database or the session store is unreachable.
    """
    settings: Settings = app.state.settings

    configure_logging(settings)
    logger.info(
        "Starting authbase",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    if not settings.jwt_secret:
        logger.error("AUTHBASE_JWT_SECRET is not set")
        raise JwtSecretUndefined()

    db = DatabaseManager(settings)
    try:
        await init_database(db)
    except Exception:
        logger.exception("Database unavailable at startup")
        await db.disconnect()
        raise
    logger.info("Database ready")

    session_store = create_session_store(settings)
    if not await session_store.ping():
        logger.error("Session store unreachable", backend=settings.session_store)
        await session_store.close()
        await db.disconnect()
        raise RuntimeError("Failed to connect to session store")
    logger.info("Session store connected", backend=settings.session_store)

    wire_services(app, db=db, session_store=session_store)

    yield

    logger.info("Shutting down authbase")
    await session_store.close()
    await db.disconnect()
    logger.info("Shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application. The lifespan runs only when it is served.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Session and token lifecycle service",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Add ``/health`` (liveness) and ``/ready`` (dependencies reachable)."""

    @app.get("/health", tags=["health"])
    async def health_check():
        settings: Settings = app.state.settings
        return {"status": "healthy", "service": settings.app_name, "version": settings.app_version}

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """503 unless both the database and the session store answer."""
        checks = {
            "database": await app.state.db.check_connection(),
            "session_store": await app.state.session_store.ping(),
        }
        ready = all(checks.values())
        content = {
            "status": "ready" if ready else "not_ready",
            **{name: "connected" if ok else "disconnected" for name, ok in checks.items()},
        }
        code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE
        return JSONResponse(status_code=code, content=content)


def register_routes(app: FastAPI) -> None:
    from authbase.infrastructure.api.routes import auth_router

    api_prefix = app.state.settings.api_prefix
    app.include_router(auth_router, prefix=f"{api_prefix}/auth", tags=["auth"])


def _auth_error_response(exc: AuthError) -> JSONResponse:
    if isinstance(exc, UserNotCreated):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Registration failed", "message": "User could not be created"},
        )
    if isinstance(exc, (AccessTokenInvalid, RefreshTokenInvalid)):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "Authentication failed", "message": "Invalid token"},
            headers={"WWW-Authenticate": "Bearer"},
        )
    # UserNotFound and PasswordIncorrect must be indistinguishable
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error": "Authentication failed", "message": "Invalid credentials"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain and validation errors into HTTP responses.

    The error context (user id, session id, email) is logged and never sent
    to the client.
    """

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        logger.info(
            "Authentication failed",
            path=request.url.path,
            code=exc.code.value,
            **exc.context,
        )
        return _auth_error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "invalid body", "issues": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception",
            method=request.method,
            path=request.url.path,
            exc_type=type(exc).__name__,
        )
        detail = str(exc) if app.state.settings.debug else "An unexpected error occurred"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "detail": detail},
        )


def register_middleware(app: FastAPI) -> None:
    """Bind a correlation id to every request and echo it back."""

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID") or new_correlation_id()
        bind_correlation_id(correlation_id)
        logger.debug("Request started", method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        finally:
            clear_context()

        response.headers["X-Correlation-ID"] = correlation_id
        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            correlation_id=correlation_id,
        )
        return response


app = create_app()
