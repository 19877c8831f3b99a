"""
Blog Backend — FastAPI Application Factory
===========================================

What:  Builds the FastAPI application: collaborators, middleware, exception
       handlers and routers.
How:   `create_app(settings)` constructs every app-scoped object once and
       stores it on `app.state`; route dependencies read them from there.
       Tests call `create_app()` with their own Settings.

Application Architecture:
    ┌───────────────────────────────────────────────────────┐
    │                      FastAPI App                      │
    │                                                       │
    │  Middleware:  Request ID → Access Log → GZip → CORS   │
    │                                                       │
    │  Routes: /health /api/auth /api/posts /api/comments   │
    │                                                       │
    │  Exception Handlers:                                  │
    │    BlogError → its status   validation → 400          │
    │    HTTPException → status   anything else → 500       │
    └───────────────────────────────────────────────────────┘

Every error response is `{"error": "<message>"}`.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog_api import __version__
from blog_api.config import Settings
from blog_api.database import Database
from blog_api.exceptions import BlogError, InternalError
from blog_api.middleware.logging import RequestLoggingMiddleware
from blog_api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from blog_api.routes import auth, comments, health, posts
from blog_api.services.auth_service import AuthService
from blog_api.services.comment_service import CommentService
from blog_api.services.passwords import PasswordHasher
from blog_api.services.post_service import PostService
from blog_api.services.tokens import TokenService
from blog_api.validation import describe_validation_error

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = InternalError().message


def error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


# ══════════════════════════════════════════════════════════════════════════
# Logging
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure the root logger once at startup.

    Format: 2024-01-15T12:00:00 [INFO] blog_api.access: GET /api/posts 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-operation chatter from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings)
    logger.info("Blog Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving; the development secret is still usable locally
        logger.error("%s", e)

    if settings.is_sqlite:
        await app.state.database.create_all()
        logger.info("SQLite schema ensured")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Blog Backend shutting down...")
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map every failure to `{"error": message}` with the right status.

    Handler hierarchy:
        BlogError (and subclasses) → exc.status_code, exc.message
        RequestValidationError     → 400, one field-specific message
        StarletteHTTPException     → exc.status_code, exc.detail (404 route, 405)
        SQLAlchemyError            → 500, generic message, details logged
        Exception (fallback)       → 500, generic message, traceback logged

    Internal details never reach the response body.
    """

    @app.exception_handler(BlogError)
    async def handle_blog_error(request: Request, exc: BlogError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
            return error_response(exc.status_code, INTERNAL_ERROR_MESSAGE)
        logger.info("[%s] %s %s -> %d %s", rid, request.method, request.url.path, exc.status_code, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        message = describe_validation_error(exc)
        logger.info("[%s] Validation error: %s", request_id_var.get(""), message)
        return error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.error("[%s] Database error: %s", request_id_var.get(""), exc, exc_info=True)
        return error_response(500, INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), exc, exc_info=True)
        return error_response(500, INTERNAL_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use; read from the environment when omitted.

    Returns:
        A ready FastAPI instance. `app.state` holds `settings`, `database`,
        `password_hasher`, `token_service`, `auth_service`, `post_service`
        and `comment_service`.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="Blog API",
        description="Users, posts and comments with bearer-token authentication.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── App-scoped collaborators ──────────────────────────────────────────
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    token_service = TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.jwt_expires_minutes,
    )
    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.password_hasher = hasher
    app.state.token_service = token_service
    app.state.auth_service = AuthService(hasher=hasher, tokens=token_service)
    app.state.post_service = PostService()
    app.state.comment_service = CommentService()

    # ── Middleware ────────────────────────────────────────────────────────
    # Last added runs first: Request ID → Access Log → GZip → CORS
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentialed requests to a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(posts.router)
    app.include_router(comments.router)

    return app


def run() -> None:
    """Console entry point: `blog-api`."""
    settings = Settings()
    uvicorn.run(
        create_app(settings),
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# uvicorn blog_api.main:app
app = create_app()
