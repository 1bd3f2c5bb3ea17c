"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from userhub import __version__
from userhub.api.auth.cookies import SessionCookie
from userhub.api.auth.password import PasswordService
from userhub.api.auth.router import router as auth_router
from userhub.api.auth.service import AuthService
from userhub.api.chat.registry import BroadcastRelay, ConnectionRegistry
from userhub.api.chat.router import router as chat_router
from userhub.api.users.router import router as users_router
from userhub.config import Settings, get_settings
from userhub.store.base import SessionStore, UserStore
from userhub.store.memory import InMemorySessionStore, InMemoryUserStore

logger = logging.getLogger(__name__)


def wire_stores(app: FastAPI, user_store: UserStore, session_store: SessionStore) -> None:
    """Attach the stores and the auth service built on them."""
    settings: Settings = app.state.settings
    app.state.user_store = user_store
    app.state.session_store = session_store
    app.state.auth_service = AuthService(
        user_store,
        session_store,
        PasswordService(rounds=settings.BCRYPT_ROUNDS),
    )


def format_validation_error(exc: RequestValidationError) -> str:
    """Flatten validation errors into one line, e.g. ``body.password: Field required``."""
    return "; ".join(
        "{}: {}".format(".".join(str(part) for part in error["loc"]), error["msg"])
        for error in exc.errors()
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as a 500 with the error string."""
    message = format_validation_error(exc)
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message},
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    owns_db = False

    # Stores passed to create_app() are used as they are
    if app.state.user_store is None:
        max_age = timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS)
        if settings.uses_sql:
            from userhub.db.database import create_tables, init_db
            from userhub.db.repositories import SqlSessionStore, SqlUserStore

            session_factory = await init_db(settings)
            await create_tables()
            owns_db = True
            wire_stores(
                app,
                SqlUserStore(session_factory),
                SqlSessionStore(session_factory, max_age=max_age),
            )
        else:
            logger.warning("Using in-memory stores; data is lost on restart")
            wire_stores(app, InMemoryUserStore(), InMemorySessionStore(max_age=max_age))

    logger.info("userhub %s started", __version__)
    yield

    if owns_db:
        from userhub.db.database import close_db

        await close_db()
    logger.info("userhub stopped")


def create_app(
    settings: Optional[Settings] = None,
    user_store: Optional[UserStore] = None,
    session_store: Optional[SessionStore] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings, read from the environment when omitted
        user_store: User store to use instead of the configured backend
        session_store: Session store to use instead of the configured backend
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="userhub API",
        description="User management backend with cookie sessions and broadcast chat",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.user_store = None
    app.state.session_store = None
    app.state.session_cookie = SessionCookie(
        secret=settings.SESSION_SECRET,
        name=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        secure=settings.COOKIE_SECURE,
    )
    app.state.chat_relay = BroadcastRelay(ConnectionRegistry())

    if user_store is not None or session_store is not None:
        max_age = timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS)
        wire_stores(
            app,
            user_store or InMemoryUserStore(),
            session_store or InMemorySessionStore(max_age=max_age),
        )

    # CORS middleware; applies to HTTP only, the chat socket accepts any origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ORIGIN],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(chat_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
