from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates
from starlette.middleware.base import BaseHTTPMiddleware

from bugtracker.core.config import Settings, get_settings
from bugtracker.core.logging_config import LoggingMiddleware
from bugtracker.db import build_engine, build_sessionmaker
from bugtracker.db.create_tables import create_all
from bugtracker.domain.bugs import BugError
from bugtracker.repositories import BugStore, JSONBugRepository, SQLBugRepository
from bugtracker.routers import bugs as bugs_router
from bugtracker.routers import pages as pages_router
from bugtracker.services.bug_service import BugService

logger = logging.getLogger(__name__)

BASE = os.path.dirname(__file__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; style-src 'self' 'unsafe-inline'; script-src 'self' 'unsafe-inline'",
        )
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        return response


class ErrorResponseMiddleware(BaseHTTPMiddleware):
    """Turn unexpected exceptions into the JSON 500 inside the CORS/header middlewares."""

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("ERROR: %s %s - %s", request.method, request.url.path, exc)
            return _error_response(str(exc))


def build_store(settings: Settings) -> BugStore:
    """Instantiate the store selected by BUG_STORE."""
    if settings.bug_store == "json":
        return JSONBugRepository(settings.json_store_path)
    if settings.bug_store != "sql":
        raise RuntimeError(f"Unknown BUG_STORE '{settings.bug_store}' (expected 'sql' or 'json')")
    engine = build_engine(settings.database_url)
    if settings.auto_create_tables:
        create_all(engine)
    return SQLBugRepository(build_sessionmaker(engine))


def _error_response(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=500)


def create_app(settings: Settings | None = None, store: BugStore | None = None) -> FastAPI:
    """Factory compatible with uvicorn; pass `store` to inject a test double."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        service: BugService = app.state.bug_service
        if service is None:
            service = BugService(build_store(settings))
            app.state.bug_service = service
        # refuse to serve when the store is down
        service.ping()
        logger.info("Bug tracker ready (store=%s)", type(service.store).__name__)
        yield

    app = FastAPI(title="Bug Tracker API", lifespan=lifespan)
    app.state.bug_service = BugService(store) if store is not None else None
    app.state.templates = Jinja2Templates(directory=os.path.join(BASE, "templates"))

    # added first so it sits innermost
    app.add_middleware(ErrorResponseMiddleware)
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(LoggingMiddleware)

    @app.exception_handler(BugError)
    async def bug_error_handler(request: Request, exc: BugError):
        logger.error("ERROR: %s %s - %s", request.method, request.url.path, exc.message)
        return _error_response(exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        logger.error("ERROR: %s %s - %s", request.method, request.url.path, message)
        return _error_response(message)

    app.include_router(bugs_router.router)
    app.include_router(pages_router.router)
    return app
