# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of AI Chatbot core/server, licensed under Apache-2.0.
# See LICENSE for the full license text.

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from core.ai.providers import LanguageModelProvider
from core.auth.cache import ExpiringCache
from core.auth.credentials import CredentialsAuthenticator
from core.auth.session import SessionSigner
from core.config import ChatbotConfig, load_config
from core.db import ChatStore, Database, DatabaseWarmup, UserStore
from core.paths import get_db_path
from server.routes import create_router

logger = logging.getLogger("chatbot.server")

# Paths to exclude from request logging (noisy health checks, etc.)
_NOISY_PATHS = frozenset({
    "/api/health",
    "/api/auth/session",
})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status, and duration.

    Binds a ``request_id`` into structlog contextvars so that all log
    records emitted during request processing carry the ID.
    """

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        structlog.contextvars.clear_contextvars()
        request_id = request.headers.get(
            "X-Request-ID", uuid.uuid4().hex[:12],
        )
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 1)

        response.headers["X-Request-ID"] = request_id

        if request.url.path not in _NOISY_PATHS:
            req_logger = logging.getLogger("chatbot.request")
            req_logger.info(
                "request %s %s -> %d (%.1fms)",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
            )

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Server started")
    yield
    await app.state.warmup.wait()
    await app.state.database.close()
    logger.info("Server stopped")


def create_app(
    config: ChatbotConfig | None = None,
    *,
    database: Database | None = None,
    provider: LanguageModelProvider | None = None,
) -> FastAPI:
    config = config or load_config()
    app = FastAPI(title="AI Chatbot", version="0.1.0", lifespan=lifespan)

    if database is None:
        db_path = Path(config.database.path) if config.database.path else get_db_path()
        database = Database(db_path)

    user_store = UserStore(database)
    signer = SessionSigner(config.auth.secret_key, max_age=config.auth.session_max_age)
    user_cache: ExpiringCache = ExpiringCache(ttl=config.auth.user_cache_ttl)
    warmup = DatabaseWarmup(user_store)

    app.state.config = config
    app.state.database = database
    app.state.user_store = user_store
    app.state.chat_store = ChatStore(database)
    app.state.signer = signer
    app.state.user_cache = user_cache
    app.state.warmup = warmup
    app.state.provider = provider or LanguageModelProvider(config.llm)
    app.state.authenticator = CredentialsAuthenticator(
        user_store, signer, warmup=warmup, cache=user_cache,
    )

    # ── Global exception handler ────────────────────────────
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"}, status_code=500,
        )

    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(create_router())

    return app
