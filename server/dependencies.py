# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

"""Request-scoped accessors for objects stored on ``app.state``."""

from __future__ import annotations

from fastapi import Request

from core.auth.models import SessionView
from core.auth.session import SessionSigner


def get_session_token(request: Request) -> str | None:
    return request.cookies.get(request.app.state.config.auth.cookie_name)


def get_session(request: Request) -> SessionView | None:
    """Return the session for the request's cookie, or ``None``."""
    signer: SessionSigner = request.app.state.signer
    return signer.read_session(get_session_token(request))
