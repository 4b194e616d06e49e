# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

"""Authentication API routes."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse

from core.auth.credentials import CredentialsAuthenticator
from core.auth.models import LoginStatus
from server.dependencies import get_session

logger = logging.getLogger("chatbot.routes.auth")

_STATUS_CODES = {
    LoginStatus.SUCCESS: 200,
    LoginStatus.INVALID_DATA: 400,
    LoginStatus.FAILED: 401,
}

# Same reserved set as JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


async def _read_form(request: Request) -> dict[str, Any]:
    """Return the JSON body as a dict; anything else becomes an empty form."""
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def create_auth_router() -> APIRouter:
    router = APIRouter(tags=["auth"])

    @router.post("/auth/login")
    async def login(request: Request):
        authenticator: CredentialsAuthenticator = request.app.state.authenticator
        result = await authenticator.login(await _read_form(request))

        response = JSONResponse(
            result.state.model_dump(mode="json", by_alias=True, exclude_none=True),
            status_code=_STATUS_CODES.get(result.state.status, 200),
        )
        if result.token is not None:
            auth_settings = request.app.state.config.auth
            response.set_cookie(
                key=auth_settings.cookie_name,
                value=result.token,
                max_age=auth_settings.session_max_age,
                httponly=True,
                samesite="lax",
                path="/",
            )
        return response

    @router.post("/auth/logout")
    async def logout(request: Request):
        session = get_session(request)
        response = JSONResponse({"status": "ok"})
        response.delete_cookie(
            key=request.app.state.config.auth.cookie_name, path="/",
        )
        if session is not None:
            logger.info("User '%s' logged out", session.user.username)
        return response

    @router.get("/auth/session")
    async def session(request: Request):
        view = get_session(request)
        if view is None:
            return JSONResponse(None)
        return view.model_dump(mode="json")

    @router.get("/auth/guest")
    async def guest(request: Request, redirectUrl: str = "/login"):  # noqa: N803
        target = quote(redirectUrl, safe=_URI_COMPONENT_SAFE)
        return RedirectResponse(f"/login?redirectUrl={target}", status_code=307)

    return router
