# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from core.ai.entitlements import get_entitlements
from core.ai.models import DEFAULT_CHAT_MODEL, get_chat_models
from server.dependencies import get_session

logger = logging.getLogger("chatbot.routes.system")


def create_system_router() -> APIRouter:
    router = APIRouter(tags=["system"])

    @router.get("/health")
    async def health(request: Request):
        return {
            "status": "ok",
            "database_warm": request.app.state.warmup.initialized,
        }

    @router.get("/models")
    async def list_models(request: Request):
        session = get_session(request)
        if session is None:
            return JSONResponse({"error": "Unauthorized"}, status_code=401)

        allowed = set(get_entitlements(session.user.type).available_chat_model_ids)
        models = [
            m.model_dump()
            for m in get_chat_models(request.app.state.config.llm)
            if m.id in allowed
        ]
        selected = request.cookies.get("chat-model", DEFAULT_CHAT_MODEL)
        if selected not in allowed:
            selected = DEFAULT_CHAT_MODEL
        return {"models": models, "selected": selected}

    return router
