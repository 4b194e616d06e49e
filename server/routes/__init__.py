# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from fastapi import APIRouter

from server.routes.auth import create_auth_router
from server.routes.chat import create_chat_router
from server.routes.system import create_system_router


def create_router() -> APIRouter:
    router = APIRouter()
    api = APIRouter(prefix="/api")

    api.include_router(create_auth_router())
    api.include_router(create_chat_router())
    api.include_router(create_system_router())

    router.include_router(api)

    return router
