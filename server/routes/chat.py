# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import json
import logging
import time
from typing import Any, AsyncIterator, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, ConfigDict, Field

from core.ai.entitlements import get_entitlements
from core.ai.models import DEFAULT_CHAT_MODEL
from core.ai.providers import LanguageModelProvider
from core.ai.title import generate_title_from_user_message, get_text_from_message
from core.db.models import Chat, Message
from core.db.store import ChatStore, new_message
from core.exceptions import LLMAPIError
from server.dependencies import get_session

logger = logging.getLogger("chatbot.routes.chat")

MAX_CHAT_MESSAGE_SIZE = 100 * 1024  # characters
DEFAULT_CHAT_TITLE = "New chat"
_DAY_SECONDS = 24 * 3600


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    message: str | dict[str, Any]
    selected_chat_model: str = Field(default=DEFAULT_CHAT_MODEL, alias="selectedChatModel")


class TitleRequest(BaseModel):
    message: str | dict[str, Any]


class ModelCookieRequest(BaseModel):
    model: str


class VisibilityRequest(BaseModel):
    visibility: Literal["public", "private"]


# ── SSE Helpers ───────────────────────────────────────────────

def _format_sse(event: str, payload: dict[str, Any]) -> str:
    """Format a single SSE frame."""
    data = json.dumps(payload, ensure_ascii=False, default=str)
    return f"event: {event}\ndata: {data}\n\n"


def _to_provider_messages(history: list[Message]) -> list[dict[str, str]]:
    return [{"role": m.role, "content": m.content} for m in history]


async def _title_or_default(provider: LanguageModelProvider, message: Any) -> str:
    try:
        title = await generate_title_from_user_message(provider, message)
    except LLMAPIError:
        logger.warning("Title generation failed; using default title")
        return DEFAULT_CHAT_TITLE
    return title or DEFAULT_CHAT_TITLE


def _unauthorized() -> JSONResponse:
    return JSONResponse({"error": "Unauthorized"}, status_code=401)


def _forbidden() -> JSONResponse:
    return JSONResponse({"error": "Forbidden"}, status_code=403)


def create_chat_router() -> APIRouter:
    router = APIRouter(tags=["chat"])

    @router.post("/chat")
    async def chat(body: ChatRequest, request: Request):
        session = get_session(request)
        if session is None:
            return _unauthorized()
        user = session.user

        text = get_text_from_message(body.message)
        if not text.strip():
            return JSONResponse({"error": "Message is empty"}, status_code=400)
        if len(text) > MAX_CHAT_MESSAGE_SIZE:
            return JSONResponse({"error": "Message is too long"}, status_code=413)

        entitlements = get_entitlements(user.type)
        if body.selected_chat_model not in entitlements.available_chat_model_ids:
            return _forbidden()

        store: ChatStore = request.app.state.chat_store
        provider: LanguageModelProvider = request.app.state.provider

        sent_today = await store.count_user_messages_since(user.id, time.time() - _DAY_SECONDS)
        if sent_today >= entitlements.max_messages_per_day:
            logger.info("Rate limit reached for '%s' (%d messages)", user.username, sent_today)
            return JSONResponse(
                {"error": "Daily message limit reached"}, status_code=429,
            )

        chat_row: Chat | None = await store.get_chat_by_id(body.id)
        if chat_row is None:
            title = await _title_or_default(provider, body.message)
            chat_row = await store.save_chat(body.id, user.id, title)
        elif chat_row.user_id != user.id:
            return _forbidden()

        await store.save_messages([new_message(chat_row.id, "user", text)])
        history = await store.get_messages_by_chat_id(chat_row.id)
        model_id = body.selected_chat_model

        async def _stream_events() -> AsyncIterator[str]:
            chunks: list[str] = []
            try:
                async for chunk in provider.stream_text(model_id, _to_provider_messages(history)):
                    chunks.append(chunk)
                    yield _format_sse("text_delta", {"text": chunk})
            except LLMAPIError:
                logger.exception("Chat stream failed chat=%s", chat_row.id)
                yield _format_sse("error", {"code": "STREAM_ERROR", "message": "Model request failed"})
                return

            full_text = "".join(chunks)
            assistant = new_message(chat_row.id, "assistant", full_text)
            await store.save_messages([assistant])
            logger.info(
                "Chat turn complete chat=%s chunks=%d chars=%d",
                chat_row.id, len(chunks), len(full_text),
            )
            yield _format_sse("done", {
                "chatId": chat_row.id,
                "messageId": assistant.id,
                "title": chat_row.title,
            })

        return StreamingResponse(
            _stream_events(),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",
            },
        )

    @router.post("/chat/title")
    async def chat_title(body: TitleRequest, request: Request):
        if get_session(request) is None:
            return _unauthorized()
        title = await _title_or_default(request.app.state.provider, body.message)
        return {"title": title}

    @router.post("/chat/model")
    async def save_chat_model(body: ModelCookieRequest, request: Request):
        response = JSONResponse({"model": body.model})
        response.set_cookie(key="chat-model", value=body.model, path="/")
        return response

    @router.delete("/chat/messages/{message_id}/trailing")
    async def delete_trailing_messages(message_id: str, request: Request):
        session = get_session(request)
        if session is None:
            return _unauthorized()

        store: ChatStore = request.app.state.chat_store
        message = await store.get_message_by_id(message_id)
        if message is None:
            return JSONResponse({"error": "Message not found"}, status_code=404)
        chat_row = await store.get_chat_by_id(message.chat_id)
        if chat_row is None or chat_row.user_id != session.user.id:
            return _forbidden()

        deleted = await store.delete_messages_by_chat_id_after_timestamp(
            message.chat_id, message.created_at,
        )
        return {"deleted": deleted}

    @router.patch("/chat/{chat_id}/visibility")
    async def update_chat_visibility(chat_id: str, body: VisibilityRequest, request: Request):
        session = get_session(request)
        if session is None:
            return _unauthorized()

        store: ChatStore = request.app.state.chat_store
        chat_row = await store.get_chat_by_id(chat_id)
        if chat_row is None:
            return JSONResponse({"error": "Chat not found"}, status_code=404)
        if chat_row.user_id != session.user.id:
            return _forbidden()

        await store.update_chat_visibility_by_id(chat_id, body.visibility)
        return {"chatId": chat_id, "visibility": body.visibility}

    return router
