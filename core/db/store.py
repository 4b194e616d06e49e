# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of AI Chatbot core/server, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Async data access for users, chats and messages."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Sequence

import aiosqlite

from core.db.database import Database
from core.db.models import Chat, DeleteUserResult, Message, User, Visibility

logger = logging.getLogger("chatbot.db.store")


def _new_id() -> str:
    return str(uuid.uuid4())


def _row_to_user(row: aiosqlite.Row) -> User:
    return User(id=row["id"], username=row["username"], created_at=row["created_at"])


def _row_to_chat(row: aiosqlite.Row) -> Chat:
    return Chat(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        visibility=row["visibility"],
        created_at=row["created_at"],
    )


def _row_to_message(row: aiosqlite.Row) -> Message:
    return Message(
        id=row["id"],
        chat_id=row["chat_id"],
        role=row["role"],
        content=row["content"],
        created_at=row["created_at"],
    )


class UserStore:
    """Identity records keyed by username."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def get_user_by_username(self, username: str) -> User | None:
        async with self._db.connection() as conn:
            cur = await conn.execute(
                "SELECT id, username, created_at FROM user WHERE username = ?",
                (username,),
            )
            row = await cur.fetchone()
        return _row_to_user(row) if row else None

    async def ensure_user_by_username(self, username: str) -> User:
        """Return the user named *username*, creating it when unseen.

        Safe to call concurrently for the same name: the insert is ignored
        on a unique-key conflict and every caller reads back the same row.
        """
        async with self._db.connection() as conn:
            cur = await conn.execute(
                "INSERT OR IGNORE INTO user (id, username, created_at) VALUES (?, ?, ?)",
                (_new_id(), username, time.time()),
            )
            created = cur.rowcount == 1
            await conn.commit()
            cur = await conn.execute(
                "SELECT id, username, created_at FROM user WHERE username = ?",
                (username,),
            )
            row = await cur.fetchone()

        if created:
            logger.info("Created user '%s'", username)
        return _row_to_user(row)

    async def delete_user_by_username(self, username: str) -> DeleteUserResult:
        """Delete a user together with their chats and messages."""
        user = await self.get_user_by_username(username)
        if user is None:
            return DeleteUserResult(deleted_user=None, deleted_chats=0)

        async with self._db.connection() as conn:
            cur = await conn.execute(
                "SELECT COUNT(*) AS n FROM chat WHERE user_id = ?", (user.id,),
            )
            row = await cur.fetchone()
            deleted_chats = row["n"] if row else 0
            await conn.execute(
                "DELETE FROM message WHERE chat_id IN (SELECT id FROM chat WHERE user_id = ?)",
                (user.id,),
            )
            await conn.execute("DELETE FROM chat WHERE user_id = ?", (user.id,))
            await conn.execute("DELETE FROM user WHERE id = ?", (user.id,))
            await conn.commit()

        logger.info("Deleted user '%s' and %d chat(s)", username, deleted_chats)
        return DeleteUserResult(deleted_user=user, deleted_chats=deleted_chats)


class ChatStore:
    """Chats and their messages."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def save_chat(
        self,
        chat_id: str,
        user_id: str,
        title: str,
        visibility: Visibility = "private",
    ) -> Chat:
        chat = Chat(
            id=chat_id,
            user_id=user_id,
            title=title,
            visibility=visibility,
            created_at=time.time(),
        )
        async with self._db.connection() as conn:
            await conn.execute(
                "INSERT INTO chat (id, user_id, title, visibility, created_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (chat.id, chat.user_id, chat.title, chat.visibility, chat.created_at),
            )
            await conn.commit()
        return chat

    async def get_chat_by_id(self, chat_id: str) -> Chat | None:
        async with self._db.connection() as conn:
            cur = await conn.execute(
                "SELECT id, user_id, title, visibility, created_at FROM chat WHERE id = ?",
                (chat_id,),
            )
            row = await cur.fetchone()
        return _row_to_chat(row) if row else None

    async def save_messages(self, messages: Sequence[Message]) -> None:
        if not messages:
            return
        async with self._db.connection() as conn:
            await conn.executemany(
                "INSERT INTO message (id, chat_id, role, content, created_at) "
                "VALUES (?, ?, ?, ?, ?)",
                [(m.id, m.chat_id, m.role, m.content, m.created_at) for m in messages],
            )
            await conn.commit()

    async def get_message_by_id(self, message_id: str) -> Message | None:
        async with self._db.connection() as conn:
            cur = await conn.execute(
                "SELECT id, chat_id, role, content, created_at FROM message WHERE id = ?",
                (message_id,),
            )
            row = await cur.fetchone()
        return _row_to_message(row) if row else None

    async def get_messages_by_chat_id(self, chat_id: str) -> list[Message]:
        async with self._db.connection() as conn:
            cur = await conn.execute(
                "SELECT id, chat_id, role, content, created_at FROM message "
                "WHERE chat_id = ? ORDER BY created_at, rowid",
                (chat_id,),
            )
            rows = await cur.fetchall()
        return [_row_to_message(r) for r in rows]

    async def count_user_messages_since(self, user_id: str, since: float) -> int:
        """Count messages the user sent (role ``user``) at or after *since*."""
        async with self._db.connection() as conn:
            cur = await conn.execute(
                "SELECT COUNT(*) AS n FROM message m JOIN chat c ON m.chat_id = c.id "
                "WHERE c.user_id = ? AND m.role = 'user' AND m.created_at >= ?",
                (user_id, since),
            )
            row = await cur.fetchone()
        return row["n"] if row else 0

    async def delete_messages_by_chat_id_after_timestamp(
        self, chat_id: str, timestamp: float,
    ) -> int:
        """Delete messages created at or after *timestamp*; return the count."""
        async with self._db.connection() as conn:
            cur = await conn.execute(
                "DELETE FROM message WHERE chat_id = ? AND created_at >= ?",
                (chat_id, timestamp),
            )
            await conn.commit()
        return cur.rowcount

    async def update_chat_visibility_by_id(
        self, chat_id: str, visibility: Visibility,
    ) -> bool:
        async with self._db.connection() as conn:
            cur = await conn.execute(
                "UPDATE chat SET visibility = ? WHERE id = ?", (visibility, chat_id),
            )
            await conn.commit()
        return cur.rowcount == 1


def new_message(chat_id: str, role: str, content: str) -> Message:
    return Message(
        id=_new_id(),
        chat_id=chat_id,
        role=role,  # type: ignore[arg-type]
        content=content,
        created_at=time.time(),
    )
