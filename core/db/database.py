# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of AI Chatbot core/server, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Async SQLite connection owner.

One shared ``aiosqlite.Connection`` is opened lazily on first use and the
schema is created at that moment.  Opening it early (see
:mod:`core.db.init`) is what "warm-up" means for this application.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from core.exceptions import DatabaseError

logger = logging.getLogger("chatbot.db")

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS user (
        id TEXT PRIMARY KEY,
        username TEXT NOT NULL UNIQUE,
        created_at REAL NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS chat (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL REFERENCES user(id) ON DELETE CASCADE,
        title TEXT NOT NULL,
        visibility TEXT NOT NULL DEFAULT 'private',
        created_at REAL NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS message (
        id TEXT PRIMARY KEY,
        chat_id TEXT NOT NULL REFERENCES chat(id) ON DELETE CASCADE,
        role TEXT NOT NULL,
        content TEXT NOT NULL,
        created_at REAL NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_message_chat ON message(chat_id, created_at)",
    "CREATE INDEX IF NOT EXISTS idx_chat_user ON chat(user_id)",
)


class Database:
    """Lazily opened shared SQLite connection.

    ``path`` may be ``":memory:"`` for tests; in that case the single
    shared connection is the whole database.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = path
        self._conn: aiosqlite.Connection | None = None
        self._open_lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    async def open(self) -> aiosqlite.Connection:
        """Open the connection and create tables; no-op when already open."""
        if self._conn is not None:
            return self._conn

        async with self._open_lock:
            if self._conn is not None:
                return self._conn

            if isinstance(self.path, Path):
                self.path.parent.mkdir(parents=True, exist_ok=True)

            try:
                conn = await aiosqlite.connect(str(self.path))
                conn.row_factory = aiosqlite.Row
                await conn.execute("PRAGMA foreign_keys = ON")
                for statement in _SCHEMA:
                    await conn.execute(statement)
                await conn.commit()
            except (aiosqlite.Error, OSError) as exc:
                raise DatabaseError(f"Failed to open database at {self.path}") from exc

            self._conn = conn
            logger.info("Opened database at %s", self.path)
            return conn

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield the shared connection, opening it on first use."""
        conn = await self.open()
        yield conn

    async def close(self) -> None:
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        await conn.close()
        logger.info("Closed database at %s", self.path)
