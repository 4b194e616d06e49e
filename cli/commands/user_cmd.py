# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

"""User maintenance commands."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from core.db import Database, DeleteUserResult, UserStore

logger = logging.getLogger("chatbot.cli.user")


async def clear_user(db: Database, username: str) -> DeleteUserResult:
    try:
        return await UserStore(db).delete_user_by_username(username)
    finally:
        await db.close()


def cmd_clear_user(args: argparse.Namespace) -> None:
    """Delete a user and all of their chats."""
    from core.config import load_config
    from core.paths import get_db_path

    config = load_config()
    db_path = Path(config.database.path) if config.database.path else get_db_path()

    try:
        result = asyncio.run(clear_user(Database(db_path), args.username))
    except Exception as exc:
        logger.debug("clear-user failed", exc_info=True)
        print(f"Failed to delete user: {exc}", file=sys.stderr)
        sys.exit(1)

    if result.deleted_user is None:
        print(f'No user found with username "{args.username}".')
    else:
        print(f'Deleted user "{args.username}" and {result.deleted_chats} chat(s).')
    sys.exit(0)
