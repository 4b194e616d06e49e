# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of AI Chatbot core/server, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Centralized path resolution for AI Chatbot.

All modules import directory paths from here instead of computing them ad-hoc.
Runtime data directory can be overridden via CHATBOT_DATA_DIR environment variable.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root: where the code lives (immutable, git-tracked)
PROJECT_DIR = Path(__file__).resolve().parent.parent

# Default runtime data directory
_DEFAULT_DATA_DIR = Path.home() / ".chatbot"

_DB_FILENAME = "chatbot.db"


def get_data_dir() -> Path:
    """Return the runtime data directory, respecting CHATBOT_DATA_DIR env var."""
    env_val = os.environ.get("CHATBOT_DATA_DIR")
    if env_val:
        return Path(env_val).expanduser().resolve()
    return _DEFAULT_DATA_DIR


def get_db_path() -> Path:
    return get_data_dir() / _DB_FILENAME


def get_logs_dir() -> Path:
    return get_data_dir() / "logs"
