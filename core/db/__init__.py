# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from core.db.database import Database
from core.db.init import DatabaseWarmup, initialize_database
from core.db.models import Chat, DeleteUserResult, Message, User, Visibility
from core.db.store import ChatStore, UserStore
