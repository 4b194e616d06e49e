# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import argparse
import os


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="AI Chatbot - streaming chat with username sign-in"
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Override runtime data directory (default: ~/.chatbot or CHATBOT_DATA_DIR)",
    )
    sub = parser.add_subparsers(dest="command")

    # ── Serve ─────────────────────────────────────────────
    p_serve = sub.add_parser("serve", help="Run the web server")
    p_serve.add_argument("--host", default="127.0.0.1", help="Bind address")
    p_serve.add_argument("--port", type=int, default=3000, help="Bind port")
    p_serve.set_defaults(func=_lazy_serve)

    # ── Clear user ────────────────────────────────────────
    p_clear = sub.add_parser(
        "clear-user", help="Delete a user together with their chats",
    )
    p_clear.add_argument("username", help="Username to delete")
    p_clear.set_defaults(func=_lazy_clear_user)

    # ── Chat ──────────────────────────────────────────────
    p_chat = sub.add_parser("chat", help="Send one message to the chat model")
    p_chat.add_argument("message", help="Message text")
    p_chat.add_argument(
        "--model", default="chat-model",
        help="Logical model id (chat-model, chat-model-reasoning)",
    )
    p_chat.add_argument(
        "--no-stream", action="store_true",
        help="Collect the whole reply first, then reveal it with the typewriter effect",
    )
    p_chat.add_argument(
        "--no-animation", action="store_true",
        help="Print the reply without the typewriter effect",
    )
    p_chat.set_defaults(func=_lazy_chat)

    return parser


def cli_main(argv: list[str] | None = None) -> None:
    from dotenv import load_dotenv

    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.data_dir:
        os.environ["CHATBOT_DATA_DIR"] = args.data_dir

    from core.logging_config import setup_logging
    from core.paths import get_logs_dir

    setup_logging(
        level=os.environ.get("CHATBOT_LOG_LEVEL", "INFO"),
        log_dir=get_logs_dir(),
    )

    if not getattr(args, "func", None):
        parser.print_help()
        return
    args.func(args)


# ── Lazy command loaders ──────────────────────────────────


def _lazy_serve(args: argparse.Namespace) -> None:
    from cli.commands.server import cmd_serve

    cmd_serve(args)


def _lazy_clear_user(args: argparse.Namespace) -> None:
    from cli.commands.user_cmd import cmd_clear_user

    cmd_clear_user(args)


def _lazy_chat(args: argparse.Namespace) -> None:
    from cli.commands.chat_cmd import cmd_chat

    cmd_chat(args)
