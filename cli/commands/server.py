# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger("chatbot")


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the web server in the foreground."""
    import uvicorn

    from core.config import load_config
    from server.app import create_app

    display_host = "localhost" if args.host == "0.0.0.0" else args.host
    print(f"Chat ready at http://{display_host}:{args.port}/")

    app = create_app(load_config())
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level="info",
        timeout_keep_alive=65,
    )
