# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
