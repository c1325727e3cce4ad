# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .messages import SERVER_ERROR, Message, Reply, UnknownMessageError

__all__ = ["SERVER_ERROR", "Message", "Reply", "UnknownMessageError"]
