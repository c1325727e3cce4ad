# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .public import PublicMessageHandler
from .user import SESSION_TOKEN_KEY, SessionStore, UserMessageHandler

__all__ = ["PublicMessageHandler", "SESSION_TOKEN_KEY", "SessionStore", "UserMessageHandler"]
