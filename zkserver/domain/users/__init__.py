# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import LoginProfile, SessionToken, User

__all__ = ["LoginProfile", "SessionToken", "User"]
