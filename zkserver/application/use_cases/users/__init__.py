# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .confirm_registration import ConfirmRegistrationUseCase
from .login_user import LoginUserUseCase
from .logout_user import LogoutUserUseCase
from .purge_tokens import PurgeExpiredTokensUseCase
from .register_user import RegisterUserUseCase
from .resolve_identity import ResolveIdentityUseCase

__all__ = [
    "ConfirmRegistrationUseCase",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "PurgeExpiredTokensUseCase",
    "RegisterUserUseCase",
    "ResolveIdentityUseCase",
]
