# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from zkserver.shared.errors.base import DomainError


class UserNotFoundError(DomainError):
    code = "user_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "user not found"


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT
    message = "user exists already"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "invalid user or password"


class RegistrationPendingError(DomainError):
    code = "registration_pending"
    status = HTTPStatus.FORBIDDEN
    message = "user is not registered, check your email for the registration link"


class NotLoggedInError(DomainError):
    code = "not_logged_in"
    status = HTTPStatus.UNAUTHORIZED
    message = "not logged in"
