# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .mailer import LoggingRegistrationMailer
from .password_hashing import WerkzeugPasswordHasher

__all__ = ["LoggingRegistrationMailer", "WerkzeugPasswordHasher"]
