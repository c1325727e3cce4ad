# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import AppConfig, default_config, load_config

__all__ = ["AppConfig", "default_config", "load_config"]
