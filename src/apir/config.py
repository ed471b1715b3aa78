# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for apir."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT_TEMPLATE = f"apir/{__version__} (for {{name}})"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ClientSettings:
    """Transport and client defaults."""

    timeout: float = 30.0
    max_retries: int = 4
    backoff_factor: float = 2.0
    initial_delay: float = 1.0
    max_delay: float = 30.0
    retry_budget_cap: float = 300.0
    allow_redirects: bool = True
    verify_ssl: bool = True
    max_body_bytes: int = 64 * 1024 * 1024
    user_agent_template: str = DEFAULT_USER_AGENT_TEMPLATE

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("APIR_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        template = os.getenv("APIR_USER_AGENT_TEMPLATE", cls.user_agent_template)
        if "{name}" not in template:
            template = cls.user_agent_template
        return cls(
            timeout=_float_env("APIR_HTTP_TIMEOUT", cls.timeout),
            max_retries=_int_env("APIR_HTTP_RETRIES", cls.max_retries),
            backoff_factor=_float_env("APIR_HTTP_BACKOFF", cls.backoff_factor),
            initial_delay=_float_env("APIR_HTTP_INITIAL_DELAY", cls.initial_delay),
            max_delay=_float_env("APIR_HTTP_MAX_DELAY", cls.max_delay),
            retry_budget_cap=_float_env("APIR_HTTP_RETRY_BUDGET_CAP", cls.retry_budget_cap),
            allow_redirects=_bool_env("APIR_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("APIR_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
            user_agent_template=template,
        )

    def user_agent_for(self, name: str) -> str:
        """Render the default User-Agent for a client called ``name``."""
        return self.user_agent_template.format(name=name)


def load_settings() -> ClientSettings:
    """Load client settings from environment with sensible defaults."""
    return ClientSettings.from_env()
