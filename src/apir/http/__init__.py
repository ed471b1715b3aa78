# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport exports."""

from .adapters import StubTransport
from .client import HttpTransport, create_default_transport
from .headers import header_value, set_header
from .httpx_client import HttpxTransport
from .models import Headers, HttpRequest, HttpResponse, RetryConfig
from .retry import RetryingTransport, build_default_retry_config, send_with_retries
from .url import join_url, validate_absolute_url

__all__ = [
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "HttpTransport",
    "HttpxTransport",
    "RetryConfig",
    "RetryingTransport",
    "StubTransport",
    "build_default_retry_config",
    "create_default_transport",
    "header_value",
    "join_url",
    "send_with_retries",
    "set_header",
    "validate_absolute_url",
]
