# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
apir package entrypoint.

A thin client for calling named upstream APIs. APIs are registered once with a
Discoverer that resolves their base URL and a content type that selects the
codec for their responses. HTTP is abstracted behind an injectable transport,
and results are typed dataclasses.
"""

from .config import ClientSettings, load_settings
from .discoverer import DirectDiscoverer, Discoverer
from .errors import (
    AlreadyRegisteredError,
    ApiNotRegisteredError,
    ApirError,
    CopyError,
    DecodeError,
    ErrorCategory,
    HTTPError,
    InvalidSinkTypeError,
    InvalidURLError,
    TransportError,
    UnimplementedContentTypeError,
)
from .http import (
    HttpRequest,
    HttpResponse,
    HttpTransport,
    HttpxTransport,
    RetryConfig,
    RetryingTransport,
    StubTransport,
    create_default_transport,
)
from .log import setup_logging
from .requester import (
    Client,
    ContentType,
    ExecutionResult,
    MockRequester,
    RegisteredAPI,
    Request,
    Requester,
    with_header,
    with_user_agent,
)
from .version import __version__

__all__ = [
    "AlreadyRegisteredError",
    "ApiNotRegisteredError",
    "ApirError",
    "Client",
    "ClientSettings",
    "ContentType",
    "CopyError",
    "DecodeError",
    "DirectDiscoverer",
    "Discoverer",
    "ErrorCategory",
    "ExecutionResult",
    "HTTPError",
    "HttpRequest",
    "HttpResponse",
    "HttpTransport",
    "HttpxTransport",
    "InvalidSinkTypeError",
    "InvalidURLError",
    "MockRequester",
    "RegisteredAPI",
    "Request",
    "Requester",
    "RetryConfig",
    "RetryingTransport",
    "StubTransport",
    "TransportError",
    "UnimplementedContentTypeError",
    "create_default_transport",
    "load_settings",
    "setup_logging",
    "with_header",
    "with_user_agent",
    "__version__",
]
