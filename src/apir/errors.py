# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    SSL_ERROR = "SSL_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    BODY_TOO_LARGE = "BODY_TOO_LARGE"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ApirError(Exception):
    """Base class for every error raised or reported by apir."""


class AlreadyRegisteredError(ApirError):
    """An API with the same name was already registered."""

    def __init__(self, name: str):
        super().__init__(f"api {name!r} already registered")
        self.name = name


class ApiNotRegisteredError(ApirError):
    """A request named an API that was never registered."""

    def __init__(self, name: str):
        super().__init__(f"api {name!r} not registered")
        self.name = name


class InvalidURLError(ApirError):
    """The composed request URL is not a valid absolute URL."""

    def __init__(self, url: str, reason: str = ""):
        message = f"invalid request url {url!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.url = url


class TransportError(ApirError):
    """The request never produced a response (connection, DNS, timeout, ...)."""

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
        error_type: str | None = None,
    ):
        super().__init__(message)
        self.category = category
        self.error_type = error_type

    @property
    def reason(self) -> str:
        return error_category_to_reason(self.category)


class DecodeError(ApirError):
    """The response body did not match the expected shape."""


class CopyError(ApirError):
    """Streaming the response body into a byte sink failed part way."""


class HTTPError(ApirError):
    """Error status with no structured error payload available."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"{status_code}:{body}")
        self.status_code = status_code
        self.body = body


class InvalidSinkTypeError(ApirError):
    """The decode target cannot be used with the API's content type."""


class UnimplementedContentTypeError(ApirError):
    """No codec exists for the API's declared content type."""

    def __init__(self, content_type: str):
        super().__init__(f"content type {str(content_type)!r} not implemented")
        self.content_type = content_type


def _exception_chain(exc: BaseException, limit: int = 8) -> list[BaseException]:
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and len(chain) < limit:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    chain = _exception_chain(exc)
    if isinstance(exc, httpx.ConnectError) and any(isinstance(item, socket.gaierror) for item in chain):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.RemoteProtocolError, httpx.LocalProtocolError)):
        return ErrorCategory.PROTOCOL_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.ProxyError)):
        if any(isinstance(item, ssl_module.SSLError) for item in chain):
            return ErrorCategory.SSL_ERROR
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Request timed out",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.PROTOCOL_ERROR: "Malformed HTTP exchange",
        ErrorCategory.BODY_TOO_LARGE: "Response body exceeded the configured limit",
        ErrorCategory.UNKNOWN_ERROR: "Network error during request",
    }
    if category is None:
        return mapping[ErrorCategory.UNKNOWN_ERROR]
    return mapping.get(category, mapping[ErrorCategory.UNKNOWN_ERROR])


__all__ = [
    "AlreadyRegisteredError",
    "ApiNotRegisteredError",
    "ApirError",
    "CopyError",
    "DecodeError",
    "ErrorCategory",
    "HTTPError",
    "InvalidSinkTypeError",
    "InvalidURLError",
    "TransportError",
    "UnimplementedContentTypeError",
    "categorize_exception",
    "error_category_to_reason",
]
