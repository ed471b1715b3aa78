# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models exchanged with transports."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from ..config import ClientSettings
from ..errors import ErrorCategory

Headers = dict[str, str]
Body = bytes | str | Iterable[bytes]

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


@dataclass
class HttpRequest:
    """
    Normalized request representation consumed by HttpTransport implementations.

    When ``read_body`` is set, a streaming transport calls it with the
    status-bearing response and the body chunks while the connection is still
    open, and stores its return value on ``HttpResponse.body_result``. Such
    bodies are not buffered and not subject to ``max_body_bytes``. Transports
    that cannot stream ignore it and return buffered content.
    """

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: Body | None = None
    # caps the transport timeout for this attempt; set by the retry deadline
    timeout: float | None = None
    read_body: BodyReader | None = None


@dataclass
class HttpResponse:
    """
    Fully read HTTP response, or a transport failure when ``ok`` is False.

    ``ok`` only says whether an HTTP exchange happened; a 404 is ``ok=True``.
    ``body_result`` holds what ``HttpRequest.read_body`` returned when the body
    was streamed; ``content`` is then empty.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)
    body_result: Any = None

    @property
    def error_category(self) -> ErrorCategory:
        raw = self.meta.get("error_category")
        try:
            return ErrorCategory(raw)
        except ValueError:
            return ErrorCategory.UNKNOWN_ERROR

    @classmethod
    def failure(cls, exc: BaseException, category: ErrorCategory, **meta: Any) -> HttpResponse:
        """Build a transport-failure response from an exception."""
        return cls(
            ok=False,
            error_message=str(exc) or type(exc).__name__,
            error_type=type(exc).__name__,
            meta={"error_category": category.value, **meta},
        )


BodyReader = Callable[[HttpResponse, Iterator[bytes]], Any]


@dataclass
class RetryConfig:
    """Retry policy applied uniformly by RetryingTransport."""

    max_attempts: int = 5
    backoff_factor: float = 2.0
    initial_delay: float = 1.0
    max_delay: float = 30.0
    budget: float = 300.0
    retry_statuses: frozenset[int] = RETRYABLE_STATUS_CODES

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> RetryConfig:
        """Build a retry config from the shared ClientSettings."""
        return cls(
            max_attempts=max(1, settings.max_retries + 1),
            backoff_factor=settings.backoff_factor,
            initial_delay=max(0.0, settings.initial_delay),
            max_delay=max(0.0, settings.max_delay),
            budget=settings.retry_budget_cap,
        )

    def delay_for(self, attempt: int) -> float:
        """Sleep before retry number ``attempt`` (1-based)."""
        delay = self.initial_delay * (self.backoff_factor ** max(0, attempt - 1))
        return min(delay, self.max_delay)
