# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry wrapper for HttpTransport implementations."""

from __future__ import annotations

import logging
import time
from dataclasses import replace

from ..config import load_settings
from ..errors import ErrorCategory, categorize_exception
from .client import HttpTransport
from .models import HttpRequest, HttpResponse, RetryConfig

logger = logging.getLogger(__name__)

# failures raised before or while reaching the server; local errors such as
# bad headers or an invalid method would fail the same way on every attempt
RETRYABLE_ERROR_CATEGORIES = frozenset(
    {
        ErrorCategory.TIMEOUT,
        ErrorCategory.CONNECTION_ERROR,
        ErrorCategory.DNS_ERROR,
    }
)


def build_default_retry_config() -> RetryConfig:
    """Create a RetryConfig from environment-backed ClientSettings."""
    return RetryConfig.from_settings(load_settings())


def _should_retry(response: HttpResponse, cfg: RetryConfig) -> bool:
    if not response.ok:
        return response.error_category in RETRYABLE_ERROR_CATEGORIES
    return response.status_code in cfg.retry_statuses


def send_with_retries(
    transport: HttpTransport,
    request: HttpRequest,
    *,
    retry_config: RetryConfig | None = None,
) -> HttpResponse:
    """
    Execute a request with retry/backoff on transport failures and retryable statuses.

    ``cfg.budget`` bounds the whole call: each attempt's timeout is capped to
    the time left, and no retry starts once the backoff would overrun it.
    """
    cfg = retry_config or build_default_retry_config()
    deadline = time.monotonic() + cfg.budget if cfg.budget and cfg.budget > 0 else None

    max_attempts = max(1, cfg.max_attempts)
    attempt = 0
    response = HttpResponse(ok=False)
    while attempt < max_attempts:
        attempt_request = request
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if attempt and remaining <= 0:
                break
            if request.timeout is None or remaining < request.timeout:
                attempt_request = replace(request, timeout=max(0.0, remaining))

        try:
            response = transport.request(attempt_request)
        except Exception as exc:  # noqa: BLE001
            response = HttpResponse.failure(exc, categorize_exception(exc))
        attempt += 1

        if not _should_retry(response, cfg):
            if attempt > 1:
                response.meta["retry_count"] = attempt - 1
            return response

        if attempt >= max_attempts:
            break
        delay = cfg.delay_for(attempt)
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= delay:
                break
        logger.info(
            "retrying %s %s after %s (attempt %d/%d, sleeping %.2fs)",
            request.method,
            request.url,
            response.status_code if response.ok else response.error_type,
            attempt,
            max_attempts,
            delay,
        )
        time.sleep(delay)

    response.meta["retry_count"] = attempt - 1
    response.meta["retry_exhausted"] = True
    return response


class RetryingTransport(HttpTransport):
    """HttpTransport decorator applying one RetryConfig to every request."""

    def __init__(self, inner: HttpTransport, retry_config: RetryConfig | None = None):
        self.inner = inner
        self.retry_config = retry_config or build_default_retry_config()

    def request(self, request: HttpRequest) -> HttpResponse:
        body = request.body
        if body is not None and not isinstance(body, (bytes, str)):
            # one-shot iterables must be buffered so every attempt sends the same bytes
            request = replace(request, body=b"".join(body))
        return send_with_retries(self.inner, request, retry_config=self.retry_config)

    def close(self) -> None:
        close = getattr(self.inner, "close", None)
        if callable(close):
            close()
