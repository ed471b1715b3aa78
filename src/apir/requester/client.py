# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Client: registers APIs, builds requests, executes them through a transport."""

from __future__ import annotations

import logging
from contextlib import suppress
from dataclasses import replace
from typing import Any

from ..config import ClientSettings, load_settings
from ..discoverer import Discoverer
from ..errors import TransportError, UnimplementedContentTypeError, categorize_exception
from ..http.client import HttpTransport, create_default_transport
from ..http.models import Body, HttpResponse, RetryConfig
from ..http.retry import RetryingTransport
from ..http.url import join_url, validate_absolute_url
from .base import Requester
from .content import ContentType, get_body_reader, get_codec
from .registry import ApiRegistry, RegisteredAPI
from .request import Request, RequestOption
from .result import ExecutionResult

logger = logging.getLogger(__name__)


class Client(Requester):
    """
    Named client for a set of upstream APIs.

    Retry and timeout are fixed here for the lifetime of the client. ``retry``
    may be True (policy from settings) or an explicit RetryConfig. ``timeout``
    configures the default httpx transport and cannot be combined with a
    caller-supplied ``transport``, which carries its own. Combined with retry,
    ``timeout`` bounds the whole call including every retry and backoff.

    A single Client may be shared between threads once setup is complete.
    """

    def __init__(
        self,
        name: str,
        transport: HttpTransport | None = None,
        *,
        settings: ClientSettings | None = None,
        retry: RetryConfig | bool | None = None,
        timeout: float | None = None,
    ):
        self.name = name
        self.settings = settings or load_settings()
        if timeout is not None:
            if transport is not None:
                raise ValueError("timeout only applies to the default transport; configure the given transport instead")
            self.settings = replace(self.settings, timeout=timeout)

        base_transport = transport or create_default_transport(self.settings)
        if retry:
            retry_config = retry if isinstance(retry, RetryConfig) else RetryConfig.from_settings(self.settings)
            if timeout is not None and timeout > 0:
                # an explicit timeout is the deadline for the call, retries included
                budget = timeout if retry_config.budget <= 0 else min(retry_config.budget, timeout)
                retry_config = replace(retry_config, budget=budget)
            base_transport = RetryingTransport(base_transport, retry_config)
        self.transport: HttpTransport = base_transport
        self.registry = ApiRegistry()
        self.user_agent = self.settings.user_agent_for(name)

    def add_api(
        self,
        name: str,
        discoverer: Discoverer,
        *,
        content_type: ContentType | str | None = None,
    ) -> RegisteredAPI:
        """Register an API; raises AlreadyRegisteredError for a name already in use."""
        return self.registry.register(name, discoverer, content_type=content_type)

    def new_request(
        self,
        api_name: str,
        method: str,
        path: str = "",
        body: Body | None = None,
        *options: RequestOption,
    ) -> Request:
        """
        Build a request for ``path`` on the API registered as ``api_name``.

        Raises ApiNotRegisteredError or InvalidURLError. The method is passed
        through to the transport without validation.
        """
        api = self.registry.resolve(api_name)
        url = validate_absolute_url(join_url(api.base_url(), path))

        request = Request(api=api, method=method, url=url, body=body)
        if body is not None:
            request.set_header("Content-Type", str(api.content_type))
        request.set_header("User-Agent", self.user_agent)
        for option in options:
            option(request)
        return request

    def execute(self, request: Request, success: Any = None, error: Any = None) -> ExecutionResult:
        """
        Send ``request`` and decode the response into ``success`` or ``error``.

        For JSON APIs the sinks are mappings (updated in place), dataclass types,
        or callables taking the parsed body. For CSV APIs ``success`` must be a
        writable binary stream and ``error`` is ignored; the body is copied
        from the open connection without buffering. Failures, including
        exceptions raised by sinks, are reported on the returned result rather
        than raised.
        """
        codec = get_codec(request.api.content_type)
        if codec is None:
            return ExecutionResult(False, UnimplementedContentTypeError(str(request.api.content_type)))

        http_request = request.to_http_request()
        http_request.read_body = get_body_reader(request.api.content_type, success, error)
        try:
            response = self.transport.request(http_request)
        except Exception as exc:  # noqa: BLE001
            response = HttpResponse.failure(exc, categorize_exception(exc))
        if not response.ok:
            message = f"error making request {request.method} {request.url}: {response.error_message or 'unknown error'}"
            return ExecutionResult(
                False,
                TransportError(message, category=response.error_category, error_type=response.error_type),
            )

        if isinstance(response.body_result, ExecutionResult):
            result = response.body_result
        else:
            result = codec(response, success, error)
        logger.debug(
            "%s %s -> %s (success=%s, error=%s)",
            request.method,
            request.url,
            response.status_code,
            result.success,
            type(result.error).__name__ if result.error else None,
        )
        return result

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.transport, "close"):
                self.transport.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["Client"]
