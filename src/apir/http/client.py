# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport abstraction and factory."""

from typing import Protocol

from ..config import ClientSettings, load_settings
from .models import HttpRequest, HttpResponse


class HttpTransport(Protocol):
    """
    Minimal protocol for sending HTTP requests.

    Implementations must be safe to share between threads and must not raise for
    network failures; they return ``HttpResponse(ok=False, ...)`` instead.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_transport(settings: ClientSettings | None = None) -> HttpTransport:
    """Factory for the default httpx-backed transport."""
    from .httpx_client import HttpxTransport

    return HttpxTransport(settings or load_settings())
