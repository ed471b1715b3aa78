# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process transports for tests and offline callers."""

from __future__ import annotations

from collections.abc import Sequence

from .client import HttpTransport
from .models import HttpRequest, HttpResponse


class StubTransport(HttpTransport):
    """
    Deterministic, programmable HttpTransport for tests.

    Responses are keyed by ``(METHOD, url)``. Registering a sequence returns its
    items in order and then keeps repeating the last one.
    """

    def __init__(self, responses: dict[tuple[str, str], HttpResponse | Sequence[HttpResponse]] | None = None):
        self._responses: dict[tuple[str, str], list[HttpResponse]] = {}
        self._served: dict[tuple[str, str], int] = {}
        self.requests: list[HttpRequest] = []
        self.closed = False
        for (method, url), response in (responses or {}).items():
            self.add(url, response, method=method)

    def add(self, url: str, response: HttpResponse | Sequence[HttpResponse], *, method: str = "GET") -> None:
        key = (method.upper(), url)
        self._responses[key] = [response] if isinstance(response, HttpResponse) else list(response)
        self._served[key] = 0

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        key = (request.method.upper(), request.url)
        queue = self._responses.get(key)
        if not queue:
            return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")
        index = min(self._served[key], len(queue) - 1)
        self._served[key] += 1
        return queue[index]

    def close(self) -> None:
        self.closed = True
