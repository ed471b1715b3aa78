# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Outbound request model and per-request options."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from ..http.headers import header_value, set_header
from ..http.models import Body, Headers, HttpRequest
from .registry import RegisteredAPI


@dataclass
class Request:
    """
    A request bound to a registered API.

    Built by ``Client.new_request`` and meant to be executed once. Nothing stops
    a second ``execute``, but a one-shot body iterator will be empty the second
    time and non-idempotent requests will be submitted twice.
    """

    api: RegisteredAPI
    method: str
    url: str
    headers: Headers = field(default_factory=dict)
    body: Body | None = None

    @property
    def user_agent(self) -> str:
        return header_value(self.headers, "User-Agent")

    def set_header(self, name: str, value: str) -> None:
        set_header(self.headers, name, value)

    def to_http_request(self) -> HttpRequest:
        return HttpRequest(url=self.url, method=self.method, headers=dict(self.headers), body=self.body)


RequestOption = Callable[[Request], None]


def with_user_agent(user_agent: str) -> RequestOption:
    """Replace the default User-Agent."""

    def apply(request: Request) -> None:
        request.set_header("User-Agent", user_agent)

    return apply


def with_header(name: str, value: str) -> RequestOption:
    """Set an arbitrary header, replacing any existing value."""

    def apply(request: Request) -> None:
        request.set_header(name, value)

    return apply


__all__ = ["Request", "RequestOption", "with_header", "with_user_agent"]
