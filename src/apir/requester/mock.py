# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Programmable Requester for testing code that depends on a Client."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..discoverer import Discoverer
from ..http.models import Body
from .base import Requester
from .content import ContentType
from .registry import RegisteredAPI
from .request import Request, RequestOption
from .result import ExecutionResult


class MockRequester(Requester):
    """
    Requester whose behavior is supplied by the test.

    Each method delegates to the matching ``*_fn`` attribute and flips the
    matching ``*_called`` flag. Calling a method whose function is unset raises
    NotImplementedError.
    """

    def __init__(
        self,
        *,
        add_api_fn: Callable[..., RegisteredAPI] | None = None,
        new_request_fn: Callable[..., Request] | None = None,
        execute_fn: Callable[[Request, Any, Any], ExecutionResult] | None = None,
    ):
        self.add_api_fn = add_api_fn
        self.add_api_called = False
        self.new_request_fn = new_request_fn
        self.new_request_called = False
        self.execute_fn = execute_fn
        self.execute_called = False

    @staticmethod
    def _require(fn: Callable[..., Any] | None, name: str) -> Callable[..., Any]:
        if fn is None:
            raise NotImplementedError(f"MockRequester.{name} is not set")
        return fn

    def add_api(
        self,
        name: str,
        discoverer: Discoverer,
        *,
        content_type: ContentType | str | None = None,
    ) -> RegisteredAPI:
        self.add_api_called = True
        return self._require(self.add_api_fn, "add_api_fn")(name, discoverer, content_type=content_type)

    def new_request(
        self,
        api_name: str,
        method: str,
        path: str = "",
        body: Body | None = None,
        *options: RequestOption,
    ) -> Request:
        self.new_request_called = True
        return self._require(self.new_request_fn, "new_request_fn")(api_name, method, path, body, *options)

    def execute(self, request: Request, success: Any = None, error: Any = None) -> ExecutionResult:
        self.execute_called = True
        return self._require(self.execute_fn, "execute_fn")(request, success, error)


__all__ = ["MockRequester"]
