# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Requester protocol shared by Client and MockRequester."""

from __future__ import annotations

from typing import Any, Protocol

from ..discoverer import Discoverer
from ..http.models import Body
from .content import ContentType
from .registry import RegisteredAPI
from .request import Request, RequestOption
from .result import ExecutionResult


class Requester(Protocol):
    """Register APIs, build requests against them, and execute those requests."""

    def add_api(
        self,
        name: str,
        discoverer: Discoverer,
        *,
        content_type: ContentType | str | None = None,
    ) -> RegisteredAPI: ...

    def new_request(
        self,
        api_name: str,
        method: str,
        path: str = "",
        body: Body | None = None,
        *options: RequestOption,
    ) -> Request: ...

    def execute(self, request: Request, success: Any = None, error: Any = None) -> ExecutionResult: ...


__all__ = ["Requester"]
