# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Requester exports."""

from .base import Requester
from .client import Client
from .content import ContentType
from .mock import MockRequester
from .registry import ApiRegistry, RegisteredAPI
from .request import Request, RequestOption, with_header, with_user_agent
from .result import ExecutionResult

__all__ = [
    "ApiRegistry",
    "Client",
    "ContentType",
    "ExecutionResult",
    "MockRequester",
    "RegisteredAPI",
    "Request",
    "RequestOption",
    "Requester",
    "with_header",
    "with_user_agent",
]
