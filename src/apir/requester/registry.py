# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Registry of named upstream APIs."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass

from ..discoverer import Discoverer
from ..errors import AlreadyRegisteredError, ApiNotRegisteredError
from .content import ContentType, coerce_content_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisteredAPI:
    name: str
    discoverer: Discoverer
    content_type: ContentType | str = ContentType.APPLICATION_JSON

    def base_url(self) -> str:
        return self.discoverer.url()


class ApiRegistry:
    """
    Read-mostly mapping of API name to RegisteredAPI.

    Writers serialize on a lock and publish a new dict on every insert, so
    lookups never lock and never observe a half-built mapping or entry.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._apis: dict[str, RegisteredAPI] = {}

    def register(
        self,
        name: str,
        discoverer: Discoverer,
        *,
        content_type: ContentType | str | None = None,
    ) -> RegisteredAPI:
        """Add an API; raises AlreadyRegisteredError and leaves the registry untouched on duplicates."""
        api = RegisteredAPI(name=name, discoverer=discoverer, content_type=coerce_content_type(content_type))
        with self._lock:
            if name in self._apis:
                raise AlreadyRegisteredError(name)
            apis = dict(self._apis)
            apis[name] = api
            self._apis = apis
        logger.debug("registered api %r (%s) via %r", name, api.content_type, discoverer)
        return api

    def resolve(self, name: str) -> RegisteredAPI:
        api = self._apis.get(name)
        if api is None:
            raise ApiNotRegisteredError(name)
        return api

    def names(self) -> list[str]:
        return sorted(self._apis)

    def __contains__(self, name: object) -> bool:
        return name in self._apis

    def __len__(self) -> int:
        return len(self._apis)

    def __iter__(self) -> Iterator[RegisteredAPI]:
        return iter(list(self._apis.values()))


__all__ = ["ApiRegistry", "RegisteredAPI"]
