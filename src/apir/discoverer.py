# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL discovery for registered APIs."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Discoverer(Protocol):
    """
    Resolves the base URL of an API.

    Called once per request build, so dynamic implementations (service
    registries, DNS) may return a different URL each time. The returned string
    is validated by the request builder, not by the discoverer.
    """

    def url(self) -> str: ...


class DirectDiscoverer(Discoverer):
    """Discoverer that always returns the URL it was created with."""

    def __init__(self, url: str):
        self._url = url

    def url(self) -> str:
        return self._url

    def __repr__(self) -> str:
        return f"DirectDiscoverer({self._url!r})"


__all__ = ["DirectDiscoverer", "Discoverer"]
