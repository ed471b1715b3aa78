# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for request construction."""

from __future__ import annotations

import httpx

from ..errors import InvalidURLError


def join_url(base_url: str, path: str) -> str:
    """
    Join an API base URL and a request path with exactly one separating slash.

    Example:
      join_url("http://host/api/", "/users") -> "http://host/api/users"
      join_url("http://host/api", "") -> "http://host/api/"
    """
    return f"{str(base_url or '').rstrip('/')}/{str(path or '').lstrip('/')}"


def validate_absolute_url(url: str) -> str:
    """Return ``url`` unchanged if it parses as an absolute http(s) URL, else raise InvalidURLError."""
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidURLError(url, str(exc)) from exc
    if not parsed.is_absolute_url:
        raise InvalidURLError(url, "missing scheme")
    if parsed.scheme not in {"http", "https"}:
        raise InvalidURLError(url, f"unsupported scheme {parsed.scheme!r}")
    if not parsed.host:
        raise InvalidURLError(url, "missing host")
    return url


__all__ = ["join_url", "validate_absolute_url"]
