# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpTransport implementation."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import ClientSettings, load_settings
from ..errors import ErrorCategory, categorize_exception
from .client import HttpTransport
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class ResponseTooLarge(Exception):
    pass


class HttpxTransport(HttpTransport):
    """Synchronous httpx client wrapper."""

    def __init__(self, settings: ClientSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = ClientSettings.max_body_bytes

        extra: dict[str, Any] = {}
        if request.timeout is not None:
            extra["timeout"] = max(0.0, min(request.timeout, self.settings.timeout))

        try:
            # the stream context releases the connection on every exit path
            with self._client.stream(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
                **extra,
            ) as resp:
                if request.read_body is not None:
                    response = HttpResponse(
                        ok=True,
                        status_code=resp.status_code,
                        headers=dict(resp.headers),
                        url=str(resp.url),
                    )
                    response.body_result = request.read_body(response, resp.iter_bytes())
                    return response

                content = bytearray()
                for chunk in resp.iter_bytes():
                    if len(content) + len(chunk) > max_body_bytes:
                        raise ResponseTooLarge(f"response body exceeded {max_body_bytes} bytes")
                    content.extend(chunk)

                encoding = resp.encoding or "utf-8"
                try:
                    text = bytes(content).decode(encoding, errors="replace")
                except LookupError:
                    text = bytes(content).decode("utf-8", errors="replace")

            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                headers=dict(resp.headers),
                text=text,
                content=bytes(content),
                url=str(resp.url),
                meta={"body_bytes_read": len(content)},
            )
        except ResponseTooLarge as exc:
            logger.warning("%s %s: %s", request.method, request.url, exc)
            return HttpResponse.failure(exc, ErrorCategory.BODY_TOO_LARGE, body_bytes_limit=max_body_bytes)
        except (httpx.HTTPError, OSError) as exc:
            category = categorize_exception(exc)
            logger.warning("%s %s failed (%s): %s", request.method, request.url, category.value, exc)
            return HttpResponse.failure(exc, category)

    def close(self) -> None:
        self._client.close()
