# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Outcome of executing a request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..errors import ApirError


@dataclass
class ExecutionResult:
    """
    ``success`` is the application outcome: the exchange completed with a status
    below 400. ``error`` reports problems in the client machinery (transport,
    decoding, sinks) and is independent of ``success``; a 200 with a malformed
    body is ``success=True`` with a DecodeError.
    """

    success: bool
    error: ApirError | None = None
    status_code: int | None = None
    data: Any = None
    error_data: Any = None

    @property
    def ok(self) -> bool:
        """True when the request succeeded and nothing went wrong client-side."""
        return self.success and self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "error": str(self.error) if self.error is not None else None,
            "error_type": type(self.error).__name__ if self.error is not None else None,
            "status_code": self.status_code,
            "data": self.data,
            "error_data": self.error_data,
        }


__all__ = ["ExecutionResult"]
