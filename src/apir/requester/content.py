# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Content types and the codecs that decode response bodies for them.

Codecs are plain functions selected from ``CODECS`` by the API's declared
content type. Adding a content type means adding an enum member and a codec.
Content types listed in ``BODY_READERS`` are also copied straight from the
open connection when the transport supports streaming.
"""

from __future__ import annotations

import dataclasses
import io
import json
from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping
from enum import Enum
from typing import Any

from ..errors import CopyError, DecodeError, HTTPError, InvalidSinkTypeError
from ..http.models import BodyReader, HttpResponse
from .result import ExecutionResult

ERROR_STATUS_THRESHOLD = 400
COPY_CHUNK_SIZE = 64 * 1024


class ContentType(str, Enum):
    APPLICATION_JSON = "application/json"
    TEXT_CSV = "text/csv"

    def __str__(self) -> str:
        return self.value


def coerce_content_type(value: ContentType | str | None) -> ContentType | str:
    """Return the enum member for known values; unknown strings are kept as-is."""
    if value is None or value == "":
        return ContentType.APPLICATION_JSON
    try:
        return ContentType(value)
    except ValueError:
        return str(value)


def is_json_sink(sink: Any) -> bool:
    return isinstance(sink, MutableMapping) or callable(sink)


def is_byte_sink(sink: Any) -> bool:
    if isinstance(sink, io.TextIOBase):
        return False
    if not callable(getattr(sink, "write", None)):
        return False
    if isinstance(sink, io.IOBase):
        try:
            return sink.writable()
        except ValueError:
            # closed file
            return False
    return True


def _decode_into(sink: Any, payload: Any) -> Any:
    if isinstance(sink, MutableMapping):
        if not isinstance(payload, Mapping):
            raise DecodeError(f"expected a JSON object, got {type(payload).__name__}")
        try:
            sink.update(payload)
        except Exception as exc:  # noqa: BLE001
            raise DecodeError(f"updating {type(sink).__name__}: {exc}") from exc
        return sink
    if isinstance(sink, type) and dataclasses.is_dataclass(sink):
        if not isinstance(payload, Mapping):
            raise DecodeError(f"expected a JSON object for {sink.__name__}, got {type(payload).__name__}")
        names = {f.name for f in dataclasses.fields(sink) if f.init}
        try:
            return sink(**{key: value for key, value in payload.items() if key in names})
        except Exception as exc:  # noqa: BLE001
            raise DecodeError(f"decoding {sink.__name__}: {exc}") from exc
    try:
        return sink(payload)
    except Exception as exc:  # noqa: BLE001
        raise DecodeError(f"decoding with {getattr(sink, '__name__', type(sink).__name__)}: {exc}") from exc


def _parse_json(response: HttpResponse) -> Any:
    try:
        return json.loads(response.content)
    except ValueError as exc:
        raise DecodeError(f"invalid JSON body: {exc}") from exc


def decode_json(response: HttpResponse, success: Any = None, error: Any = None) -> ExecutionResult:
    """
    Decode a JSON response.

    Error statuses decode into ``error`` when given, otherwise they surface as
    HTTPError with the raw body. Success statuses decode into ``success`` when
    given; a decode failure keeps ``success=True``.
    """
    status = response.status_code or 0
    if status >= ERROR_STATUS_THRESHOLD:
        if error is None:
            return ExecutionResult(False, HTTPError(status, response.text), status_code=status)
        if not is_json_sink(error):
            return ExecutionResult(
                False,
                InvalidSinkTypeError(f"error sink must be a mapping or callable, got {type(error).__name__}"),
                status_code=status,
            )
        try:
            decoded = _decode_into(error, _parse_json(response))
        except DecodeError as exc:
            return ExecutionResult(False, DecodeError(f"decoding error payload: {exc}"), status_code=status)
        return ExecutionResult(False, None, status_code=status, error_data=decoded)

    if success is None:
        return ExecutionResult(True, None, status_code=status)
    if not is_json_sink(success):
        return ExecutionResult(
            False,
            InvalidSinkTypeError(f"success sink must be a mapping or callable, got {type(success).__name__}"),
            status_code=status,
        )
    try:
        decoded = _decode_into(success, _parse_json(response))
    except DecodeError as exc:
        return ExecutionResult(True, DecodeError(f"decoding success payload: {exc}"), status_code=status)
    return ExecutionResult(True, None, status_code=status, data=decoded)


def _copy_body(response: HttpResponse, chunks: Iterable[bytes], success: Any) -> ExecutionResult:
    status = response.status_code or 0
    if status >= ERROR_STATUS_THRESHOLD:
        body = response.text or b"".join(chunks).decode("utf-8", errors="replace")
        return ExecutionResult(False, HTTPError(status, body), status_code=status)
    if success is None:
        return ExecutionResult(True, None, status_code=status)
    if not is_byte_sink(success):
        return ExecutionResult(
            False,
            InvalidSinkTypeError(f"success sink must be a writable binary stream, got {type(success).__name__}"),
            status_code=status,
        )

    written = 0
    try:
        for chunk in chunks:
            success.write(chunk)
            written += len(chunk)
    except Exception as exc:  # noqa: BLE001
        # read failures from the connection and write failures from the sink alike
        return ExecutionResult(
            True,
            CopyError(f"copied {written} bytes before failing: {exc}"),
            status_code=status,
        )
    return ExecutionResult(True, None, status_code=status, data=success)


def _buffered_chunks(content: bytes) -> Iterator[bytes]:
    for offset in range(0, len(content), COPY_CHUNK_SIZE):
        yield content[offset : offset + COPY_CHUNK_SIZE]


def decode_file(response: HttpResponse, success: Any = None, error: Any = None) -> ExecutionResult:  # noqa: ARG001
    """
    Copy a delimited-text/file response into a binary sink.

    There is no error-payload decoding for files: error statuses always surface
    as HTTPError and ``error`` is ignored. This is the buffered path, used when
    the transport did not stream the body to ``file_body_reader``.
    """
    return _copy_body(response, _buffered_chunks(response.content), success)


def file_body_reader(success: Any = None, error: Any = None) -> BodyReader:  # noqa: ARG001
    """Stream the open response body into ``success`` while the transport holds the connection."""

    def read(response: HttpResponse, chunks: Iterator[bytes]) -> ExecutionResult:
        return _copy_body(response, chunks, success)

    return read


Codec = Callable[[HttpResponse, Any, Any], ExecutionResult]

CODECS: dict[ContentType, Codec] = {
    ContentType.APPLICATION_JSON: decode_json,
    ContentType.TEXT_CSV: decode_file,
}

# content types whose bodies are copied straight from the connection
BODY_READERS: dict[ContentType, Callable[[Any, Any], BodyReader]] = {
    ContentType.TEXT_CSV: file_body_reader,
}


def get_codec(content_type: ContentType | str) -> Codec | None:
    try:
        return CODECS.get(ContentType(content_type))
    except ValueError:
        return None


def get_body_reader(content_type: ContentType | str, success: Any = None, error: Any = None) -> BodyReader | None:
    try:
        factory = BODY_READERS.get(ContentType(content_type))
    except ValueError:
        return None
    return factory(success, error) if factory else None


__all__ = [
    "BODY_READERS",
    "CODECS",
    "Codec",
    "ContentType",
    "ERROR_STATUS_THRESHOLD",
    "coerce_content_type",
    "decode_file",
    "decode_json",
    "file_body_reader",
    "get_body_reader",
    "get_codec",
    "is_byte_sink",
    "is_json_sink",
]
