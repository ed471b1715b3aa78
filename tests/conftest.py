# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

CSV_BODY = b"id,color\n1,red\n2,blue\n"


class _Server(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address):
        super().__init__(address, _Handler)
        self.failed_paths: set[str] = set()
        self.hits: list[str] = []
        self.lock = threading.Lock()

    def handle_error(self, request, client_address):  # noqa: ARG002
        # the slow endpoint writes to sockets the client already gave up on
        return None


class _Handler(BaseHTTPRequestHandler):
    server: _Server

    def log_message(self, format, *args):  # noqa: A002,ARG002
        return None

    def _send(self, status: int, body: bytes, content_type: str = "application/json") -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _route(self) -> None:
        path = self.path
        with self.server.lock:
            self.server.hits.append(path)

        if path.startswith("/csv"):
            self._send(200, CSV_BODY, "text/csv")
        elif path.startswith("/json"):
            self._send(200, b'{"color":"red"}')
        elif path.startswith("/null"):
            self._send(200, b"null")
        elif path.startswith("/missing"):
            self._send(404, b'{"message":"not found"}')
        elif path.startswith("/slow"):
            time.sleep(1)
            self._send(200, b"{}")
        elif path.startswith("/fail-once"):
            with self.server.lock:
                should_fail = path not in self.server.failed_paths
                self.server.failed_paths.add(path)
            self._send(502 if should_fail else 200, b'{"color":"red"}')
        elif path.startswith("/echo"):
            length = int(self.headers.get("Content-Length") or 0)
            payload = {
                "method": self.command,
                "path": path,
                "headers": {key.lower(): value for key, value in self.headers.items()},
                "body": self.rfile.read(length).decode("utf-8") if length else None,
            }
            self._send(200, json.dumps(payload).encode("utf-8"))
        else:
            self._send(404, b"no route")

    do_GET = _route
    do_POST = _route
    do_PUT = _route
    do_DELETE = _route


@pytest.fixture
def live_server():
    """Threaded local HTTP server; retry bookkeeping lives on the per-test server instance."""
    server = _Server(("127.0.0.1", 0))
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    server.url = f"http://127.0.0.1:{server.server_address[1]}"
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()
