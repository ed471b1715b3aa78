# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io
import time
from dataclasses import dataclass

from apir import Client, ContentType, DirectDiscoverer, RetryConfig, with_header
from apir.config import ClientSettings
from apir.errors import ErrorCategory, HTTPError, TransportError

CSV_BODY = b"id,color\n1,red\n2,blue\n"


@dataclass
class Color:
    color: str


def test_execute_csv_copies_body(live_server):
    with Client("test", settings=ClientSettings()) as client:
        client.add_api("testcsv", DirectDiscoverer(live_server.url), content_type=ContentType.TEXT_CSV)
        req = client.new_request("testcsv", "GET", "/csv")
        data = io.BytesIO()
        result = client.execute(req, data)

    assert result.success is True
    assert result.error is None
    assert data.getvalue() == CSV_BODY


def test_execute_json_decodes_success(live_server):
    with Client("test", settings=ClientSettings()) as client:
        client.add_api("testjson", DirectDiscoverer(live_server.url))
        req = client.new_request("testjson", "GET", "/json")
        result = client.execute(req, Color)

    assert result.success is True
    assert result.error is None
    assert result.data == Color(color="red")


def test_execute_json_error_payload(live_server):
    with Client("test", settings=ClientSettings()) as client:
        client.add_api("testjson", DirectDiscoverer(live_server.url))
        error_data: dict = {}
        result = client.execute(client.new_request("testjson", "GET", "/missing"), None, error_data)
        assert result.success is False
        assert result.error is None
        assert error_data == {"message": "not found"}

        result = client.execute(client.new_request("testjson", "GET", "/missing"))
        assert result.success is False
        assert isinstance(result.error, HTTPError)
        assert result.error.status_code == 404


def test_execute_retries_after_bad_gateway(live_server):
    retry = RetryConfig(max_attempts=3, initial_delay=0.01, backoff_factor=1.0)
    with Client("test", settings=ClientSettings(), retry=retry) as client:
        client.add_api("testjson-retry", DirectDiscoverer(live_server.url), content_type=ContentType.APPLICATION_JSON)
        req = client.new_request("testjson-retry", "GET", "/fail-once/test_execute_retries_after_bad_gateway")
        data: dict = {}
        result = client.execute(req, data)

    assert result.success is True
    assert result.error is None
    assert data["color"] == "red"
    assert live_server.hits.count("/fail-once/test_execute_retries_after_bad_gateway") == 2


def test_execute_without_retry_reports_bad_gateway(live_server):
    with Client("test", settings=ClientSettings()) as client:
        client.add_api("testjson", DirectDiscoverer(live_server.url))
        result = client.execute(client.new_request("testjson", "GET", "/fail-once/no-retry"), {})

    assert result.success is False
    assert isinstance(result.error, HTTPError)
    assert result.error.status_code == 502


def test_execute_timeout_is_transport_error(live_server):
    with Client("test", settings=ClientSettings(), timeout=0.1) as client:
        client.add_api("timeout", DirectDiscoverer(live_server.url), content_type=ContentType.APPLICATION_JSON)
        req = client.new_request("timeout", "GET", "/slow/test_execute_timeout_is_transport_error")
        result = client.execute(req)

    assert result.success is False
    assert isinstance(result.error, TransportError)
    assert result.error.category is ErrorCategory.TIMEOUT


def test_execute_connection_refused_is_transport_error(live_server):
    url = live_server.url
    live_server.shutdown()
    live_server.server_close()

    with Client("test", settings=ClientSettings(timeout=2.0)) as client:
        client.add_api("gone", DirectDiscoverer(url))
        result = client.execute(client.new_request("gone", "GET", "/json"), {})

    assert result.success is False
    assert isinstance(result.error, TransportError)
    assert result.error.category is ErrorCategory.CONNECTION_ERROR


def test_request_headers_reach_server(live_server):
    with Client("billing", settings=ClientSettings()) as client:
        client.add_api("echo", DirectDiscoverer(live_server.url + "/"))
        req = client.new_request("echo", "POST", "/echo", b'{"a":1}')
        echoed: dict = {}
        result = client.execute(req, echoed)

    assert result.ok
    assert echoed["method"] == "POST"
    assert echoed["path"] == "/echo"
    assert echoed["body"] == '{"a":1}'
    assert echoed["headers"]["content-type"] == "application/json"
    assert echoed["headers"]["user-agent"].endswith("(for billing)")


def test_timeout_bounds_the_whole_retried_call(live_server):
    settings = ClientSettings(initial_delay=0.2, max_retries=3)
    with Client("test", settings=settings, retry=True, timeout=0.1) as client:
        client.add_api("timeout", DirectDiscoverer(live_server.url))
        req = client.new_request("timeout", "GET", "/slow/test_timeout_bounds_the_whole_retried_call")
        started = time.monotonic()
        result = client.execute(req)
        elapsed = time.monotonic() - started

    assert result.success is False
    assert isinstance(result.error, TransportError)
    assert result.error.category is ErrorCategory.TIMEOUT
    assert elapsed < 0.9
    assert live_server.hits.count("/slow/test_timeout_bounds_the_whole_retried_call") == 1


def test_unencodable_header_is_not_retried(live_server):
    settings = ClientSettings(initial_delay=0.5, max_retries=3)
    with Client("test", settings=settings, retry=True) as client:
        client.add_api("testjson", DirectDiscoverer(live_server.url))
        req = client.new_request("testjson", "GET", "/json", None, with_header("X-Name", "café☃"))
        started = time.monotonic()
        result = client.execute(req, {})
        elapsed = time.monotonic() - started

    assert result.success is False
    assert isinstance(result.error, TransportError)
    assert result.error.category is ErrorCategory.UNKNOWN_ERROR
    assert elapsed < 0.5
    assert live_server.hits == []


def test_csv_download_is_not_limited_by_body_cap(live_server):
    with Client("test", settings=ClientSettings(max_body_bytes=10)) as client:
        client.add_api("testcsv", DirectDiscoverer(live_server.url), content_type=ContentType.TEXT_CSV)
        data = io.BytesIO()
        result = client.execute(client.new_request("testcsv", "GET", "/csv"), data)

    assert result.ok
    assert data.getvalue() == CSV_BODY
