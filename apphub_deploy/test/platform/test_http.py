"""Tests for platform/http.py - HTTP client abstraction."""

from __future__ import annotations

import json
import threading
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import pytest

from apphub_deploy.core.result import Err, Ok
from apphub_deploy.platform.http import (
    HttpClient,
    HttpError,
    MockHttpClient,
    RealHttpClient,
)


# =============================================================================
# HttpError tests
# =============================================================================


class TestHttpError:
    def test_str_with_status(self) -> None:
        error = HttpError(url="https://api.example.com/upload", status=401, message="Unauthorized")
        assert str(error) == "HTTP 401: Unauthorized (https://api.example.com/upload)"

    def test_str_without_status(self) -> None:
        error = HttpError(url="https://api.example.com", status=0, message="Timeout")
        assert str(error) == "Timeout (https://api.example.com)"

    def test_is_frozen(self) -> None:
        error = HttpError(url="https://example.com", status=404, message="Not Found")
        with pytest.raises(AttributeError):
            error.status = 500  # type: ignore[misc]


# =============================================================================
# MockHttpClient tests
# =============================================================================


class TestMockHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(MockHttpClient(), HttpClient)

    def test_get_json_records_headers(self) -> None:
        client = MockHttpClient()
        client.set_json("https://api.example.com/upload", {"data": {}})

        result = client.get_json("https://api.example.com/upload", {"X-Key": "v"})

        assert result == Ok({"data": {}})
        assert client.requests[0].headers == {"X-Key": "v"}
        assert client.calls == [("GET", "https://api.example.com/upload")]

    def test_get_json_unknown_url(self) -> None:
        result = MockHttpClient().get_json("https://unknown", {})
        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_put_file_records_body(self, tmp_path: Path) -> None:
        archive = tmp_path / "build.zip"
        archive.write_bytes(b"PK\x03\x04zip")
        client = MockHttpClient()
        client.set_put("https://s3/put", "")

        result = client.put_file("https://s3/put", archive, {"Content-Type": "application/zip"})

        assert result == Ok("")
        assert client.requests[0].body == b"PK\x03\x04zip"

    def test_put_file_error_response(self, tmp_path: Path) -> None:
        archive = tmp_path / "build.zip"
        archive.write_bytes(b"zip")
        client = MockHttpClient()
        client.set_put("https://s3/put", HttpError("https://s3/put", 403, "Forbidden"))

        result = client.put_file("https://s3/put", archive, {})

        assert isinstance(result, Err)
        assert result.error.status == 403


# =============================================================================
# RealHttpClient tests (local server)
# =============================================================================


class _Handler(BaseHTTPRequestHandler):
    uploads: list[tuple[str, str, bytes]] = []

    def log_message(self, format: str, *args: object) -> None:
        del format, args

    def _send(self, status: int, body: bytes, content_type: str = "application/json") -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _send_truncated(self) -> None:
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", "100")
        self.end_headers()
        self.wfile.write(b'{"da')
        self.wfile.flush()
        self.close_connection = True

    def do_GET(self) -> None:
        if self.path == "/upload":
            payload = {
                "data": {"s3_url": "http://example.invalid/put"},
                "app_id": self.headers.get("X-AppHub-Application-ID"),
                "user_agent": self.headers.get("User-Agent"),
            }
            self._send(200, json.dumps(payload).encode("utf-8"))
        elif self.path == "/not-json":
            self._send(200, b"<html>oops</html>", "text/html")
        elif self.path == "/truncated":
            self._send_truncated()
        elif self.path == "/list":
            self._send(200, b"[1, 2]")
        else:
            self._send(500, b'{"error": "boom"}')

    def do_PUT(self) -> None:
        length = int(self.headers.get("Content-Length", "0"))
        body = self.rfile.read(length)
        if self.path == "/truncated":
            self._send_truncated()
            return
        _Handler.uploads.append((self.path, self.headers.get("Content-Type", ""), body))
        self._send(200, b"stored", "text/plain")


@pytest.fixture
def server_url() -> Iterator[str]:
    _Handler.uploads = []
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address[:2]
        yield f"http://{host!s}:{port}"
    finally:
        server.shutdown()
        server.server_close()


class TestRealHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(RealHttpClient(), HttpClient)

    def test_get_json_sends_headers(self, server_url: str) -> None:
        client = RealHttpClient(timeout=5.0)

        result = client.get_json(f"{server_url}/upload", {"X-AppHub-Application-ID": "abc"})

        assert isinstance(result, Ok)
        assert result.value["data"]["s3_url"] == "http://example.invalid/put"
        assert result.value["app_id"] == "abc"
        assert result.value["user_agent"].startswith("apphub-deploy/")

    def test_get_json_http_error(self, server_url: str) -> None:
        result = RealHttpClient(timeout=5.0).get_json(f"{server_url}/fail", {})

        assert isinstance(result, Err)
        assert result.error.status == 500

    def test_get_json_not_json(self, server_url: str) -> None:
        result = RealHttpClient(timeout=5.0).get_json(f"{server_url}/not-json", {})

        assert isinstance(result, Err)
        assert "JSON parse error" in result.error.message

    def test_get_json_not_an_object(self, server_url: str) -> None:
        result = RealHttpClient(timeout=5.0).get_json(f"{server_url}/list", {})

        assert isinstance(result, Err)
        assert result.error.message == "Expected JSON object"

    def test_put_file_sends_raw_bytes(self, server_url: str, tmp_path: Path) -> None:
        archive = tmp_path / "AppHubBuild_1.zip"
        archive.write_bytes(b"PK\x03\x04" + bytes(range(256)))

        result = RealHttpClient(timeout=5.0).put_file(
            f"{server_url}/bucket/key", archive, {"Content-Type": "application/zip"}
        )

        assert result == Ok("stored")
        path, content_type, body = _Handler.uploads[0]
        assert path == "/bucket/key"
        assert content_type == "application/zip"
        assert body == archive.read_bytes()

    def test_put_file_missing_archive(self, server_url: str, tmp_path: Path) -> None:
        result = RealHttpClient(timeout=5.0).put_file(
            f"{server_url}/bucket/key", tmp_path / "missing.zip", {}
        )

        assert isinstance(result, Err)
        assert result.error.status == 0
        assert _Handler.uploads == []

    def test_connection_refused(self) -> None:
        result = RealHttpClient(timeout=2.0).get_json("http://127.0.0.1:9/upload", {})

        assert isinstance(result, Err)
        assert result.error.status == 0

    def test_invalid_url(self) -> None:
        result = RealHttpClient().get_json("not a url", {})

        assert isinstance(result, Err)
        assert result.error.status == 0

    def test_get_json_truncated_body(self, server_url: str) -> None:
        result = RealHttpClient(timeout=5.0).get_json(f"{server_url}/truncated", {})

        assert isinstance(result, Err)
        assert result.error.status == 0
        assert "IncompleteRead" in result.error.message

    def test_put_file_truncated_response(self, server_url: str, tmp_path: Path) -> None:
        archive = tmp_path / "AppHubBuild_1.zip"
        archive.write_bytes(b"zip")

        result = RealHttpClient(timeout=5.0).put_file(f"{server_url}/truncated", archive, {})

        assert isinstance(result, Err)
        assert "IncompleteRead" in result.error.message
