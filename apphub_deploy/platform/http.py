"""HTTP client abstraction for the upload handshake.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import http.client
import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, cast, runtime_checkable

from apphub_deploy import __version__
from apphub_deploy.core.result import Err, Ok, Result
from apphub_deploy.core.structured import as_str_dict

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "MockRequest",
    "HttpError",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network and parsing errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for the two requests of an upload.

    This abstraction allows injecting mock clients for testing,
    avoiding real network calls in unit tests.
    """

    def get_json(
        self, url: str, headers: Mapping[str, str]
    ) -> Result[dict[str, Any], HttpError]:
        """GET ``url`` with extra headers and parse the body as a JSON object."""
        ...

    def put_file(
        self, url: str, path: Path, headers: Mapping[str, str]
    ) -> Result[str, HttpError]:
        """PUT the raw bytes of ``path`` to ``url`` and return the response text."""
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Handles:
    - HTTPS with system certificates
    - Redirects on GET (urllib default handler)
    - JSON parsing
    - Timeout handling
    """

    def __init__(
        self, timeout: float = 300.0, user_agent: str = f"apphub-deploy/{__version__}"
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _request(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str],
        data: bytes | None = None,
    ) -> Result[bytes, HttpError]:
        try:
            req = urllib.request.Request(
                url,
                data=data,
                headers={"User-Agent": self.user_agent, **headers},
                method=method,
            )
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except http.client.HTTPException as e:
            return Err(HttpError(url=url, status=0, message=f"Malformed response: {e!r}"))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def get_json(
        self, url: str, headers: Mapping[str, str]
    ) -> Result[dict[str, Any], HttpError]:
        result = self._request(url, method="GET", headers=headers)
        if isinstance(result, Err):
            return result

        try:
            data_obj: object = json.loads(result.value.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))

        data = as_str_dict(data_obj)
        if data is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON object"))
        # Values are dynamic; preserve as Any for callers.
        return Ok(cast(dict[str, Any], data))

    def put_file(
        self, url: str, path: Path, headers: Mapping[str, str]
    ) -> Result[str, HttpError]:
        try:
            body = path.read_bytes()
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=f"Cannot read {path}: {e}"))

        result = self._request(url, method="PUT", headers=headers, data=body)
        if isinstance(result, Err):
            return result
        return Ok(result.value.decode("utf-8", errors="replace"))


@dataclass(frozen=True, slots=True)
class MockRequest:
    """A request recorded by MockHttpClient."""

    method: str
    url: str
    headers: dict[str, str]
    body: bytes | None = None


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.example.com/upload", {"data": {"s3_url": "https://s3"}})
        client.set_put("https://s3", "")
    """

    def __init__(self) -> None:
        self._json_responses: dict[str, dict[str, Any] | HttpError] = {}
        self._put_responses: dict[str, str | HttpError] = {}
        self.requests: list[MockRequest] = []

    def set_json(self, url: str, response: dict[str, Any] | HttpError) -> None:
        """Set JSON response for a GET of ``url``."""
        self._json_responses[url] = response

    def set_put(self, url: str, response: str | HttpError) -> None:
        """Set response text for a PUT to ``url``."""
        self._put_responses[url] = response

    @property
    def calls(self) -> list[tuple[str, str]]:
        """(method, url) of every request, in order."""
        return [(r.method, r.url) for r in self.requests]

    def get_json(
        self, url: str, headers: Mapping[str, str]
    ) -> Result[dict[str, Any], HttpError]:
        self.requests.append(MockRequest("GET", url, dict(headers)))

        response = self._json_responses.get(url)
        if response is None:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def put_file(
        self, url: str, path: Path, headers: Mapping[str, str]
    ) -> Result[str, HttpError]:
        try:
            body = path.read_bytes()
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=f"Cannot read {path}: {e}"))
        self.requests.append(MockRequest("PUT", url, dict(headers), body))

        response = self._put_responses.get(url)
        if response is None:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
