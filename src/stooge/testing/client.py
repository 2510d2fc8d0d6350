"""Async test client for stooge applications.

Drives the app through its ASGI interface directly — no HTTP involved —
so requests pass through the same adapter, pipeline, and sender as in
production.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

from stooge.app import App


@dataclass(frozen=True, slots=True)
class ClientResponse:
    """A response as received by the client."""

    status: int
    headers: tuple[tuple[str, str], ...]
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of header *name* (case-insensitive)."""
        for key, value in self.headers:
            if key.lower() == name.lower():
                return value
        return default

    @property
    def set_cookies(self) -> list[str]:
        """Raw ``Set-Cookie`` header values, in emission order."""
        return [value for key, value in self.headers if key.lower() == "set-cookie"]

    @property
    def cookies(self) -> dict[str, str]:
        """Name-value pairs from the ``Set-Cookie`` headers."""
        result: dict[str, str] = {}
        for value in self.set_cookies:
            name, _, cookie_value = value.split(";", 1)[0].partition("=")
            result[name.strip()] = cookie_value.strip()
        return result


class TestClient:
    """Async test client for stooge applications.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200
    """

    __test__ = False  # Tell pytest this is not a test class

    __slots__ = ("app", "root_path")

    def __init__(self, app: App, *, root_path: str = "") -> None:
        self.app = app
        self.root_path = root_path

    async def __aenter__(self) -> TestClient:
        self.app._ensure_frozen()
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def get(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        cookies: Mapping[str, str] | None = None,
    ) -> ClientResponse:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers, cookies=cookies)

    async def post(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        cookies: Mapping[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
        form: Mapping[str, str] | None = None,
    ) -> ClientResponse:
        """Send a POST request.

        ``json`` and ``form`` encode the body and set the matching
        content type.
        """
        extra_headers: dict[str, str] = {}
        request_body = body or b""

        if json is not None:
            request_body = json_module.dumps(json).encode("utf-8")
            extra_headers["content-type"] = "application/json"
        elif form is not None:
            request_body = urlencode(dict(form)).encode("utf-8")
            extra_headers["content-type"] = "application/x-www-form-urlencoded"

        merged = {**extra_headers, **(headers or {})}
        return await self.request("POST", path, headers=merged, cookies=cookies, body=request_body)

    async def put(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        cookies: Mapping[str, str] | None = None,
        body: bytes | None = None,
    ) -> ClientResponse:
        return await self.request("PUT", path, headers=headers, cookies=cookies, body=body)

    async def patch(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        cookies: Mapping[str, str] | None = None,
        body: bytes | None = None,
    ) -> ClientResponse:
        return await self.request("PATCH", path, headers=headers, cookies=cookies, body=body)

    async def delete(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        cookies: Mapping[str, str] | None = None,
    ) -> ClientResponse:
        return await self.request("DELETE", path, headers=headers, cookies=cookies)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        cookies: Mapping[str, str] | None = None,
        body: bytes | None = None,
    ) -> ClientResponse:
        """Send an arbitrary request through the ASGI app.

        The whole body is delivered in a single ``http.request`` message.
        """
        scope = self._scope(method, path, headers or {}, cookies or {})
        pending = [{"type": "http.request", "body": body or b"", "more_body": False}]
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            if pending:
                return pending.pop()
            return {"type": "http.disconnect"}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await self.app(scope, receive, send)

        start = next(m for m in sent if m["type"] == "http.response.start")
        return ClientResponse(
            status=start["status"],
            headers=tuple(
                (name.decode("latin-1"), value.decode("latin-1"))
                for name, value in start.get("headers", ())
            ),
            body=b"".join(m.get("body", b"") for m in sent if m["type"] == "http.response.body"),
        )

    def _scope(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str],
        cookies: Mapping[str, str],
    ) -> dict[str, Any]:
        """Build an ASGI HTTP scope. Header names are sent lower-cased, as servers do."""
        path, _, query_string = path.partition("?")
        raw_headers = [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in headers.items()
        ]
        if cookies:
            cookie_header = "; ".join(f"{name}={value}" for name, value in cookies.items())
            raw_headers.append((b"cookie", cookie_header.encode("latin-1")))

        return {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "scheme": "http",
            "path": path,
            "raw_path": path.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": self.root_path,
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }
