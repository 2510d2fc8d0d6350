"""ASGI transport adapter — builds a Request from an ASGI scope.

The only component that reads raw ASGI request data. Header names are
normalized to display case here; the core never re-normalizes them.
"""

import time
from typing import Any
from urllib.parse import parse_qs

from stooge._internal.asgi import Receive, Scope
from stooge.errors import BadRequest, PayloadTooLarge
from stooge.http.cookies import parse_cookies
from stooge.http.request import Request
from stooge.server.forms import is_multipart, parse_multipart
from stooge.server.sessions import SessionReader


def display_header_name(name: str) -> str:
    """Normalize a header name to display case (``content-type`` -> ``Content-Type``)."""
    return "-".join(word.capitalize() for word in name.split("-"))


def _headers(scope: Scope) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw_name, raw_value in scope.get("headers", ()):
        name = display_header_name(raw_name.decode("latin-1"))
        value = raw_value.decode("latin-1")
        # Repeated headers are comma-joined, except Cookie which uses "; "
        if name in headers:
            sep = "; " if name == "Cookie" else ", "
            headers[name] = f"{headers[name]}{sep}{value}"
        else:
            headers[name] = value
    return headers


def _query(scope: Scope) -> dict[str, str]:
    raw = scope.get("query_string", b"").decode("latin-1")
    return {key: values[0] for key, values in parse_qs(raw, keep_blank_values=True).items()}


async def read_body(receive: Receive, limit: int) -> bytes:
    """Drain the ASGI receive channel.

    Raises ``PayloadTooLarge`` once more than *limit* bytes have arrived.
    """
    chunks: list[bytes] = []
    size = 0
    while True:
        message = await receive()
        chunk = message.get("body", b"")
        if chunk:
            size += len(chunk)
            if size > limit:
                msg = f"Request body exceeds {limit} bytes"
                raise PayloadTooLarge(msg)
            chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


async def build_request(
    scope: Scope,
    receive: Receive,
    *,
    max_content_length: int,
    sessions: SessionReader | None = None,
) -> Request:
    """Create a Request from an ASGI scope and receive callable.

    Raises ``PayloadTooLarge`` for an oversized body and ``BadRequest`` for a
    multipart body that cannot be decoded.
    """
    headers = _headers(scope)
    cookies = parse_cookies(headers.get("Cookie", ""))
    session: dict[str, Any] = sessions.load(cookies) if sessions is not None else {}

    body = await read_body(receive, max_content_length)
    form: dict[str, str] | None = None
    content_type = headers.get("Content-Type", "")
    if body and is_multipart(content_type):
        # Only the decoded fields survive; the request re-serializes them
        try:
            form = parse_multipart(body, content_type)
        except ValueError as exc:
            # python-multipart parse errors and UnicodeDecodeError are ValueErrors
            msg = f"Malformed multipart body: {exc}"
            raise BadRequest(msg) from exc
        body = b""

    root_path = scope.get("root_path", "")
    path = scope["path"]
    # Some servers already include root_path in path
    request_uri = path if root_path and path.startswith(root_path) else root_path + path
    return Request(
        method=scope["method"],
        request_uri=request_uri,
        root_path=root_path,
        scheme=scope.get("scheme", "http"),
        timestamp=int(time.time()),
        headers=headers,
        query=_query(scope),
        session=session,
        cookies=cookies,
        body=body,
        form=form,
    )
