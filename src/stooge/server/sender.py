"""ASGI response sending — translates a stooge Response to ASGI messages."""

import logging
import time

from stooge._internal.asgi import Send
from stooge.config import AppConfig
from stooge.http.response import Response

logger = logging.getLogger("stooge.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def render_headers(
    response: Response,
    config: AppConfig,
    *,
    now: float | None = None,
) -> list[tuple[bytes, bytes]]:
    """Build raw ASGI header pairs: headers verbatim, then one Set-Cookie per cookie.

    Cookie expiry is ``now + ttl``; path, domain, and flags come from *config*.
    """
    if now is None:
        now = time.time()
    raw_headers: list[tuple[bytes, bytes]] = [
        (name.encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers.items()
    ]
    raw_headers.extend(
        (
            b"Set-Cookie",
            cookie.to_header_value(
                now,
                path=config.cookie_path,
                domain=config.cookie_domain,
                secure=config.cookie_secure,
                httponly=config.cookie_httponly,
                samesite=config.cookie_samesite,
            ).encode("latin-1"),
        )
        for cookie in response.cookies
    )
    return raw_headers


async def send_response(
    response: Response,
    send: Send,
    config: AppConfig,
    *,
    now: float | None = None,
) -> None:
    """Translate a stooge Response into ASGI send() calls."""
    raw_headers = render_headers(response, config, now=now)

    body = response.body_bytes if _body_allowed(response.status) else b""
    if not any(name.lower() == b"content-length" for name, _ in raw_headers):
        raw_headers.append((b"Content-Length", str(len(body)).encode("latin-1")))

    logger.debug("Sending %d (%d bytes)", response.status, len(body))
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
