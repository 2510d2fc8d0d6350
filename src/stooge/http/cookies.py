"""Cookie parsing and Set-Cookie serialization.

Consolidates the read side (parse_cookies, used by the transport adapter)
and the write side (Cookie, attached to a Response) in one module.
"""

from __future__ import annotations

from dataclasses import dataclass
from email.utils import formatdate

DEFAULT_TTL = 60 * 60  # one hour


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Returns an empty dict for empty or missing headers.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        pair = pair.strip()
        if "=" in pair:
            key, _, value = pair.partition("=")
            cookies[key.strip()] = value.strip()
    return cookies


@dataclass(frozen=True, slots=True)
class Cookie:
    """A cookie to set on the client.

    ``ttl`` is relative: the transport adapter computes the expiry as
    ``now + ttl`` when the response is rendered. A negative ttl yields an
    expiry in the past, which tells the client to delete the cookie.
    """

    name: str
    value: str
    ttl: int = DEFAULT_TTL

    @classmethod
    def drop(cls, name: str) -> Cookie:
        """Return a cookie that deletes *name* on the client."""
        return cls(name, "", -1)

    def to_header_value(
        self,
        now: float,
        *,
        path: str | None = "/",
        domain: str | None = None,
        secure: bool = False,
        httponly: bool = True,
        samesite: str | None = "lax",
    ) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        parts = [
            f"{self.name}={self.value}",
            f"Expires={formatdate(now + self.ttl, usegmt=True)}",
            f"Max-Age={max(self.ttl, 0)}",
        ]
        if path:
            parts.append(f"Path={path}")
        if domain:
            parts.append(f"Domain={domain}")
        if secure:
            parts.append("Secure")
        if httponly:
            parts.append("HttpOnly")
        if samesite:
            parts.append(f"SameSite={samesite}")
        return "; ".join(parts)
