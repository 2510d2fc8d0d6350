"""HTTP response accumulated during dispatch.

Unlike the Request, a Response is mutable: hooks and the selected handler
write into the same instance in turn. Setters return the response so
calls can chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from stooge.http.cookies import Cookie


@dataclass(slots=True)
class Response:
    """An HTTP response built up by hooks and handlers.

    Setting a header that already exists overwrites it. Cookies keep the
    order in which they were set.
    """

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    cookies: list[Cookie] = field(default_factory=list)
    body: str | bytes = ""

    def set_status(self, status: int) -> Response:
        self.status = status
        return self

    def set_header(self, name: str, value: str) -> Response:
        self.headers[name] = value
        return self

    def set_cookie(self, cookie: Cookie) -> Response:
        self.cookies.append(cookie)
        return self

    def set_body(self, body: str | bytes) -> Response:
        self.body = body
        return self

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body
