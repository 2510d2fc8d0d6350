"""HTTP request.

Frozen metadata built once by the transport adapter. Two pieces of
per-dispatch state live in a private mutable dict: the path parameters
bound by the router and the sticky handler a pre-hook may install.
"""

from __future__ import annotations

import json
import time
from collections.abc import Mapping
from dataclasses import InitVar, dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qs, urlencode

from stooge.errors import RoutingPreconditionError

if TYPE_CHECKING:
    from stooge.handlers import Handler


def _lookup(values: Mapping[str, Any], name: str, default: str) -> str:
    if name in values:
        return str(values[name])
    return default


def _to_int(value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class Request:
    """An HTTP request as seen by hooks and handlers.

    ``method`` is upper-cased at construction. When ``body`` is empty and a
    non-empty ``form`` mapping is given, the form is URL-encoded into the
    body so handlers only ever deal with one raw representation.

    The request path is derived from ``request_uri`` and ``root_path``;
    reading it before both are set raises ``RoutingPreconditionError``.
    """

    method: str
    request_uri: str | None = None
    root_path: str | None = None
    scheme: str = "http"
    timestamp: int = field(default_factory=lambda: int(time.time()))
    headers: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)
    session: Mapping[str, Any] = field(default_factory=dict)
    cookies: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    form: InitVar[Mapping[str, str] | None] = None

    # Private: per-dispatch mutable state
    # (dict contents are mutable even though the field reference is frozen)
    _state: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self, form: Mapping[str, str] | None) -> None:
        object.__setattr__(self, "method", self.method.upper())
        body: bytes | str = self.body
        if isinstance(body, str):
            body = body.encode("utf-8")
        if not body and form:
            body = urlencode(dict(form)).encode("utf-8")
        object.__setattr__(self, "body", body)

    # -- Routing state --

    @property
    def request_path(self) -> str:
        """The request URI with the root path removed.

        Only the first occurrence of the root path is removed, wherever it
        appears in the URI.
        """
        if self.root_path is None or self.request_uri is None:
            msg = "Request path requires both root_path and request_uri."
            raise RoutingPreconditionError(msg)
        return self.request_uri.replace(self.root_path, "", 1)

    def path_starts_with(self, prefix: str) -> bool:
        """True if the request path starts with *prefix*."""
        return self.request_path.startswith(prefix)

    @property
    def path_params(self) -> dict[str, str]:
        """Parameters bound by the router. Empty until a route matches."""
        return self._state.get("path_params", {})

    def bind_path_params(self, params: dict[str, str]) -> None:
        """Store the parameters of a successful route match."""
        self._state["path_params"] = params

    @property
    def sticky_handler(self) -> Handler:
        """Handler forced for this request, or the ``NULL_HANDLER`` sentinel."""
        from stooge.handlers import NULL_HANDLER

        return self._state.get("sticky_handler", NULL_HANDLER)

    @property
    def has_sticky_handler(self) -> bool:
        from stooge.handlers import NullHandler

        return not isinstance(self.sticky_handler, NullHandler)

    def set_sticky_handler(self, handler: Handler) -> Request:
        """Force *handler* for this request, regardless of route matching."""
        self._state["sticky_handler"] = handler
        return self

    # -- Parameter access --

    def path_param(self, name: str, default: str = "") -> str:
        return _lookup(self.path_params, name, default)

    def path_param_int(self, name: str, default: int = -1) -> int:
        return _to_int(self.path_param(name, str(default)), default)

    def query_param(self, name: str, default: str = "") -> str:
        return _lookup(self.query, name, default)

    def query_param_int(self, name: str, default: int = -1) -> int:
        return _to_int(self.query_param(name, str(default)), default)

    def session_param(self, name: str, default: str = "") -> str:
        return _lookup(self.session, name, default)

    def session_param_int(self, name: str, default: int = -1) -> int:
        return _to_int(self.session_param(name, str(default)), default)

    def cookie_param(self, name: str, default: str = "") -> str:
        return _lookup(self.cookies, name, default)

    def cookie_param_int(self, name: str, default: int = -1) -> int:
        return _to_int(self.cookie_param(name, str(default)), default)

    # -- Headers --

    def is_header(self, name: str, value: str) -> bool:
        """True if header *name* is present and contains *value*.

        The lookup uses the header name exactly as the adapter supplied it.
        """
        return name in self.headers and value in self.headers[name]

    @property
    def is_json(self) -> bool:
        """True if the request declares a JSON content type."""
        return self.is_header("Content-Type", "application/json")

    # -- Body --

    @property
    def text(self) -> str:
        """Body as text (UTF-8)."""
        return self.body.decode("utf-8")

    def parsed_body(self) -> dict[str, Any]:
        """Decode the body into a mapping.

        JSON when the request declares a JSON content type, otherwise
        URL-encoded form data (first value per field). An empty body, or a
        JSON document whose top level is not an object, yields an empty
        dict. Invalid JSON raises ``ValueError``.
        """
        if not self.body:
            return {}
        if self.is_json:
            data = json.loads(self.body)
            return data if isinstance(data, dict) else {}
        parsed = parse_qs(self.text, keep_blank_values=True)
        return {key: values[0] for key, values in parsed.items()}
