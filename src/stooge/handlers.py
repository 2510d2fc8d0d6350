"""Handler protocol and built-in handlers.

A handler is any object with a ``handle(request, response)`` method::

    class Greet:
        def handle(self, request: Request, response: Response) -> None:
            response.set_body(f"Hello {request.path_param('name')}")

No base class required. The framework checks the shape, not the lineage.
Plain functions can be adapted with the ``@handler`` decorator.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, is_dataclass
from typing import Protocol, runtime_checkable

from stooge.errors import InvariantViolation
from stooge.http.request import Request
from stooge.http.response import Response

type HandlerFunc = Callable[[Request, Response], None]


@runtime_checkable
class Handler(Protocol):
    """Protocol for route handlers and hooks."""

    def handle(self, request: Request, response: Response) -> None: ...


class NullHandler:
    """Sentinel meaning "no handler". Never meant to execute."""

    __slots__ = ()

    def handle(self, request: Request, response: Response) -> None:
        msg = "NullHandler is a sentinel and must not be invoked."
        raise InvariantViolation(msg)

    def __repr__(self) -> str:
        return "NULL_HANDLER"


NULL_HANDLER = NullHandler()


class PassHandler:
    """Does nothing.

    Installed as a sticky handler to neutralize the matched route when a
    hook has already written the response (e.g. a 403).
    """

    __slots__ = ()

    def handle(self, request: Request, response: Response) -> None:
        pass


@dataclass(frozen=True, slots=True)
class SetHeaderHandler:
    """Sets a single response header."""

    name: str
    value: str

    def handle(self, request: Request, response: Response) -> None:
        response.set_header(self.name, self.value)


@dataclass(frozen=True, slots=True)
class StaticHandler:
    """Sets a fixed status code and body.

    Also the default not-found (404) and server-error (500) handler.
    """

    status: int = 200
    body: str = ""

    def handle(self, request: Request, response: Response) -> None:
        response.set_status(self.status).set_body(self.body)


@dataclass(frozen=True, slots=True)
class FunctionHandler:
    """Adapts a plain ``(request, response)`` function to the Handler protocol."""

    func: HandlerFunc

    def handle(self, request: Request, response: Response) -> None:
        self.func(request, response)


def handler(func: HandlerFunc) -> FunctionHandler:
    """Decorator form of ``FunctionHandler``::

        @handler
        def greet(request: Request, response: Response) -> None:
            response.set_body("hi")
    """
    return FunctionHandler(func)


def as_handler(obj: Handler | HandlerFunc) -> Handler:
    """Return *obj* as a Handler, wrapping plain callables.

    Raises ``TypeError`` for a handler class passed in place of an instance.
    """
    if isinstance(obj, type):
        msg = f"{obj.__qualname__} is a class; register an instance, e.g. {obj.__qualname__}()"
        raise TypeError(msg)
    if isinstance(obj, Handler):
        return obj
    if callable(obj):
        return FunctionHandler(obj)
    msg = f"{obj!r} is neither a Handler nor a callable"
    raise TypeError(msg)


def describe_handler(obj: Handler) -> str:
    """Human-readable handler name for route listings and logs."""
    if isinstance(obj, FunctionHandler):
        return getattr(obj.func, "__qualname__", repr(obj.func))
    if is_dataclass(obj):
        return repr(obj)
    return type(obj).__qualname__
