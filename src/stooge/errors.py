"""Stooge exception hierarchy.

Shared across Router, App, handlers, and the transport adapter so every
module raises and catches the same types.
"""


class StoogeError(Exception):
    """Base for all stooge-specific errors."""


class ConfigurationError(StoogeError):
    """Raised when app configuration is invalid.

    Typically raised during route registration or ``App._freeze()``.
    """


class ProgrammingError(StoogeError):
    """A defect in code calling the engine, not in a request.

    Never converted into an error response: dispatch lets these propagate.
    """


class RoutingPreconditionError(ProgrammingError):
    """The request path was read before root path and request URI were set.

    Indicates a transport adapter that built an incomplete Request.
    """


class InvariantViolation(ProgrammingError):  # noqa: N818 — names the broken invariant
    """A sentinel that must never execute was invoked.

    ``NullHandler`` raises this from ``handle()``.
    """


class RejectedRequest(StoogeError):  # noqa: N818 — names the outcome
    """The transport adapter refused to build a Request.

    Answered with ``status`` and an empty body before any dispatch happens,
    so no hook or handler sees the request.
    """

    status: int = 400


class BadRequest(RejectedRequest):  # noqa: N818 — mirrors the 400 status name
    """The request body could not be decoded (e.g. malformed multipart)."""

    status = 400


class PayloadTooLarge(RejectedRequest):  # noqa: N818 — mirrors the 413 status name
    """The request body exceeded ``AppConfig.max_content_length``."""

    status = 413
