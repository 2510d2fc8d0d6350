"""Stooge — a minimal HTTP request-dispatch engine.

Routes requests to handlers through a fixed PRE hook -> handler -> POST
hook pipeline with a single error boundary.

Basic usage::

    from stooge import App, StaticHandler

    app = App()
    app.get("/hello", StaticHandler(200, "Hello stranger"))

    @app.get("/hello/{name}")
    def greet(request, response):
        response.set_body(f"Hello {request.path_param('name')}")

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "NULL_HANDLER",
    "App",
    "AppConfig",
    "BadRequest",
    "ConfigurationError",
    "Cookie",
    "FunctionHandler",
    "Handler",
    "InvariantViolation",
    "NullHandler",
    "PassHandler",
    "PayloadTooLarge",
    "ProgrammingError",
    "RejectedRequest",
    "Request",
    "Response",
    "RoutingPreconditionError",
    "SetHeaderHandler",
    "StaticHandler",
    "StoogeError",
    "handler",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import stooge`` fast while providing a clean top-level API.
    """
    if name == "App":
        from stooge.app import App

        return App

    if name == "AppConfig":
        from stooge.config import AppConfig

        return AppConfig

    if name == "Request":
        from stooge.http.request import Request

        return Request

    if name == "Response":
        from stooge.http.response import Response

        return Response

    if name == "Cookie":
        from stooge.http.cookies import Cookie

        return Cookie

    if name in (
        "NULL_HANDLER",
        "FunctionHandler",
        "Handler",
        "NullHandler",
        "PassHandler",
        "SetHeaderHandler",
        "StaticHandler",
        "handler",
    ):
        from stooge import handlers as _handlers

        return getattr(_handlers, name)

    if name in (
        "BadRequest",
        "ConfigurationError",
        "InvariantViolation",
        "PayloadTooLarge",
        "ProgrammingError",
        "RejectedRequest",
        "RoutingPreconditionError",
        "StoogeError",
    ):
        from stooge import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
