"""Stooge application class.

Mutable during setup (route registration, hooks, default handlers).
Frozen at runtime when ``dispatch()`` or ``__call__()`` is first invoked.
"""

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from stooge._internal.asgi import Receive, Scope, Send
from stooge.config import AppConfig
from stooge.errors import ConfigurationError, ProgrammingError, RejectedRequest
from stooge.handlers import Handler, HandlerFunc, StaticHandler, as_handler
from stooge.http.request import Request
from stooge.http.response import Response
from stooge.routing.router import METHODS, Router
from stooge.server.adapter import build_request
from stooge.server.sender import send_response
from stooge.server.sessions import SessionReader

logger = logging.getLogger("stooge.app")

type HandlerLike = Handler | HandlerFunc


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    method: str
    pattern: str
    handler: Handler


class App:
    """The stooge application.

    Every request runs the same fixed pipeline::

        PRE hooks -> route handler (or not-found) -> POST hooks

    wrapped in a single error boundary that hands the request to the
    server-error handler when anything raises.

    Usage::

        app = App()
        app.get("/hello", StaticHandler(200, "Hello stranger"))

        @app.get("/hello/{name}")
        def greet(request: Request, response: Response) -> None:
            response.set_body(f"Hello {request.path_param('name')}")

    Thread safety:
        Registration is single-threaded setup work. The freeze transition
        uses a Lock + double-check so exactly one thread compiles the app
        when several requests arrive at once.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_not_found_handler",
        "_pending_routes",
        "_post_hooks",
        "_pre_hooks",
        # Compiled state (populated by _freeze)
        "_router",
        "_server_error_handler",
        "_sessions",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[_PendingRoute] = []
        self._pre_hooks: list[Handler] | tuple[Handler, ...] = []
        self._post_hooks: list[Handler] | tuple[Handler, ...] = []
        self._not_found_handler: Handler = StaticHandler(404)
        self._server_error_handler: Handler = StaticHandler(500)
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set by _freeze()
        self._router: Router | None = None
        self._sessions: SessionReader | None = None

    # -- Route registration --

    def route(
        self,
        pattern: str,
        handler: HandlerLike | None = None,
        *,
        methods: Sequence[str] = ("GET",),
    ) -> Any:
        """Register a handler for *pattern* under each of *methods*.

        Called with a handler, registers it and returns it. Called without
        one, returns a decorator::

            app.route("/users/{id}", UserHandler(), methods=["GET", "PUT"])

            @app.route("/users", methods=["POST"])
            def create_user(request, response): ...

        Args:
            pattern: ``/``-separated path pattern. Use ``{name}`` for a
                captured parameter and ``*`` for any single segment.
            handler: A Handler, or a plain ``(request, response)`` function.
            methods: HTTP methods. Defaults to ``("GET",)``.
        """
        if handler is None:

            def decorator(func: HandlerLike) -> HandlerLike:
                self._add_routes(methods, pattern, func)
                return func

            return decorator

        self._add_routes(methods, pattern, handler)
        return handler

    def get(self, pattern: str, handler: HandlerLike | None = None) -> Any:
        return self.route(pattern, handler, methods=("GET",))

    def post(self, pattern: str, handler: HandlerLike | None = None) -> Any:
        return self.route(pattern, handler, methods=("POST",))

    def put(self, pattern: str, handler: HandlerLike | None = None) -> Any:
        return self.route(pattern, handler, methods=("PUT",))

    def patch(self, pattern: str, handler: HandlerLike | None = None) -> Any:
        return self.route(pattern, handler, methods=("PATCH",))

    def delete(self, pattern: str, handler: HandlerLike | None = None) -> Any:
        return self.route(pattern, handler, methods=("DELETE",))

    def _add_routes(self, methods: Sequence[str], pattern: str, handler: HandlerLike) -> None:
        self._check_not_frozen()
        wrapped = as_handler(handler)
        for method in methods:
            method = method.upper()
            if method not in METHODS:
                msg = f"Unsupported method {method!r}. Expected one of: {', '.join(METHODS)}"
                raise ConfigurationError(msg)
            self._pending_routes.append(_PendingRoute(method, pattern, wrapped))

    # -- Hooks --

    def pre_hook(self, hook: HandlerLike) -> HandlerLike:
        """Register a hook that runs before the route handler.

        Usable as a decorator. Hooks run in registration order; a PRE hook
        may call ``request.set_sticky_handler()`` to replace the route
        handler for this request.
        """
        self._check_not_frozen()
        self._pre_hooks.append(as_handler(hook))  # type: ignore[union-attr]
        return hook

    def post_hook(self, hook: HandlerLike) -> HandlerLike:
        """Register a hook that runs after the route handler. Usable as a decorator."""
        self._check_not_frozen()
        self._post_hooks.append(as_handler(hook))  # type: ignore[union-attr]
        return hook

    # -- Default handlers --

    def not_found(self, handler: HandlerLike) -> HandlerLike:
        """Replace the handler used when no route matches (default: 404)."""
        self._check_not_frozen()
        self._not_found_handler = as_handler(handler)
        return handler

    def server_error(self, handler: HandlerLike) -> HandlerLike:
        """Replace the handler used when a hook or handler raises (default: 500)."""
        self._check_not_frozen()
        self._server_error_handler = as_handler(handler)
        return handler

    # -- Dispatch --

    def resolve(self, request: Request) -> Handler | None:
        """Select the handler for *request*.

        Route resolution always runs first so path parameters are bound.
        A sticky handler installed by a PRE hook then wins over whatever
        the router found, including nothing.
        """
        self._ensure_frozen()
        assert self._router is not None
        handler = self._router.resolve(request)
        if request.has_sticky_handler:
            return request.sticky_handler
        return handler

    def dispatch(self, request: Request) -> Response:
        """Run the full hook/handler pipeline for one request.

        Any exception raised by a hook or handler aborts the remaining
        steps and is answered by the server-error handler, using the same
        Request/Response pair. ``ProgrammingError`` (an incomplete Request,
        an invoked sentinel) and errors from the server-error handler itself
        propagate.
        """
        self._ensure_frozen()
        response = Response()
        try:
            for hook in self._pre_hooks:
                hook.handle(request, response)

            handler = self.resolve(request)
            if handler is None:
                logger.debug("404 %s %s", request.method, request.request_uri)
                handler = self._not_found_handler
            handler.handle(request, response)

            for hook in self._post_hooks:
                hook.handle(request, response)
        except ProgrammingError:
            raise
        except Exception:
            logger.exception("500 %s %s", request.method, request.request_uri)
            self._server_error_handler.handle(request, response)
        return response

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        self._ensure_frozen()
        try:
            request = await build_request(
                scope,
                receive,
                max_content_length=self.config.max_content_length,
                sessions=self._sessions,
            )
        except RejectedRequest as exc:
            logger.debug("%d %s %s: %s", exc.status, scope.get("method"), scope.get("path"), exc)
            response = Response(status=exc.status)
        else:
            response = self.dispatch(request)

        await send_response(response, send, self.config)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge ASGI lifespan events. The app has no startup work of its own."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except ConfigurationError as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with uvicorn (``pip install stooge[server]``)."""
        import uvicorn

        self._ensure_frozen()
        uvicorn.run(
            self,
            host=host or self.config.host,
            port=port or self.config.port,
            log_level="debug" if self.config.debug else self.config.log_level,
        )

    # -- Freeze --

    @property
    def router(self) -> Router:
        """The compiled router. Freezes the app on first access."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    def _ensure_frozen(self) -> None:
        """Freeze the app on first use (double-checked under a lock)."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile routes and lock hook lists. No registration after this."""
        router = Router()
        for pending in self._pending_routes:
            router.add(pending.method, pending.pattern, pending.handler)
        router.compile()

        self._router = router
        self._pre_hooks = tuple(self._pre_hooks)
        self._post_hooks = tuple(self._post_hooks)
        if self.config.secret_key:
            self._sessions = SessionReader(self.config)
        self._frozen = True
        logger.debug(
            "Frozen with %d routes, %d pre hooks, %d post hooks",
            len(router.routes),
            len(self._pre_hooks),
            len(self._post_hooks),
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot modify the app after it has started handling requests."
            raise ConfigurationError(msg)
