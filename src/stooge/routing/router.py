"""Ordered router with segment-by-segment matching.

Each HTTP method owns an ordered table of patterns. Matching walks the
table in registration order and returns the first pattern whose segments
all match; there is no specificity scoring, so a wildcard registered
before a literal wins.
"""

import logging

from stooge.errors import ConfigurationError
from stooge.handlers import Handler
from stooge.http.request import Request
from stooge.routing.route import PathSegment, Route, RouteMatch, SegmentKind

logger = logging.getLogger("stooge.routing")

METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "PATCH", "DELETE")


def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern into segments.

    The pattern is split on every ``/``, so the leading slash produces an
    empty first segment, just as the request path does::

        "/users"         -> ("", "users")
        "/users/{id}"    -> ("", "users", {id})
        "/files/*/raw"   -> ("", "files", *, "raw")
    """
    segments: list[PathSegment] = []
    for part in pattern.split("/"):
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route pattern {pattern!r} uses <param> syntax. "
                "Use {param} for path parameters."
            )
            raise ConfigurationError(msg)
        if len(part) >= 2 and part.startswith("{") and part.endswith("}"):
            name = part[1:-1]
            if not name:
                msg = f"Route pattern {pattern!r} has an unnamed parameter segment."
                raise ConfigurationError(msg)
            segments.append(PathSegment(part, SegmentKind.PARAM, name))
        elif part == "*":
            segments.append(PathSegment(part, SegmentKind.WILDCARD))
        else:
            segments.append(PathSegment(part))
    return tuple(segments)


def _match_segments(segments: tuple[PathSegment, ...], parts: list[str]) -> dict[str, str] | None:
    """Match request path parts against route segments.

    Returns the bound parameters, or ``None`` if any segment mismatches.
    """
    if len(segments) != len(parts):
        return None
    params: dict[str, str] = {}
    for segment, part in zip(segments, parts, strict=True):
        if not segment.matches(part):
            return None
        if segment.kind is SegmentKind.PARAM and segment.name is not None:
            params[segment.name] = part
    return params


class Router:
    """Per-method route table.

    Usage::

        router = Router()
        router.add("GET", "/users/{id}", handler)
        router.compile()
        match = router.match("GET", "/users/42")
    """

    __slots__ = ("_compiled", "_table")

    def __init__(self) -> None:
        self._table: dict[str, dict[str, Route]] = {method: {} for method in METHODS}
        self._compiled = False

    def add(self, method: str, pattern: str, handler: Handler) -> Route:
        """Register *handler* for *method* and *pattern*.

        Registering a pattern again replaces its handler but keeps its
        original priority. Must be called before compile().
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise ConfigurationError(msg)

        method = method.upper()
        if method not in self._table:
            msg = f"Unsupported method {method!r}. Expected one of: {', '.join(METHODS)}"
            raise ConfigurationError(msg)

        route = Route(method, pattern, handler, parse_pattern(pattern))
        self._table[method][pattern] = route
        return route

    @property
    def routes(self) -> list[Route]:
        """All registered routes, grouped by method, in priority order."""
        return [route for table in self._table.values() for route in table.values()]

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Match a request path and method against the route table.

        Returns the first matching route in registration order, or
        ``None`` if the method is unknown or nothing matches.
        """
        table = self._table.get(method.upper())
        if not table:
            return None

        parts = path.split("/")
        for route in table.values():
            params = _match_segments(route.segments, parts)
            if params is not None:
                return RouteMatch(route=route, path_params=params)
        return None

    def resolve(self, request: Request) -> Handler | None:
        """Return the handler for *request*, binding its path parameters.

        Returns ``None`` when no route matches. Raises
        ``RoutingPreconditionError`` if the request path cannot be derived.
        """
        if not self._table.get(request.method):
            logger.debug("No routes for method %s", request.method)
            return None

        match = self.match(request.method, request.request_path)
        if match is None:
            return None

        request.bind_path_params(match.path_params)
        return match.route.handler
