"""Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass
from enum import Enum

from stooge.handlers import Handler


class SegmentKind(Enum):
    LITERAL = "literal"
    PARAM = "param"
    WILDCARD = "wildcard"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal:   ``users``  (kind=LITERAL, matched case-insensitively)
    Param:     ``{id}``   (kind=PARAM, name="id")
    Wildcard:  ``*``      (kind=WILDCARD, matches any single segment)
    """

    value: str
    kind: SegmentKind = SegmentKind.LITERAL
    name: str | None = None

    def matches(self, part: str) -> bool:
        if self.kind is SegmentKind.LITERAL:
            return self.value.lower() == part.lower()
        return True


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route: one method, one pattern, one handler."""

    method: str
    pattern: str
    handler: Handler
    segments: tuple[PathSegment, ...]


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
