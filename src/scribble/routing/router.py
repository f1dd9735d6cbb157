"""Compiled router with ordered, segment-based path matching.

Routes are registered during setup and frozen into an immutable
route table when the app compiles. Registration order is match
priority: the first route whose pattern and method both match wins.
"""

import re
from dataclasses import dataclass
from urllib.parse import quote, urlencode

from scribble.errors import ConfigurationError, MethodNotAllowed, NotFound, URLBuildError
from scribble.routing.params import constraint_pattern
from scribble.routing.route import PathSegment, Route, RouteMatch

# Matches Flask-style <param> segments (scribble expects {param})
_FLASK_PARAM_RE = re.compile(r"<[a-zA-Z_][a-zA-Z0-9_]*(?::[a-zA-Z_]+)?>")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/"               -> []
        "/users"          -> [PathSegment("users")]
        "/users/{id}"     -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}" -> [..., PathSegment("{id:int}", is_param=True, param_type="int")]

    Raises ``ConfigurationError`` if the path does not start with ``/``,
    uses ``<param>`` syntax, or repeats a parameter name.
    """
    if not path.startswith("/"):
        msg = f"Route path must start with '/', got {path!r}"
        raise ConfigurationError(msg)
    if _FLASK_PARAM_RE.search(path):
        msg = (
            f"Route path {path!r} uses <param> syntax; "
            "scribble expects {param} (e.g. /articles/{id:int})"
        )
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    seen: set[str] = set()
    if path == "/":
        return segments

    for part in path[1:].split("/"):
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if not param_name:
                msg = f"Route path {path!r} has an unnamed parameter"
                raise ConfigurationError(msg)
            if param_name in seen:
                msg = f"Route path {path!r} repeats parameter {param_name!r}"
                raise ConfigurationError(msg)
            seen.add(param_name)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


def split_request_path(path: str) -> list[str]:
    """Split a request path into segments. ``/`` has none.

    Empty segments are kept, so ``/articles/`` is ``["articles", ""]``
    and only matches once the trailing slash has been normalized away.
    """
    if path in ("", "/"):
        return []
    return path.removeprefix("/").split("/")


@dataclass(frozen=True, slots=True)
class _CompiledRoute:
    """A route paired with its parsed segments and constraint regexes."""

    route: Route
    segments: tuple[PathSegment, ...]
    patterns: tuple[re.Pattern[str] | None, ...]

    def match_path(self, parts: list[str]) -> dict[str, str] | None:
        """Return extracted params if *parts* fit this pattern, else None."""
        if len(parts) != len(self.segments):
            return None
        params: dict[str, str] = {}
        for part, seg, pattern in zip(parts, self.segments, self.patterns, strict=True):
            if pattern is None:
                if part != seg.value:
                    return None
                continue
            if not part or not pattern.fullmatch(part):
                return None
            params[seg.param_name or ""] = part
        return params

    @property
    def param_types(self) -> dict[str, str]:
        return {seg.param_name or "": seg.param_type for seg in self.segments if seg.is_param}


class Router:
    """Ordered route table with typed segment matching and reverse lookup.

    Usage::

        router = Router()
        router.add(Route("/articles", handler, frozenset({"GET"}), name="articles.index"))
        router.add(Route("/articles/{id:int}", handler, frozenset({"GET"}), name="articles.show"))
        router.compile()
        match = router.match("GET", "/articles/42")
        router.url_for("articles.show", id=42)  # "/articles/42"

    The table is mutable only until ``compile()``. After that it is a
    tuple shared by every request, so concurrent readers need no locks.
    """

    __slots__ = ("_by_name", "_compiled", "_pending", "_table")

    def __init__(self) -> None:
        self._pending: list[_CompiledRoute] = []
        self._table: tuple[_CompiledRoute, ...] = ()
        self._by_name: dict[str, _CompiledRoute] = {}
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the table. Must be called before compile().

        Raises ``ConfigurationError`` if the route name is already taken
        or the path pattern is invalid.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        if route.name is not None and route.name in self._by_name:
            existing = self._by_name[route.name].route.path
            msg = f"Duplicate route name {route.name!r} (already bound to {existing!r})"
            raise ConfigurationError(msg)

        segments = tuple(parse_path(route.path))
        patterns = tuple(
            constraint_pattern(seg.param_type) if seg.is_param else None for seg in segments
        )
        compiled = _CompiledRoute(route=route, segments=segments, patterns=patterns)

        self._pending.append(compiled)
        if route.name is not None:
            self._by_name[route.name] = compiled

    @property
    def routes(self) -> tuple[Route, ...]:
        """Return all registered routes in registration order."""
        return tuple(entry.route for entry in self._pending)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._table = tuple(self._pending)
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against the route table.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        parts = split_request_path(path)
        allowed: set[str] = set()

        for entry in self._table:
            params = entry.match_path(parts)
            if params is None:
                continue
            if method in entry.route.methods:
                return RouteMatch(
                    route=entry.route,
                    path_params=params,
                    param_types=entry.param_types,
                )
            allowed.update(entry.route.methods)

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No route matches {method} {path!r}")

    def url_for(self, name: str, /, **params: object) -> str:
        """Build a path for the named route.

        Each ``{param}`` placeholder is replaced by ``str(value)``,
        URL-escaped. Parameters that are not placeholders in the pattern
        are appended as a query string.

        Raises ``URLBuildError`` if the name is unknown, a parameter is
        missing, or a value does not satisfy the parameter's constraint.
        """
        entry = self._by_name.get(name)
        if entry is None:
            msg = f"No route named {name!r}"
            raise URLBuildError(msg)

        remaining = dict(params)
        parts: list[str] = []
        for seg, pattern in zip(entry.segments, entry.patterns, strict=True):
            if pattern is None:
                parts.append(seg.value)
                continue
            param_name = seg.param_name or ""
            if param_name not in remaining:
                msg = f"Route {name!r} requires parameter {param_name!r}"
                raise URLBuildError(msg)
            value = str(remaining.pop(param_name))
            if not value or not pattern.fullmatch(value):
                msg = (
                    f"Value {value!r} for parameter {param_name!r} of route {name!r} "
                    f"does not satisfy constraint {seg.param_type!r}"
                )
                raise URLBuildError(msg)
            parts.append(quote(value, safe=""))

        url = "/" + "/".join(parts)
        if remaining:
            url += "?" + urlencode({k: str(v) for k, v in remaining.items()})
        return url
