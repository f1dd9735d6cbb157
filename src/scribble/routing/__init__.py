"""Routing — ordered route table with typed segment matching.

Routes are registered during setup and frozen into an immutable
table when the app compiles. The same table answers reverse lookups
(``url_for``) from route names.
"""

from scribble.routing.route import PathSegment, Route, RouteMatch
from scribble.routing.router import Router, parse_path

__all__ = ["PathSegment", "Route", "RouteMatch", "Router", "parse_path"]
