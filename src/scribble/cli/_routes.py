"""``scribble routes`` — list registered routes in match order."""

import argparse
import sys

from scribble.cli._resolve import resolve_app


def run_routes(args: argparse.Namespace) -> None:
    """Print METHOD, PATH, NAME and HANDLER for every route.

    Rows come out in registration order, which is also match priority.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.router.routes
    if not routes:
        print("No routes registered.")
        return

    rows = [
        (
            ", ".join(sorted(route.methods)),
            route.path,
            route.name or "-",
            getattr(route.handler, "__qualname__", repr(route.handler)),
        )
        for route in routes
    ]
    header = ("METHOD", "PATH", "NAME", "HANDLER")
    widths = [max(len(row[i]) for row in (header, *rows)) for i in range(3)]
    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"

    print(fmt.format(*header))
    print("-" * min(sum(widths) + 6 + max(len(r[3]) for r in rows), 80))
    for row in rows:
        print(fmt.format(*row))
