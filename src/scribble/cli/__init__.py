"""Scribble CLI — serve the blog and inspect its route table.

Entry point registered as ``scribble`` in ``pyproject.toml``::

    [project.scripts]
    scribble = "scribble.cli:main"
"""

import argparse
import sys

DEFAULT_APP = "scribble.blog:app"


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``scribble`` command."""
    parser = argparse.ArgumentParser(
        prog="scribble",
        description="Scribble — a small ASGI blog.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- scribble run -----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve the app with pounce")
    run_parser.add_argument(
        "app",
        nargs="?",
        default=DEFAULT_APP,
        help=f"Import string (default: {DEFAULT_APP})",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error"],
        help="Logging level (default: the app's config)",
    )

    # -- scribble routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "app",
        nargs="?",
        default=DEFAULT_APP,
        help=f"Import string (default: {DEFAULT_APP})",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from scribble.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from scribble.cli._routes import run_routes

        run_routes(args)
