"""``scribble run`` — serve an app with the pounce ASGI server."""

import argparse
import logging
import sys

from scribble.cli._resolve import resolve_app

logger = logging.getLogger("scribble.cli")


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app``, configure logging, and start serving.

    ``--host``/``--port``/``--log-level`` override the app's config.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    level = (args.log_level or app.config.log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    host = args.host or app.config.host
    port = args.port or app.config.port
    logger.info("serving %s on http://%s:%d", args.app, host, port)

    try:
        app.run(host, port, app_path=args.app)
    except ImportError as exc:
        print(
            f"Error: {exc}. Serving requires pounce: pip install scribble[server]",
            file=sys.stderr,
        )
        raise SystemExit(1) from exc
