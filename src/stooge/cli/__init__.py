"""Stooge CLI — route listing and a development server.

Entry point registered as ``stooge`` in ``pyproject.toml``::

    [project.scripts]
    stooge = "stooge.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``stooge`` command."""
    parser = argparse.ArgumentParser(
        prog="stooge",
        description="Stooge — a minimal HTTP request-dispatch engine.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging level for stooge loggers",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- stooge routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    # -- stooge run -------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve the app with uvicorn")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "routes":
        from stooge.cli._routes import run_routes

        run_routes(args)
    elif args.command == "run":
        from stooge.cli._run import run_server

        run_server(args)
