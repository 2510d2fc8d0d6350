"""``stooge routes`` — list registered routes in match-priority order."""

import argparse
import sys

from stooge.cli._resolve import resolve_app
from stooge.handlers import describe_handler


def run_routes(args: argparse.Namespace) -> None:
    """Print a METHOD / PATTERN / HANDLER table for ``args.app``."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.router.routes
    if not routes:
        print("No routes registered.")
        return

    rows = [(route.method, route.pattern, describe_handler(route.handler)) for route in routes]

    max_method = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_pattern = max(7, *(len(r[1]) for r in rows))  # "PATTERN" header

    fmt = f"{{:<{max_method}}}  {{:<{max_pattern}}}  {{}}"
    print(fmt.format("METHOD", "PATTERN", "HANDLER"))
    sep_len = max_method + max_pattern + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, pattern, handler_name in rows:
        print(fmt.format(method, pattern, handler_name))
