"""Perch CLI — inspect a router, match requests, and assemble paths.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — ordered route matching and path assembly.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log routing decisions to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "router",
        help="Router JSON file or import string (e.g. myapp:router)",
    )

    # -- perch match ------------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Match a request against the routes")
    match_parser.add_argument("router", help="Router JSON file or import string")
    match_parser.add_argument("method", help="HTTP method (e.g. GET)")
    match_parser.add_argument("url", help="Request URL or path (e.g. https://host/blog/1)")

    # -- perch assemble ---------------------------------------------------
    assemble_parser = subparsers.add_parser("assemble", help="Build the path of a named route")
    assemble_parser.add_argument("router", help="Router JSON file or import string")
    assemble_parser.add_argument("name", help="Route name")
    assemble_parser.add_argument(
        "params",
        nargs="*",
        metavar="key=value",
        help="Route parameters",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from perch.cli._match import run_match

        run_match(args)
    elif args.command == "assemble":
        from perch.cli._assemble import run_assemble

        run_assemble(args)
