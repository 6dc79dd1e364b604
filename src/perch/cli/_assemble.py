"""``perch assemble`` — build the path of a named route."""

import argparse
import sys

from perch.cli._resolve import load_or_exit
from perch.errors import AssembleError, UnknownRoute


def parse_params(pairs: list[str]) -> dict[str, str]:
    """Parse ``key=value`` arguments.

    Raises ``ValueError`` for an argument without ``=``.
    """
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"Expected key=value, got {pair!r}"
            raise ValueError(msg)
        params[key] = value
    return params


def run_assemble(args: argparse.Namespace) -> None:
    router = load_or_exit(args.router)

    try:
        params = parse_params(args.params)
        path = router.assemble(args.name, params)
    except (AssembleError, UnknownRoute, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(path)
