"""``perch match`` — match one request and print the result as JSON."""

import argparse
import json
import sys

from perch.cli._resolve import load_or_exit
from perch.errors import ConfigurationError, RouteNotFound
from perch.http.request import Request


def run_match(args: argparse.Namespace) -> None:
    """Print the matched route's parameters, or exit 1 on a miss."""
    router = load_or_exit(args.router)
    request = Request.from_url(args.method, args.url)

    try:
        router.match(request)
    except (RouteNotFound, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    result = router.route_match.to_dict(router.config.route_param)
    print(json.dumps(result, indent=2, sort_keys=True, default=str))
