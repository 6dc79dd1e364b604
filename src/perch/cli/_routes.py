"""``perch routes`` — list registered routes in match order."""

import argparse

from perch.cli._resolve import load_or_exit


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of NAME, METHODS, SCHEMES, and PATH."""
    router = load_or_exit(args.router)

    if not len(router):
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str, str]] = []
    for name, route in router:
        methods_str = ", ".join(sorted(route.methods)) or "*"
        schemes_str = ", ".join(sorted(route.schemes)) or "*"
        rows.append((name, methods_str, schemes_str, route.path))

    widths = [max(len(header), *(len(r[i]) for r in rows)) for i, header in enumerate(_HEADERS)]
    fmt = "  ".join(f"{{:<{w}}}" for w in widths[:-1]) + "  {}"
    print(fmt.format(*_HEADERS))
    print("-" * min(sum(widths) + 2 * (len(widths) - 1), 80))
    for row in rows:
        print(fmt.format(*row))


_HEADERS = ("NAME", "METHODS", "SCHEMES", "PATH")
