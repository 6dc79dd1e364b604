"""Router resolution — loads a Router from a JSON file or an import string.

Shared by every ``perch`` subcommand.
"""

import importlib
import logging
import sys
from pathlib import Path

from perch.errors import PerchError
from perch.routing.router import Router
from perch.routing.serialize import loads

logger = logging.getLogger("perch.cli")


def resolve_router(source: str) -> Router:
    """Resolve *source* to a Router.

    An existing file path is read as router JSON (see
    ``perch.routing.serialize``). Anything else is an import string in
    ``"module:attribute"`` format; the attribute defaults to ``"router"``.
    A callable that is not a Router is treated as a factory and called.

    Raises:
        SerializationError: If the file is not a valid router document.
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a Router.

    """
    path = Path(source)
    if path.is_file():
        logger.debug("Loading router from %s", path)
        obj = loads(path.read_text(encoding="utf-8"))
        if not isinstance(obj, Router):
            msg = f"{source!r} holds a single route, not a router"
            raise TypeError(msg)
        return obj

    module_path, _, attr_name = source.partition(":")
    if not attr_name:
        attr_name = "router"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Router):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {source!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Router):
        msg = f"{source!r} resolved to {type(obj).__name__}, not a perch.Router instance"
        raise TypeError(msg)

    return obj


def load_or_exit(source: str) -> Router:
    """``resolve_router`` for CLI use: print the error and exit 1."""
    try:
        return resolve_router(source)
    except (PerchError, ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
