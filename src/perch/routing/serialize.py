"""Route and router serialization.

Plain-record export and import, plus JSON text on top of it. The
compiled matcher is stored for reference but always rebuilt on load;
a stored matcher that disagrees with the rebuilt one is rejected.
"""

import json
from collections.abc import Mapping
from dataclasses import asdict, fields
from typing import Any

from perch.config import DEFAULT_CONFIG, RouterConfig
from perch.errors import PerchError, SerializationError
from perch.routing.route import Route
from perch.routing.router import Router

ROUTE_FIELDS = ("path", "defaults", "constraints", "schemes", "methods", "config", "compiled")
CONFIG_FIELDS = tuple(f.name for f in fields(RouterConfig))


def config_from_dict(data: Any) -> RouterConfig:
    """Rebuild a ``RouterConfig`` from its exported fields.

    Fields missing from *data* keep their defaults.
    """
    if not isinstance(data, Mapping):
        msg = "Config record must be a mapping"
        raise SerializationError(msg)
    unknown = set(data) - set(CONFIG_FIELDS)
    if unknown:
        msg = f"Config record has unknown fields: {', '.join(sorted(unknown))}"
        raise SerializationError(msg)
    return RouterConfig(**data)


def route_to_dict(route: Route) -> dict[str, Any]:
    """Export a route's configuration as a JSON-compatible record."""
    return {
        "path": route.path,
        "defaults": dict(route.defaults),
        "constraints": dict(route.constraints),
        "schemes": sorted(route.schemes),
        "methods": sorted(route.methods),
        "config": asdict(route.config),
        "compiled": route.compiled,
    }


def route_from_dict(data: Mapping[str, Any], config: RouterConfig = DEFAULT_CONFIG) -> Route:
    """Rebuild a route from a record produced by ``route_to_dict``.

    A ``config`` field in the record wins over *config*, which only
    applies to records written without one.

    Raises ``SerializationError`` for a malformed record.
    """
    if not isinstance(data, Mapping):
        msg = f"Route record must be a mapping, got {type(data).__name__}"
        raise SerializationError(msg)
    if "path" not in data:
        msg = "Route record has no 'path'"
        raise SerializationError(msg)
    unknown = set(data) - set(ROUTE_FIELDS)
    if unknown:
        msg = f"Route record has unknown fields: {', '.join(sorted(unknown))}"
        raise SerializationError(msg)
    for key in ("defaults", "constraints"):
        if not isinstance(data.get(key, {}), Mapping):
            msg = f"Route record field {key!r} must be a mapping"
            raise SerializationError(msg)
    if "config" in data:
        config = config_from_dict(data["config"])

    try:
        route = Route(
            data["path"],
            defaults=data.get("defaults"),
            constraints=data.get("constraints"),
            schemes=data.get("schemes"),
            methods=data.get("methods"),
            config=config,
        )
    except PerchError as exc:
        msg = f"Route record does not compile: {exc}"
        raise SerializationError(msg) from exc

    compiled = data.get("compiled")
    if compiled is not None and compiled != route.compiled:
        msg = f"Stored matcher for {route.path!r} does not match its configuration"
        raise SerializationError(msg)
    return route


def router_to_dict(router: Router) -> dict[str, Any]:
    """Export a router's routes (in match order) and default parameters."""
    routes, params = router.export()
    return {
        "routes": [{"name": name, "route": route_to_dict(route)} for name, route in routes.items()],
        "default_params": params,
        "config": asdict(router.config),
    }


def router_from_dict(data: Mapping[str, Any], config: RouterConfig = DEFAULT_CONFIG) -> Router:
    """Rebuild a router from a record produced by ``router_to_dict``.

    Each route keeps the config stored in its own record.
    """
    if not isinstance(data, Mapping) or not isinstance(data.get("routes"), list):
        msg = "Router record must be a mapping with a 'routes' list"
        raise SerializationError(msg)
    params = data.get("default_params", {})
    if not isinstance(params, Mapping):
        msg = "Router record field 'default_params' must be a mapping"
        raise SerializationError(msg)
    if "config" in data:
        config = config_from_dict(data["config"])

    router = Router(default_params=params, config=config)
    for entry in data["routes"]:
        if not isinstance(entry, Mapping) or "name" not in entry or "route" not in entry:
            msg = f"Router entry must have 'name' and 'route': {entry!r}"
            raise SerializationError(msg)
        router.add(entry["name"], route_from_dict(entry["route"], config))
    return router


def dumps(obj: Route | Router, *, indent: int | None = None) -> str:
    """Serialize a Route or Router to JSON text."""
    if isinstance(obj, Router):
        data = router_to_dict(obj)
    elif isinstance(obj, Route):
        data = route_to_dict(obj)
    else:
        msg = f"Cannot serialize {type(obj).__name__}"
        raise TypeError(msg)
    try:
        return json.dumps(data, indent=indent)
    except (TypeError, ValueError) as exc:
        msg = f"Parameters are not JSON-serializable: {exc}"
        raise SerializationError(msg) from exc


def loads(text: str | bytes, config: RouterConfig = DEFAULT_CONFIG) -> Route | Router:
    """Deserialize JSON text from ``dumps``.

    A record with a ``routes`` list is a Router; anything else is read
    as a Route.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON: {exc}"
        raise SerializationError(msg) from exc
    if isinstance(data, Mapping) and "routes" in data:
        return router_from_dict(data, config)
    return route_from_dict(data, config)
