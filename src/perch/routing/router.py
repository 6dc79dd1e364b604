"""Ordered, named route collection with first-match dispatch.

Routes are tried in registration order. The first route that matches
wins, and router-level default parameters fill in whatever the route
did not produce.
"""

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from perch.config import DEFAULT_CONFIG, RouterConfig
from perch.errors import IllegalState, NoRoutesConfigured, RouteNotFound, UnknownRoute
from perch.http.request import RequestLike
from perch.routing.route import Route, RouteMatch

logger = logging.getLogger("perch.routing")


class Router:
    """Named routes matched in insertion order.

    Usage::

        router = Router()
        router.add("home", Route("/"))
        router.add("post", Route("/blog/:slug"))
        router.match(Request("GET", "/blog/hello"))
        router.route_match.matched_route_name  # "post"

    Each Route matches with its own ``RouterConfig``. The router's
    *config* does not reach its routes; only its ``route_param`` is read,
    as the key for the route name in ``RouteMatch.to_dict()``.

    Configure once, then match from as many threads as needed. Route
    registration and default parameters are not synchronized.
    """

    __slots__ = ("_config", "_default_params", "_match", "_routes")

    def __init__(
        self,
        routes: Mapping[str, Route] | None = None,
        default_params: Mapping[str, Any] | None = None,
        config: RouterConfig = DEFAULT_CONFIG,
    ) -> None:
        self._config = config
        self._routes: dict[str, Route] = {}
        self._default_params: dict[str, Any] = dict(default_params or {})
        self._match: RouteMatch | None = None
        for name, route in (routes or {}).items():
            self.add(name, route)

    @property
    def config(self) -> RouterConfig:
        return self._config

    # -- Default parameters --

    @property
    def default_params(self) -> dict[str, Any]:
        return dict(self._default_params)

    def set_default_params(self, params: Mapping[str, Any]) -> "Router":
        """Replace all router default parameters."""
        self._default_params = dict(params)
        return self

    def set_default_param(self, name: str, value: Any) -> "Router":
        self._default_params[str(name)] = value
        return self

    # -- Route collection --

    @property
    def routes(self) -> Mapping[str, Route]:
        """Read-only view of the registered routes, in match order."""
        return MappingProxyType(self._routes)

    def add(self, name: str, route: Route) -> "Router":
        """Register *route* under *name*.

        Re-using a name replaces the route but keeps the position the
        name was first registered at.
        """
        if not isinstance(route, Route):
            msg = f"Expected a Route for {name!r}, got {type(route).__name__}"
            raise TypeError(msg)
        self._routes[str(name)] = route
        return self

    def has(self, name: str) -> bool:
        return name in self._routes

    def remove(self, name: str) -> "Router":
        """Remove the named route. Unknown names are ignored."""
        self._routes.pop(name, None)
        return self

    def get(self, name: str) -> Route:
        """Return the named route.

        Raises ``UnknownRoute`` if no route is registered under *name*.
        """
        try:
            return self._routes[name]
        except KeyError:
            raise UnknownRoute(name) from None

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[tuple[str, Route]]:
        return iter(list(self._routes.items()))

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    # -- Matching --

    def match(self, request: RequestLike) -> "Router":
        """Match *request* against the routes in order.

        On success the result is stored and available from
        ``route_match``; the router itself is returned.

        Raises ``NoRoutesConfigured`` if no routes are registered.
        Raises ``RouteNotFound`` if no route matches.
        """
        if not self._routes:
            raise NoRoutesConfigured()

        for name, route in self._routes.items():
            result = route.match(request)
            if result is None:
                continue
            result.set_matched_route_name(name)
            for param, value in self._default_params.items():
                if result.get_param(param) is None:
                    result.set_param(param, value)
            self._match = result
            logger.debug("Route %r matched %s %s", name, request.method, request.path)
            return self

        logger.debug("No route matched %s %s", request.method, request.path)
        raise RouteNotFound(f"No route matches {request.method.upper()} {request.path!r}")

    @property
    def route_match(self) -> RouteMatch:
        """The most recent successful match.

        Raises ``IllegalState`` if nothing has matched yet.
        """
        if self._match is None:
            msg = "No route has been matched yet."
            raise IllegalState(msg)
        return self._match

    def assemble(self, name: str, params: Mapping[str, Any] | None = None) -> str:
        """Assemble the path of the named route."""
        return self.get(name).assemble(params)

    # -- Composition --

    def merge(self, other: "Router") -> "Router":
        """Merge routes and default parameters from *other* into this router.

        On a name collision the value from *other* wins. A route that is
        already registered keeps its position.
        """
        routes, params = other.export()
        self._routes.update(routes)
        self._default_params.update(params)
        logger.debug("Merged %d routes and %d default params", len(routes), len(params))
        return self

    def export(self) -> tuple[dict[str, Route], dict[str, Any]]:
        """Snapshot of ``(routes, default_params)``, in match order."""
        return dict(self._routes), dict(self._default_params)

    def __repr__(self) -> str:
        return f"Router(routes={list(self._routes)!r}, default_params={self._default_params!r})"
