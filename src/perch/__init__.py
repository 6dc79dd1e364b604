"""Perch — ordered request routing for Python.

Compiles path patterns into anchored matchers, dispatches requests to the
first matching named route, and assembles paths back from parameters.

Basic usage::

    from perch import Request, Route, Router

    router = Router()
    router.add("post", Route("/blog/:slug/~:page", defaults={"page": "1"}))
    router.add("home", Route("/"))

    match = router.match(Request("GET", "/blog/hello")).route_match
    match.matched_route_name   # "post"
    match.get_param("page")    # "1"

    router.assemble("post", {"slug": "bye", "page": 2})  # "/blog/bye/2"

Pattern syntax::

    /users        required literal
    /~users       optional literal
    /:id          required placeholder
    /~:page       optional placeholder
"""

__version__ = "0.1.0"
__all__ = [
    "AssembleError",
    "ConfigurationError",
    "ConstraintViolation",
    "HTTPError",
    "IllegalState",
    "InvalidPattern",
    "MissingPlaceholder",
    "NoRoutesConfigured",
    "PerchError",
    "Request",
    "Route",
    "RouteMatch",
    "RouteNotFound",
    "Router",
    "RouterConfig",
    "SerializationError",
    "UnknownRoute",
    "dumps",
    "loads",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name in ("Route", "RouteMatch"):
        from perch.routing import route as _route

        return getattr(_route, name)

    if name == "Router":
        from perch.routing.router import Router

        return Router

    if name == "RouterConfig":
        from perch.config import RouterConfig

        return RouterConfig

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name in ("dumps", "loads"):
        from perch.routing import serialize as _serialize

        return getattr(_serialize, name)

    if name in __all__:
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
