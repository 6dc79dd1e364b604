"""Route and RouteMatch.

A Route is immutable: its path, defaults, constraints and filters are
fixed at construction and the matcher is compiled once from them.
"""

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from perch.config import DEFAULT_CONFIG, RouterConfig
from perch.errors import ConstraintViolation, InvalidPattern, MissingPlaceholder
from perch.http.request import RequestLike
from perch.http.uri import encode_segment
from perch.routing.pattern import (
    Segment,
    SegmentKind,
    compile_constraints,
    compile_pattern,
    group_name,
    parse_path,
)

logger = logging.getLogger("perch.routing")


@dataclass(slots=True)
class RouteMatch:
    """Result of a successful route match.

    Created by ``Route.match()`` without a name. The router attaches the
    name of the route that matched.
    """

    _params: dict[str, Any] = field(default_factory=dict)
    matched_route_name: str | None = None

    @property
    def params(self) -> dict[str, Any]:
        """A copy of the matched parameters.

        The route name is not included; see ``to_dict()``.
        """
        return dict(self._params)

    def get_param(self, name: str, default: Any = None) -> Any:
        """Return the parameter value, or *default* when absent or None."""
        value = self._params.get(name)
        if value is None:
            return default
        return value

    def set_param(self, name: str, value: Any) -> "RouteMatch":
        self._params[str(name)] = value
        return self

    def set_matched_route_name(self, name: str) -> "RouteMatch":
        self.matched_route_name = str(name)
        return self

    def to_dict(self, route_param: str = DEFAULT_CONFIG.route_param) -> dict[str, Any]:
        """Parameters plus the matched route name under *route_param*."""
        params = dict(self._params)
        params[route_param] = self.matched_route_name
        return params

    def __contains__(self, name: object) -> bool:
        return name in self._params


@dataclass(frozen=True, slots=True)
class Route:
    """A compiled route pattern with its defaults, constraints and filters.

    Usage::

        route = Route("/blog/:slug/~:page", defaults={"page": "1"},
                      constraints={"page": r"\\d+"}, methods={"GET"})
        match = route.match(request)       # RouteMatch or None
        route.assemble({"slug": "hello"})  # "/blog/hello/1"

    Raises ``InvalidPattern`` if the path cannot be compiled.
    """

    path: str
    defaults: Mapping[str, Any] = field(default_factory=dict)
    constraints: Mapping[str, str] = field(default_factory=dict)
    schemes: frozenset[str] = frozenset()
    methods: frozenset[str] = frozenset()
    config: RouterConfig = field(default=DEFAULT_CONFIG, compare=False, repr=False)

    # Derived at construction
    segments: tuple[Segment, ...] = field(init=False, compare=False, repr=False)
    compiled: str = field(init=False, compare=False, repr=False)
    _regex: re.Pattern[str] = field(init=False, compare=False, repr=False)
    _checks: Mapping[str, re.Pattern[str]] = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        path = str(self.path)
        constraints = dict(self.constraints or {})
        object.__setattr__(self, "path", path)
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults or {})))
        object.__setattr__(self, "constraints", MappingProxyType(constraints))
        object.__setattr__(self, "schemes", _normalize(self.schemes, str.lower))
        object.__setattr__(self, "methods", _normalize(self.methods, str.upper))

        segments = tuple(parse_path(path))
        checks = compile_constraints(path, constraints)
        source = compile_pattern(segments, constraints, self.config.safe_chars)
        object.__setattr__(self, "segments", segments)
        object.__setattr__(self, "compiled", source)
        object.__setattr__(self, "_checks", MappingProxyType(checks))
        object.__setattr__(self, "_regex", _compile_source(path, source))
        logger.debug("Compiled route %r -> %s", path, source)

    def match(self, request: RequestLike) -> RouteMatch | None:
        """Match *request* against this route.

        Returns a ``RouteMatch`` on success and ``None`` otherwise. Empty
        captures (an absent optional placeholder) leave defaults intact.
        """
        method = request.method.upper()
        if self.methods and method not in self.methods:
            return None
        scheme = (request.scheme or "").lower()
        if self.schemes and scheme not in self.schemes:
            return None

        path = request.path
        if self.config.strip_trailing_slash:
            path = path.rstrip("/")
        m = self._regex.match(path)
        if m is None:
            return None

        params = dict(self.defaults)
        for seg in self.segments:
            if not seg.is_placeholder:
                continue
            value = m.group(group_name(seg.value))
            if value:
                params[seg.value] = value
        params[self.config.method_param] = method
        params[self.config.scheme_param] = scheme
        return RouteMatch(params)

    def assemble(self, params: Mapping[str, Any] | None = None) -> str:
        """Build a path from *params* merged over the route defaults.

        Optional literals are left out. Optional placeholders without a
        value are skipped.

        Raises ``MissingPlaceholder`` for a required placeholder without
        a value, and ``ConstraintViolation`` for a value that does not
        fully match its constraint.
        """
        values = {**self.defaults, **(params or {})}
        safe = self.config.safe_chars
        parts: list[str] = []
        for seg in self.segments:
            if seg.kind is SegmentKind.OPTIONAL_LITERAL:
                continue
            if seg.kind is SegmentKind.LITERAL:
                parts.append(encode_segment(seg.value, safe))
                continue

            value = values.get(seg.value)
            if value is None:
                if seg.kind is SegmentKind.PLACEHOLDER:
                    raise MissingPlaceholder(seg.value)
                continue
            check = self._checks.get(seg.value)
            if check is not None and not check.fullmatch(str(value)):
                raise ConstraintViolation(seg.value, value, self.constraints[seg.value])
            parts.append(encode_segment(value, safe))
        return "/" + "/".join(parts)

    def __hash__(self) -> int:
        # defaults may hold unhashable values
        return hash((self.path, frozenset(self.constraints.items()), self.schemes, self.methods))

    @property
    def placeholders(self) -> tuple[str, ...]:
        """Parameter names bound by this route, in path order."""
        return tuple(seg.value for seg in self.segments if seg.is_placeholder)


def _normalize(values: Iterable[str] | None, case: Callable[[str], str]) -> frozenset[str]:
    if not values:
        return frozenset()
    if isinstance(values, str):
        values = (values,)
    return frozenset(case(v) for v in values)


def _compile_source(path: str, source: str) -> re.Pattern[str]:
    try:
        return re.compile(source)
    except re.error as exc:
        raise InvalidPattern(path, path, f"route does not compile: {exc}") from exc
