"""Perch exception hierarchy.

Shared across Route, Router, serialization, and the CLI so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when routes or the router are misconfigured.

    These are programmer errors. They fail fast and are not retried.
    """


class InvalidPattern(ConfigurationError):  # noqa: N818 — mirrors the routing vocabulary
    """A route path could not be compiled.

    Raised at construction time, so a Route is never partially built.
    """

    def __init__(self, path: str, segment: str, reason: str) -> None:
        self.path = path
        self.segment = segment
        self.reason = reason
        super().__init__(f"Invalid segment {segment!r} in route path {path!r}: {reason}")


class NoRoutesConfigured(ConfigurationError):  # noqa: N818
    """Router.match() was called on a router without routes."""

    def __init__(self) -> None:
        super().__init__("The router has no routes configured.")


class UnknownRoute(ConfigurationError, KeyError):  # noqa: N818
    """No route is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No route named {name!r} is registered.")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code."""

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class RouteNotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class AssembleError(PerchError, ValueError):
    """The parameters given to Route.assemble() cannot produce a path.

    Caller input errors: supply corrected parameters and retry.
    """


class MissingPlaceholder(AssembleError):  # noqa: N818
    """A required placeholder has no value."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Missing value for the placeholder {name!r}.")


class ConstraintViolation(AssembleError):  # noqa: N818
    """A placeholder value does not fully match its constraint."""

    def __init__(self, name: str, value: object, pattern: str) -> None:
        self.name = name
        self.value = value
        self.pattern = pattern
        super().__init__(
            f"The value {value!r} of parameter {name!r} does not match constraint {pattern!r}."
        )


class IllegalState(PerchError, RuntimeError):  # noqa: N818
    """An operation was attempted before the state it reads exists."""


class SerializationError(PerchError, ValueError):
    """A serialized route or router record is malformed."""
