"""Immutable request shape consumed by the router.

The router only reads three things from a request: its method, its URI
scheme, and its path. Anything with those attributes can be matched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from urllib.parse import urlsplit


@runtime_checkable
class RequestLike(Protocol):
    """Structural type for objects the router can match."""

    @property
    def method(self) -> str: ...

    @property
    def scheme(self) -> str: ...

    @property
    def path(self) -> str: ...


@dataclass(frozen=True, slots=True)
class Request:
    """A minimal immutable HTTP request.

    ``path`` is the raw (still percent-encoded) path component.
    """

    method: str
    path: str = "/"
    scheme: str = "http"

    @classmethod
    def from_url(cls, method: str, url: str) -> Request:
        """Build a request from a method and an absolute or relative URL.

        Query string and fragment are discarded. A relative URL is
        treated as plain ``http``.
        """
        parts = urlsplit(url)
        return cls(method=method, path=parts.path or "/", scheme=parts.scheme or "http")
