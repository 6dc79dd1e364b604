"""Percent-encoding for single path segments."""

from urllib.parse import quote, unquote

from perch.config import PCHAR_SAFE


def encode_segment(value: object, safe: str = PCHAR_SAFE) -> str:
    """Percent-encode one path segment.

    ``/`` is always encoded, since a segment never spans a separator.
    Non-string values are converted with ``str()`` first.
    """
    return quote(str(value), safe=safe.replace("/", ""))


def decode_segment(value: str) -> str:
    """Decode a percent-encoded path segment."""
    return unquote(value)
