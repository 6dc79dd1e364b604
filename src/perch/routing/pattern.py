"""Route path parsing and compilation.

A route path is split on ``/`` into segment tokens. Each token is one of:

    ``users``     required literal
    ``~users``    optional literal
    ``:id``       required placeholder, bound to parameter ``id``
    ``~:page``    optional placeholder, bound to parameter ``page``

The segments are compiled into a single anchored regular expression.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

from perch.config import PCHAR_SAFE
from perch.errors import InvalidPattern
from perch.http.uri import encode_segment

_PLACEHOLDER_RE = re.compile(r"~?:[a-zA-Z0-9]+")
_RESERVED_CHARS = frozenset("#?")

# Default capture classes when a placeholder has no constraint
REQUIRED_VALUE = r"[^/]+"
OPTIONAL_VALUE = r"[^/]*"


class SegmentKind(Enum):
    LITERAL = "literal"
    OPTIONAL_LITERAL = "optional_literal"
    PLACEHOLDER = "placeholder"
    OPTIONAL_PLACEHOLDER = "optional_placeholder"


@dataclass(frozen=True, slots=True)
class Segment:
    """A parsed segment of a route path.

    ``value`` is the literal text (without the ``~`` marker) for literal
    segments and the parameter name for placeholders. ``token`` keeps the
    segment exactly as written.
    """

    token: str
    kind: SegmentKind
    value: str

    @property
    def is_placeholder(self) -> bool:
        return self.kind in (SegmentKind.PLACEHOLDER, SegmentKind.OPTIONAL_PLACEHOLDER)

    @property
    def is_optional(self) -> bool:
        return self.kind in (SegmentKind.OPTIONAL_LITERAL, SegmentKind.OPTIONAL_PLACEHOLDER)


def classify(token: str, path: str = "") -> Segment:
    """Classify one non-empty path token.

    A ``:`` within the first two characters marks a placeholder, whose
    name must then be ASCII alphanumeric. Any other token is a literal
    and may not contain ``#`` or ``?``.

    Raises ``InvalidPattern`` for a malformed token.
    """
    if ":" in token[:2]:
        if not _PLACEHOLDER_RE.fullmatch(token):
            raise InvalidPattern(
                path or token,
                token,
                "placeholder names must contain only English alphanumeric characters",
            )
        if token.startswith("~"):
            return Segment(token, SegmentKind.OPTIONAL_PLACEHOLDER, token[2:])
        return Segment(token, SegmentKind.PLACEHOLDER, token[1:])

    if _RESERVED_CHARS.intersection(token):
        raise InvalidPattern(path or token, token, "literal segments may not contain '#' or '?'")
    if token.startswith("~"):
        return Segment(token, SegmentKind.OPTIONAL_LITERAL, token.lstrip("~"))
    return Segment(token, SegmentKind.LITERAL, token)


def parse_path(path: str) -> list[Segment]:
    """Parse a route path string into segments.

    Empty tokens are discarded, so leading, trailing and repeated
    slashes are insignificant.

    Examples::

        "/"               -> []
        "/users/:id"      -> [Segment("users", LITERAL, "users"),
                              Segment(":id", PLACEHOLDER, "id")]
        "/blog/~:page"    -> [..., Segment("~:page", OPTIONAL_PLACEHOLDER, "page")]
    """
    segments: list[Segment] = []
    seen: set[str] = set()
    for token in path.split("/"):
        if not token:
            continue
        segment = classify(token, path)
        if segment.is_placeholder:
            if segment.value in seen:
                raise InvalidPattern(path, token, f"placeholder {segment.value!r} is repeated")
            seen.add(segment.value)
        segments.append(segment)
    return segments


def group_name(param: str) -> str:
    """Regex group name for a placeholder.

    Prefixed so that names starting with a digit stay valid identifiers.
    """
    return f"_{param}"


def compile_pattern(
    segments: Sequence[Segment],
    constraints: Mapping[str, str] | None = None,
    safe: str = PCHAR_SAFE,
) -> str:
    r"""Build the anchored regular expression source for *segments*.

    Examples::

        [:foo]           -> \A/(?P<_foo>[^/]+)\Z
        [foo, ~:bar]     -> \A/foo/?(?P<_bar>[^/]*)\Z
        [~foo]           -> \A/?(foo)?\Z

    A constraint replaces the default capture class verbatim.
    """
    constraints = constraints or {}
    parts: list[str] = []
    for seg in segments:
        if seg.kind is SegmentKind.PLACEHOLDER:
            body = constraints.get(seg.value, REQUIRED_VALUE)
            parts.append(f"/(?P<{group_name(seg.value)}>{body})")
        elif seg.kind is SegmentKind.OPTIONAL_PLACEHOLDER:
            body = constraints.get(seg.value, OPTIONAL_VALUE)
            parts.append(f"/?(?P<{group_name(seg.value)}>{body})")
        elif seg.kind is SegmentKind.OPTIONAL_LITERAL:
            parts.append(f"/?({re.escape(encode_segment(seg.value, safe))})?")
        else:
            parts.append(f"/{re.escape(encode_segment(seg.value, safe))}")
    return r"\A" + "".join(parts) + r"\Z"


def compile_constraints(path: str, constraints: Mapping[str, str]) -> dict[str, re.Pattern[str]]:
    """Compile each constraint for anchored full-value checks.

    Raises ``InvalidPattern`` if a constraint is not a valid regular
    expression.
    """
    compiled: dict[str, re.Pattern[str]] = {}
    for name, pattern in constraints.items():
        try:
            compiled[name] = re.compile(f"(?:{pattern})")
        except re.error as exc:
            raise InvalidPattern(path, f":{name}", f"invalid constraint {pattern!r}: {exc}") from exc
    return compiled
