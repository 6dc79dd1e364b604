"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, shared by
every Route and Router built with it.
"""

from dataclasses import dataclass

# RFC 3986 pchar minus the unreserved set (always safe) and "%"
PCHAR_SAFE = "!$&'()*+,;=:@"


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Routing configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(strip_trailing_slash=False, route_param="_route")
    """

    # Percent-encoding of literal segments and assembled values
    safe_chars: str = PCHAR_SAFE

    # Matching
    strip_trailing_slash: bool = True

    # Synthesized parameter names
    route_param: str = "route"
    method_param: str = "request_method"
    scheme_param: str = "request_scheme"


DEFAULT_CONFIG = RouterConfig()
