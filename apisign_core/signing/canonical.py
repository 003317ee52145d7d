"""
Canonical Request String
========================
Deterministic serialization of a request for signing.

Format:
    {METHOD}{host without port}{route path}{k1}={v1}{k2}={v2}...

Keys are sorted ascending and pairs are concatenated with no separator.
Values are not escaped. Existing signers depend on this exact layout, so
any change to it must be introduced as a new protocol version.
"""

from typing import Any, Iterable, List, Mapping, Optional

SIGNATURE_PARAM = "Signature"
DEBUG_PARAM = "debug"


def normalize_host(host: str) -> str:
    """Strip a port suffix from a Host value."""
    return host.split(":")[0]


def first_value(value: Any) -> str:
    """Return the first value of a multi-valued parameter as a string."""
    if isinstance(value, (list, tuple)):
        return str(value[0]) if value else ""
    if value is None:
        return ""
    return str(value)


def signing_keys(
    params: Mapping[str, Any],
    excluded: Iterable[str],
) -> List[str]:
    """Sorted parameter keys that take part in the signature."""
    excluded = set(excluded)
    return sorted(k for k in params if k not in excluded)


def canonicalize(
    method: str,
    host: str,
    path: str,
    params: Mapping[str, Any],
    debug_param: Optional[str] = None,
) -> str:
    """
    Build the string that gets signed for a request.

    Args:
        method: HTTP method, used as given (GET, POST, ...)
        host: Request host, a port suffix is removed
        path: Matched route template, not the raw request URI
        params: All submitted parameters; list values use their first item
        debug_param: Name of the debug flag parameter (default "debug")

    Returns:
        Canonical request string
    """
    excluded = (SIGNATURE_PARAM, debug_param or DEBUG_PARAM)
    pairs = "".join(
        f"{key}={first_value(params[key])}"
        for key in signing_keys(params, excluded)
    )
    return method + normalize_host(host) + path + pairs
