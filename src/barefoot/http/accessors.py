"""Read-only views over request metadata.

Both helpers read the CGI-style ``Request.meta`` mapping, so they behave
the same whether the request came from ASGI or a WSGI environ.
"""

import ipaddress

from barefoot.http.request import Request

DEFAULT_IP = "0.0.0.0"


def get_headers(request: Request) -> dict[str, str]:
    """Return the ``HTTP_*`` entries of the request metadata.

    Keys keep their metadata names (``HTTP_USER_AGENT``) and order.
    """
    return {key: value for key, value in request.meta.items() if key.startswith("HTTP_")}


def _forwarded_for(value: str) -> str:
    """Pull the client address out of an RFC 7239 ``Forwarded`` value.

    ``for=192.0.2.60;proto=http, for=198.51.100.17`` -> ``192.0.2.60``
    ``for="[2001:db8::1]:4711"`` -> ``2001:db8::1``

    Values without a ``for=`` parameter are returned unchanged.
    """
    first = value.split(",")[0]
    for param in first.split(";"):
        name, sep, node = param.strip().partition("=")
        if not sep or name.strip().lower() != "for":
            continue
        node = node.strip().strip('"')
        if node.startswith("["):
            return node[1:].partition("]")[0]
        if node.count(":") == 1:
            # IPv4 with port
            return node.partition(":")[0]
        return node
    return value


def get_client_ip(request: Request, default: str = DEFAULT_IP) -> str:
    """Return the client IP address, or *default* if it is not valid.

    Preference order:

    1. ``X-Forwarded-For``: its first comma-separated entry.
    2. ``Forwarded``: the first ``for=`` node (or the raw value).
    3. The peer address (``REMOTE_ADDR``).

    The chosen value must be an IPv4 or IPv6 literal. Forwarding headers
    are client-controlled; only rely on them behind a trusted proxy.
    """
    meta = request.meta
    candidate = meta.get("HTTP_FORWARDED")
    if candidate is not None:
        candidate = _forwarded_for(candidate)
    else:
        candidate = meta.get("REMOTE_ADDR", "")
    forwarded_for = meta.get("HTTP_X_FORWARDED_FOR")
    if forwarded_for is not None:
        candidate = forwarded_for.split(",")[0]
    candidate = candidate.strip()
    try:
        address = ipaddress.ip_address(candidate)
    except ValueError:
        return default
    if getattr(address, "scope_id", None):
        # Zone-qualified IPv6 (fe80::1%eth0) is not a plain address literal
        return default
    return candidate
