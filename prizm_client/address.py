"""Server address parsing.

Only a single trailing ``host:port`` is recognized. IPv6 literals and
addresses carrying a path are not supported: ``http://[::1]:4127`` splits
on the last colon and ``http://host:4127/api`` yields port ``4127/api``.
A trailing colon with no port, as in ``http://host:``, yields an empty
port. Saved as is, it comes back as the default port on the next load, so
the stored address no longer matches what was entered.
"""

from .api_endpoints import ADDRESS_SCHEME_PREFIXES
from .constants import DEFAULT_SERVER_PORT


def resolve_address(address: str, default_port: str = DEFAULT_SERVER_PORT) -> tuple[str, str]:
    """Split a user-entered server address into (host, port).

    At most one scheme prefix is removed. The port defaults when the
    address has no colon.

    Examples:
        >>> resolve_address("http://example.com:8080")
        ('example.com', '8080')
        >>> resolve_address("example.com")
        ('example.com', '4127')
    """
    remainder = address
    for prefix in ADDRESS_SCHEME_PREFIXES:
        if remainder.startswith(prefix):
            remainder = remainder[len(prefix):]
            break

    host, sep, port = remainder.rpartition(":")
    if not sep:
        return remainder, default_port
    return host, port


def build_server_url(host: str, port: str, scheme: str = "http") -> str:
    """Build a base URL for HTTP calls from configured host and port."""
    return f"{scheme}://{host}:{port}"
