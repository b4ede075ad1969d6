"""
API endpoint and HTTP header constants.

Centralizes server API endpoints and HTTP headers used for communication.
"""

# API Endpoints
ENDPOINT_HEALTH = "/health"
ENDPOINT_AUTH_REGISTER = "/auth/register"
ENDPOINT_DASHBOARD = "/dashboard/"

# HTTP Headers
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_PANEL = "X-Prizm-Panel"
CONTENT_TYPE_JSON = "application/json"
PANEL_HEADER_VALUE = "true"

# URL schemes stripped from user-entered server addresses (first match only)
ADDRESS_SCHEME_PREFIXES = ("http://", "https://", "ws://", "wss://")
