"""
Core application constants.

Centralizes configuration defaults, timeouts, and application identifiers.
"""

# Application Identifiers
APP_NAME = "Prizm Client"
APP_VERSION = "0.1.0"
APP_CONFIG_DIR_NAME = "prizm-client"
CONFIG_FILE_NAME = "config.json"

# Duration Constants (milliseconds)
DEFAULT_HTTP_TIMEOUT_MS = 10000

# Default Configuration Values
DEFAULT_SERVER_HOST = "127.0.0.1"
DEFAULT_SERVER_PORT = "4127"
DEFAULT_CLIENT_NAME = "Prizm Tauri Client"
DEFAULT_AUTO_REGISTER = True
DEFAULT_REQUESTED_SCOPES = ("default",)
DEFAULT_TRAY_ENABLED = True
DEFAULT_MINIMIZE_TO_TRAY = True
DEFAULT_SHOW_NOTIFICATION = True
DEFAULT_LOG_LEVEL = "INFO"

# Health check
HEALTH_STATUS_OK = "ok"

# Platform Identifiers (sys.platform values)
PLATFORM_MACOS = "darwin"
PLATFORM_WINDOWS = "win32"
