"""Client identity and configuration core for Prizm Client."""

from .address import resolve_address, build_server_url
from .commands import ClientCommands
from .config_store import ConfigStore
from .constants import APP_VERSION
from .errors import (
    PrizmClientError,
    ConfigIOError,
    ParseError,
    SerializationError,
    NetworkError,
    HealthCheckError,
    RegistrationError,
    PersistError,
    DashboardError,
)
from .models import (
    ConfigDefaults,
    Configuration,
    ServerConfig,
    ClientConfig,
    TrayConfig,
    HealthStatus,
)
from .probe import ConnectionProbe
from .registration import RegistrationClient

__version__ = APP_VERSION

__all__ = [
    "resolve_address",
    "build_server_url",
    "ClientCommands",
    "ConfigStore",
    "PrizmClientError",
    "ConfigIOError",
    "ParseError",
    "SerializationError",
    "NetworkError",
    "HealthCheckError",
    "RegistrationError",
    "PersistError",
    "DashboardError",
    "ConfigDefaults",
    "Configuration",
    "ServerConfig",
    "ClientConfig",
    "TrayConfig",
    "HealthStatus",
    "ConnectionProbe",
    "RegistrationClient",
]
