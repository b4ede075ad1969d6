"""Data models for the persisted configuration and server communication."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .constants import (
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
    DEFAULT_CLIENT_NAME,
    DEFAULT_AUTO_REGISTER,
    DEFAULT_REQUESTED_SCOPES,
    DEFAULT_TRAY_ENABLED,
    DEFAULT_MINIMIZE_TO_TRAY,
    DEFAULT_SHOW_NOTIFICATION,
    HEALTH_STATUS_OK,
)
from .errors import ParseError, STEP_CONFIG, STEP_HEALTH_CHECK, STEP_REGISTRATION

_TRUE_STRINGS = ("true", "1", "yes", "on")
_FALSE_STRINGS = ("false", "0", "no", "off")


@dataclass(frozen=True)
class ConfigDefaults:
    """Values used for any field missing from the config document."""

    host: str = DEFAULT_SERVER_HOST
    port: str = DEFAULT_SERVER_PORT
    client_name: str = DEFAULT_CLIENT_NAME
    auto_register: bool = DEFAULT_AUTO_REGISTER
    requested_scopes: tuple[str, ...] = DEFAULT_REQUESTED_SCOPES
    tray_enabled: bool = DEFAULT_TRAY_ENABLED
    minimize_to_tray: bool = DEFAULT_MINIMIZE_TO_TRAY
    show_notification: bool = DEFAULT_SHOW_NOTIFICATION


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Return a nested object, or an empty one when absent or null."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ParseError(f"'{key}' must be an object, got {type(value).__name__}", STEP_CONFIG)
    return value


def _str_field(
    section: dict[str, Any],
    name: str,
    default: str,
    *,
    required: bool = False,
    numeric: bool = False
) -> str:
    """Read a string field.

    With required=True an empty string also falls back to the default.
    With numeric=True integers are accepted and converted (hand-edited ports).
    """
    value = section.get(name)
    if value is None:
        return default
    if numeric and isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        raise ParseError(f"'{name}' must be a string, got {type(value).__name__}", STEP_CONFIG)
    if required and not value:
        return default
    return value


def _bool_field(section: dict[str, Any], name: str, default: bool) -> bool:
    """Read a boolean field, accepting the legacy string form ("true"/"false")."""
    value = section.get(name)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ParseError(f"'{name}' must be a boolean, got {value!r}", STEP_CONFIG)


def _scopes_field(section: dict[str, Any], name: str, default: tuple[str, ...]) -> list[str]:
    value = section.get(name)
    if value is None:
        return list(default)
    if not isinstance(value, list) or not all(isinstance(s, str) for s in value):
        raise ParseError(f"'{name}' must be a list of strings", STEP_CONFIG)
    return list(value)


@dataclass
class ServerConfig:
    """Network location of the control-plane server."""

    host: str = DEFAULT_SERVER_HOST
    port: str = DEFAULT_SERVER_PORT

    def to_dict(self) -> dict[str, Any]:
        return {"host": self.host, "port": self.port}

    @classmethod
    def from_dict(cls, data: dict[str, Any], defaults: ConfigDefaults) -> "ServerConfig":
        return cls(
            host=_str_field(data, "host", defaults.host, required=True),
            port=_str_field(data, "port", defaults.port, required=True, numeric=True),
        )


@dataclass
class ClientConfig:
    """Local client identity and preferences."""

    name: str = DEFAULT_CLIENT_NAME
    auto_register: bool = DEFAULT_AUTO_REGISTER
    requested_scopes: list[str] = field(default_factory=lambda: list(DEFAULT_REQUESTED_SCOPES))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "auto_register": self.auto_register,
            "requested_scopes": list(self.requested_scopes),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], defaults: ConfigDefaults) -> "ClientConfig":
        return cls(
            name=_str_field(data, "name", defaults.client_name),
            auto_register=_bool_field(data, "auto_register", defaults.auto_register),
            requested_scopes=_scopes_field(data, "requested_scopes", defaults.requested_scopes),
        )


@dataclass
class TrayConfig:
    """Presentation preferences, only consumed by the desktop shell."""

    enabled: bool = DEFAULT_TRAY_ENABLED
    minimize_to_tray: bool = DEFAULT_MINIMIZE_TO_TRAY
    show_notification: bool = DEFAULT_SHOW_NOTIFICATION

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "minimize_to_tray": self.minimize_to_tray,
            "show_notification": self.show_notification,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], defaults: ConfigDefaults) -> "TrayConfig":
        return cls(
            enabled=_bool_field(data, "enabled", defaults.tray_enabled),
            minimize_to_tray=_bool_field(data, "minimize_to_tray", defaults.minimize_to_tray),
            show_notification=_bool_field(data, "show_notification", defaults.show_notification),
        )


@dataclass
class Configuration:
    """Root of the persisted configuration document."""

    server: ServerConfig = field(default_factory=ServerConfig)
    client: ClientConfig = field(default_factory=ClientConfig)
    api_key: str = ""
    tray: TrayConfig = field(default_factory=TrayConfig)

    @property
    def is_registered(self) -> bool:
        """Whether a credential has been issued to this client."""
        return bool(self.api_key)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization (fixed field order)."""
        return {
            "server": self.server.to_dict(),
            "client": self.client.to_dict(),
            "api_key": self.api_key,
            "tray": self.tray.to_dict(),
        }

    @classmethod
    def from_defaults(cls, defaults: ConfigDefaults | None = None) -> "Configuration":
        """Create a configuration made only of default values."""
        return cls.from_dict({}, defaults)

    @classmethod
    def from_dict(cls, data: Any, defaults: ConfigDefaults | None = None) -> "Configuration":
        """Create from a decoded JSON document.

        Absent or null fields take their default value. Unknown keys
        are ignored.
        """
        if defaults is None:
            defaults = ConfigDefaults()
        if not isinstance(data, dict):
            raise ParseError(
                f"config document must be a JSON object, got {type(data).__name__}",
                STEP_CONFIG,
            )
        return cls(
            server=ServerConfig.from_dict(_section(data, "server"), defaults),
            client=ClientConfig.from_dict(_section(data, "client"), defaults),
            api_key=_str_field(data, "api_key", ""),
            tray=TrayConfig.from_dict(_section(data, "tray"), defaults),
        )


class HealthStatus(Enum):
    """Result of a liveness probe against a reachable server."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthResponse:
    """Body of GET /health."""

    status: str

    @property
    def is_ok(self) -> bool:
        return self.status == HEALTH_STATUS_OK

    @classmethod
    def from_dict(cls, data: Any) -> "HealthResponse":
        if not isinstance(data, dict) or not isinstance(data.get("status"), str):
            raise ParseError("health response has no 'status' string", STEP_HEALTH_CHECK)
        return cls(status=data["status"])


@dataclass
class RegisterRequest:
    """Body of POST /auth/register."""

    name: str
    requested_scopes: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "requested_scopes": list(self.requested_scopes) if self.requested_scopes is not None else None,
        }


@dataclass
class RegisterResponse:
    """Successful response of POST /auth/register."""

    client_id: str
    api_key: str

    @classmethod
    def from_dict(cls, data: Any) -> "RegisterResponse":
        if not isinstance(data, dict):
            raise ParseError("register response must be a JSON object", STEP_REGISTRATION)
        client_id = data.get("client_id")
        api_key = data.get("api_key")
        if not isinstance(client_id, str) or not isinstance(api_key, str):
            raise ParseError(
                "register response must contain 'client_id' and 'api_key' strings",
                STEP_REGISTRATION,
            )
        return cls(client_id=client_id, api_key=api_key)
