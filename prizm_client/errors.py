"""Exceptions raised by the client identity and configuration core.

Every error carries the step that failed so the shell can report it
without inspecting the exception type.
"""

STEP_CONFIG = "config"
STEP_HEALTH_CHECK = "health check"
STEP_REGISTRATION = "registration"
STEP_PERSISTENCE = "persistence"
STEP_DASHBOARD = "dashboard"


class PrizmClientError(Exception):
    """Base class for all client errors."""

    def __init__(self, message: str, step: str):
        super().__init__(f"{step}: {message}")
        self.message = message
        self.step = step


class ConfigIOError(PrizmClientError):
    """Config directory or file could not be created, read or written."""

    def __init__(self, message: str, step: str = STEP_CONFIG):
        super().__init__(message, step)


class ParseError(PrizmClientError):
    """A document did not match the expected schema.

    Raised for the config file as well as for server responses.
    """


class SerializationError(PrizmClientError):
    """Configuration could not be encoded as JSON."""

    def __init__(self, message: str, step: str = STEP_CONFIG):
        super().__init__(message, step)


class NetworkError(PrizmClientError):
    """The server could not be reached (connection failure or timeout)."""


class HealthCheckError(PrizmClientError):
    """The server is reachable but reports a status other than "ok"."""

    def __init__(self, message: str = "server health check failed"):
        super().__init__(message, STEP_HEALTH_CHECK)


class RegistrationError(PrizmClientError):
    """The server rejected the registration request."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message, STEP_REGISTRATION)
        self.status = status


class PersistError(PrizmClientError):
    """Registration succeeded but the credential could not be saved.

    The issued credential is attached so the caller does not lose it.
    """

    def __init__(self, message: str, api_key: str, client_id: str):
        super().__init__(message, STEP_PERSISTENCE)
        self.api_key = api_key
        self.client_id = client_id


class DashboardError(PrizmClientError):
    """The dashboard URL could not be opened."""

    def __init__(self, message: str):
        super().__init__(message, STEP_DASHBOARD)
