"""Operations exposed to the desktop shell.

Each call is independent: configuration is read from disk when needed
and written back before returning.
"""

import logging
import webbrowser

from .api_endpoints import ENDPOINT_DASHBOARD
from .config_store import ConfigStore
from .constants import APP_VERSION, DEFAULT_HTTP_TIMEOUT_MS
from .errors import DashboardError
from .models import Configuration, HealthStatus
from .probe import ConnectionProbe
from .registration import RegistrationClient

logger = logging.getLogger(__name__)


class ClientCommands:
    """Command surface over the config store, probe and registration client."""

    def __init__(
        self,
        config_store: ConfigStore | None = None,
        http_timeout: float = DEFAULT_HTTP_TIMEOUT_MS / 1000
    ):
        self.config_store = config_store if config_store is not None else ConfigStore()
        self._probe = ConnectionProbe(http_timeout)
        self._registration = RegistrationClient(self.config_store, self._probe, http_timeout)

    def load_config(self) -> Configuration:
        return self.config_store.load()

    def save_config(self, config: Configuration) -> None:
        self.config_store.save(config)

    async def register_client(
        self,
        name: str,
        server_url: str,
        requested_scopes: list[str] | None = None
    ) -> str:
        """Register with the server; returns the issued api key."""
        return await self._registration.register(name, server_url, requested_scopes)

    async def test_connection(self, server_url: str) -> bool:
        """Return True if the server reports "ok".

        Unreachable servers and malformed responses raise instead of
        returning False.
        """
        status = await self._probe.probe(server_url)
        return status is HealthStatus.HEALTHY

    @staticmethod
    def get_app_version() -> str:
        return APP_VERSION

    @staticmethod
    def open_dashboard(server_url: str) -> None:
        """Open the server dashboard in the default browser."""
        dashboard_url = f"{server_url.rstrip('/')}{ENDPOINT_DASHBOARD}"
        try:
            opened = webbrowser.open(dashboard_url)
        except webbrowser.Error as e:
            raise DashboardError(f"failed to open {dashboard_url}: {e}") from e
        if not opened:
            raise DashboardError(f"no browser available to open {dashboard_url}")
        logger.info(f"Opened dashboard: {dashboard_url}")
