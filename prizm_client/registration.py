"""Client registration handshake with the control-plane server."""

import asyncio
import json
import logging
from typing import Any

import aiohttp

from .address import resolve_address
from .api_endpoints import (
    ENDPOINT_AUTH_REGISTER,
    HEADER_CONTENT_TYPE,
    HEADER_PANEL,
    CONTENT_TYPE_JSON,
    PANEL_HEADER_VALUE,
)
from .config_store import ConfigStore
from .constants import DEFAULT_HTTP_TIMEOUT_MS
from .errors import (
    HealthCheckError,
    NetworkError,
    ParseError,
    PersistError,
    PrizmClientError,
    RegistrationError,
    STEP_REGISTRATION,
)
from .models import HealthStatus, RegisterRequest, RegisterResponse
from .probe import ConnectionProbe

logger = logging.getLogger(__name__)


def _error_message(body: str) -> str:
    """Extract the server's error message from a failed response body.

    Accepts {"error": "..."} and {"error": {"message": "..."}}; anything
    else is returned as the raw body.
    """
    try:
        data: Any = json.loads(body)
    except json.JSONDecodeError:
        return body.strip() or "no response body"

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, str):
            return error
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
    return body.strip()


class RegistrationClient:
    """Runs the health-check-then-register handshake.

    Each step short-circuits on failure and nothing is retried; the
    caller decides whether to try again.
    """

    def __init__(
        self,
        config_store: ConfigStore,
        probe: ConnectionProbe | None = None,
        http_timeout: float = DEFAULT_HTTP_TIMEOUT_MS / 1000
    ):
        """Initialize registration client.

        Args:
            config_store: Store updated with the issued credential
            probe: Liveness probe. One with the same timeout is created if omitted.
            http_timeout: Total request timeout in seconds
        """
        self._config_store = config_store
        self._probe = probe if probe is not None else ConnectionProbe(http_timeout)
        self._http_timeout = http_timeout

    async def register(
        self,
        name: str,
        server_url: str,
        requested_scopes: list[str] | None = None
    ) -> str:
        """
        Register this client with the server and persist the credential.

        Args:
            name: Client name sent to the server.
            server_url: Server base URL, e.g. "http://127.0.0.1:4127".
            requested_scopes: Scopes to request, or None to let the server decide.

        Returns:
            The issued api key.

        Raises:
            NetworkError: A request failed or timed out.
            ParseError: A response body did not match the expected schema.
            HealthCheckError: The server is up but not healthy.
            RegistrationError: The server rejected the registration.
            PersistError: The credential was issued but could not be saved.
        """
        base_url = server_url.rstrip("/")

        async with aiohttp.ClientSession() as session:
            status = await self._probe.probe(base_url, session)
            if status is not HealthStatus.HEALTHY:
                raise HealthCheckError(f"server at {base_url} is not healthy")

            request = RegisterRequest(name=name, requested_scopes=requested_scopes)
            response = await self._post_register(session, base_url, request)

        self._persist(base_url, response, requested_scopes)
        logger.info(f"Registered as {response.client_id} with {base_url}")
        return response.api_key

    async def _post_register(
        self,
        session: aiohttp.ClientSession,
        base_url: str,
        request: RegisterRequest
    ) -> RegisterResponse:
        url = f"{base_url}{ENDPOINT_AUTH_REGISTER}"
        timeout = aiohttp.ClientTimeout(total=self._http_timeout)
        headers = {
            HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON,
            HEADER_PANEL: PANEL_HEADER_VALUE,
        }

        try:
            async with session.post(url, json=request.to_dict(), headers=headers, timeout=timeout) as response:
                status = response.status
                raw = await response.read()
        except asyncio.TimeoutError as e:
            raise NetworkError(f"POST {url} timed out", STEP_REGISTRATION) from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"POST {url} failed: {e}", STEP_REGISTRATION) from e

        if status >= 400:
            raise RegistrationError(
                f"server rejected registration ({status}): {_error_message(raw.decode('utf-8', errors='replace'))}",
                status=status,
            )

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ParseError(f"failed to parse register response: {e}", STEP_REGISTRATION) from e

        return RegisterResponse.from_dict(data)

    def _persist(
        self,
        base_url: str,
        response: RegisterResponse,
        requested_scopes: list[str] | None
    ) -> None:
        """Store the issued identity and the resolved server address."""
        try:
            config = self._config_store.load()
            config.server.host, config.server.port = resolve_address(base_url)
            config.client.name = response.client_id
            config.api_key = response.api_key
            if requested_scopes is not None:
                config.client.requested_scopes = list(requested_scopes)
            self._config_store.save(config)
        except PrizmClientError as e:
            raise PersistError(
                f"registered as {response.client_id} but saving the config failed: {e}",
                api_key=response.api_key,
                client_id=response.client_id,
            ) from e
