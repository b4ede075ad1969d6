"""Server liveness probe."""

import asyncio
import json
import logging

import aiohttp

from .api_endpoints import ENDPOINT_HEALTH
from .constants import DEFAULT_HTTP_TIMEOUT_MS
from .errors import NetworkError, ParseError, STEP_HEALTH_CHECK
from .models import HealthResponse, HealthStatus

logger = logging.getLogger(__name__)


class ConnectionProbe:
    """Checks whether a control-plane server is up.

    A reachable server reporting a non-"ok" status is UNHEALTHY; an
    unreachable server raises NetworkError. The two are never merged.
    """

    def __init__(self, http_timeout: float = DEFAULT_HTTP_TIMEOUT_MS / 1000):
        """Initialize probe.

        Args:
            http_timeout: Total request timeout in seconds
        """
        self._http_timeout = http_timeout

    async def probe(
        self,
        base_url: str,
        session: aiohttp.ClientSession | None = None
    ) -> HealthStatus:
        """
        Query the server health endpoint.

        Args:
            base_url: Server base URL, including the scheme.
            session: Optional session to reuse. A short-lived session is
                created when omitted.

        Returns:
            HealthStatus.HEALTHY if the server reports "ok", UNHEALTHY otherwise.

        Raises:
            NetworkError: The request failed or timed out.
            ParseError: The body is not a JSON object with a 'status' string.
        """
        if session is None:
            async with aiohttp.ClientSession() as own_session:
                return await self._probe(base_url, own_session)
        return await self._probe(base_url, session)

    async def _probe(self, base_url: str, session: aiohttp.ClientSession) -> HealthStatus:
        url = f"{base_url.rstrip('/')}{ENDPOINT_HEALTH}"
        timeout = aiohttp.ClientTimeout(total=self._http_timeout)
        logger.debug(f"Probing {url}")

        try:
            async with session.get(url, timeout=timeout) as response:
                raw = await response.read()
        except asyncio.TimeoutError as e:
            raise NetworkError(f"GET {url} timed out", STEP_HEALTH_CHECK) from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"GET {url} failed: {e}", STEP_HEALTH_CHECK) from e

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ParseError(f"failed to parse health response: {e}", STEP_HEALTH_CHECK) from e

        health = HealthResponse.from_dict(data)
        if health.is_ok:
            logger.info(f"Server at {base_url} is healthy")
            return HealthStatus.HEALTHY

        logger.info(f"Server at {base_url} reported status '{health.status}'")
        return HealthStatus.UNHEALTHY
