"""Client implementation for WebRF."""
import logging
import asyncio
from typing import Dict, Optional
import aiohttp

from .const import API_PATH, DEFAULT_TIMEOUT, STATUS_OK
from .exceptions import RegistryProtocolError, RegistryUnreachable
from .models import InvokeOutcome, parse_action_listing

_LOGGER = logging.getLogger(__name__)


def normalize_url(url: str) -> str:
    """Strip whitespace and trailing slashes from a server URL."""
    return url.strip().rstrip("/")


class WebRFClient:
    """Client for a WebRF server."""

    def __init__(self, url: str, session: Optional[aiohttp.ClientSession] = None):
        """Initialize the client."""
        self.base_url = normalize_url(url)
        self.api_url = f"{self.base_url}{API_PATH}"
        self._session = session
        self._owns_session = session is None

    async def async_setup(self):
        """Set up the client."""
        if self._session is None:
            self._session = aiohttp.ClientSession()
        _LOGGER.info("WebRF client ready for %s", self.api_url)

    async def async_shutdown(self):
        """Shutdown the client."""
        if self._session and self._owns_session:
            await self._session.close()
            self._session = None
        _LOGGER.info("WebRF client stopped")

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RegistryUnreachable(f"Client for {self.api_url} is not running")
        return self._session

    async def async_list_actions(self) -> Dict[str, str]:
        """Get the available actions from the server."""
        session = self._get_session()
        try:
            async with session.get(self.api_url, timeout=DEFAULT_TIMEOUT) as response:
                response.raise_for_status()
                body = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as ex:
            raise RegistryUnreachable(f"Error listing actions at {self.api_url}: {ex}") from ex
        except ValueError as ex:
            raise RegistryProtocolError(f"Invalid JSON from {self.api_url}: {ex}") from ex

        try:
            actions = parse_action_listing(body)
        except ValueError as ex:
            raise RegistryProtocolError(f"Unexpected response from {self.api_url}: {ex}") from ex

        _LOGGER.debug("Server lists %d action(s)", len(actions))
        return actions

    async def async_invoke(self, url: str) -> InvokeOutcome:
        """Trigger an action on the server."""
        session = self._get_session()
        try:
            async with session.post(url, timeout=DEFAULT_TIMEOUT) as response:
                response.raise_for_status()
                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    _LOGGER.debug("Non-JSON answer from %s", url)
                    return InvokeOutcome.FAILED
        except (aiohttp.ClientError, asyncio.TimeoutError) as ex:
            raise RegistryUnreachable(f"Error calling {url}: {ex}") from ex

        if isinstance(body, dict) and body.get("status") == STATUS_OK:
            return InvokeOutcome.OK
        return InvokeOutcome.FAILED
