"""Service handlers for WebRF."""
import logging
from typing import List

import voluptuous as vol

from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.exceptions import ServiceValidationError
from homeassistant.helpers import config_validation as cv

from .const import ATTR_ENTRY_ID, DOMAIN, SERVICE_REMOVE_ALL, SERVICE_SYNC

_LOGGER = logging.getLogger(__name__)

SERVICE_SCHEMA = vol.Schema({vol.Optional(ATTR_ENTRY_ID): cv.string})


def _get_coordinators(hass: HomeAssistant, call: ServiceCall) -> List:
    """Return the coordinators a service call applies to."""
    coordinators = hass.data.get(DOMAIN, {})
    entry_id = call.data.get(ATTR_ENTRY_ID)
    if entry_id is None:
        return list(coordinators.values())
    if entry_id not in coordinators:
        raise ServiceValidationError(f"No loaded WebRF entry {entry_id}")
    return [coordinators[entry_id]]


async def async_setup_services(hass: HomeAssistant) -> None:
    """Register the WebRF services."""

    async def async_handle_sync(call: ServiceCall) -> None:
        for coordinator in _get_coordinators(hass, call):
            _LOGGER.debug("Sync requested for %s", coordinator.entry.title)
            await coordinator.async_refresh()

    async def async_handle_remove_all(call: ServiceCall) -> None:
        for coordinator in _get_coordinators(hass, call):
            await coordinator.async_remove_all()

    hass.services.async_register(DOMAIN, SERVICE_SYNC, async_handle_sync, schema=SERVICE_SCHEMA)
    hass.services.async_register(
        DOMAIN, SERVICE_REMOVE_ALL, async_handle_remove_all, schema=SERVICE_SCHEMA
    )


async def async_unload_services(hass: HomeAssistant) -> None:
    """Unload services."""
    hass.services.async_remove(DOMAIN, SERVICE_SYNC)
    hass.services.async_remove(DOMAIN, SERVICE_REMOVE_ALL)
