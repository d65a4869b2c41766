"""Config flow for WebRF integration."""
import logging
import aiohttp

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.core import callback
import homeassistant.helpers.config_validation as cv

from .client import WebRFClient, normalize_url
from .const import (
    DOMAIN,
    CONF_URL,
    CONF_SCAN_INTERVAL,
    DEFAULT_SCAN_INTERVAL,
)
from .exceptions import RegistryProtocolError, RegistryUnreachable

_LOGGER = logging.getLogger(__name__)


class WebRFConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for WebRF."""

    VERSION = 1

    async def async_step_user(self, user_input=None):
        """Handle the initial step."""
        errors = {}

        if user_input is not None:
            url = normalize_url(user_input[CONF_URL])

            await self.async_set_unique_id(url)
            self._abort_if_unique_id_configured()

            try:
                count = await self._count_actions(url)
            except RegistryUnreachable as ex:
                _LOGGER.error("Connection error while checking %s: %s", url, ex)
                errors["base"] = "cannot_connect"
            except RegistryProtocolError as ex:
                _LOGGER.error("Unexpected answer from %s: %s", url, ex)
                errors["base"] = "invalid_response"
            else:
                _LOGGER.info("Found %d action(s) at %s", count, url)
                return self.async_create_entry(
                    title=f"WebRF ({url})",
                    data={CONF_URL: url},
                )

        data_schema = vol.Schema({
            vol.Required(CONF_URL): cv.string,
        })

        return self.async_show_form(
            step_id="user",
            data_schema=data_schema,
            errors=errors,
        )

    async def _count_actions(self, url: str) -> int:
        """Check that the server answers with an action list."""
        async with aiohttp.ClientSession() as session:
            client = WebRFClient(url, session)
            actions = await client.async_list_actions()
        return len(actions)

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Get the options flow for this handler."""
        return OptionsFlowHandler()


class OptionsFlowHandler(config_entries.OptionsFlow):
    """Handle options flow for WebRF."""

    async def async_step_init(self, user_input=None):
        """Manage the options."""
        if user_input is not None:
            return self.async_create_entry(title="", data=user_input)

        current_interval = self.config_entry.options.get(
            CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL
        )

        data_schema = vol.Schema({
            vol.Optional(
                CONF_SCAN_INTERVAL,
                default=current_interval,
            ): vol.All(vol.Coerce(int), vol.Range(min=0)),
        })

        return self.async_show_form(
            step_id="init",
            data_schema=data_schema,
            description_placeholders={
                "info": "Seconds between syncs with the server. 0 syncs only at startup."
            },
        )
