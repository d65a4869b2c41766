"""Exceptions for the WebRF integration."""
from homeassistant.exceptions import HomeAssistantError


class WebRFError(HomeAssistantError):
    """Base error for WebRF."""


class RegistryUnreachable(WebRFError):
    """The WebRF server could not be reached."""


class RegistryProtocolError(WebRFError):
    """The WebRF server answered with something we cannot parse."""


class ActionFailed(WebRFError):
    """The WebRF server reported that an action did not succeed."""


class UnknownEntity(WebRFError):
    """No switch is known for the requested action."""
