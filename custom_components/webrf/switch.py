"""Switch platform for WebRF."""
import logging
from typing import Any, Dict

from homeassistant.components.switch import SwitchEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers import entity_registry as er
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN, ATTR_ACTION_ID, ATTR_ACTION_URL
from .coordinator import WebRFCoordinator
from .models import WebRFAction

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
):
    """Set up switch platform."""
    coordinator: WebRFCoordinator = hass.data[DOMAIN][entry.entry_id]
    coordinator.async_attach_sink(
        SwitchPlatformSink(hass, coordinator, async_add_entities)
    )


class SwitchPlatformSink:
    """Show and hide WebRF switches through the entity platform."""

    def __init__(
        self,
        hass: HomeAssistant,
        coordinator: WebRFCoordinator,
        async_add_entities: AddEntitiesCallback,
    ):
        """Initialize the sink."""
        self.hass = hass
        self.coordinator = coordinator
        self._async_add_entities = async_add_entities
        self._entities: Dict[str, "WebRFSwitch"] = {}

    @callback
    def register(self, action: WebRFAction) -> None:
        """Add a switch for an action."""
        entity = WebRFSwitch(self.coordinator, action)
        self._entities[action.action_id] = entity
        self._async_add_entities([entity])

    @callback
    def unregister(self, action: WebRFAction) -> None:
        """Remove the switch of an action."""
        entity = self._entities.pop(action.action_id, None)
        if entity is None:
            _LOGGER.debug("No switch shown for action %s", action.action_id)
            return
        self._remove_entity(entity)

    @callback
    def unregister_all(self) -> None:
        """Remove every switch."""
        for entity in list(self._entities.values()):
            self._remove_entity(entity)
        self._entities.clear()

    @callback
    def set_visible_state(self, action: WebRFAction, is_on: bool) -> None:
        """Write the state of a switch."""
        entity = self._entities.get(action.action_id)
        if entity is None or entity.hass is None:
            return
        entity.async_write_ha_state()

    @callback
    def _remove_entity(self, entity: "WebRFSwitch") -> None:
        registry = er.async_get(self.hass)
        if entity.entity_id and registry.async_get(entity.entity_id):
            # The platform drops the entity once its registry entry is gone.
            registry.async_remove(entity.entity_id)
        elif entity.hass is not None:
            self.hass.async_create_task(entity.async_remove())


class WebRFSwitch(SwitchEntity):
    """A momentary switch calling one WebRF action."""

    _attr_should_poll = False
    _attr_icon = "mdi:remote"

    def __init__(self, coordinator: WebRFCoordinator, action: WebRFAction):
        """Initialize the switch."""
        self.coordinator = coordinator
        self._action = action
        self._attr_unique_id = f"{coordinator.entry.entry_id}_{action.action_id}"
        self._attr_name = action.name

    @property
    def is_on(self):
        """Return true while the switch is in its on phase."""
        return self._action.is_on

    @property
    def extra_state_attributes(self):
        """Return entity attributes."""
        return {
            ATTR_ACTION_ID: self._action.action_id,
            ATTR_ACTION_URL: self._action.url,
        }

    async def async_turn_on(self, **kwargs: Any):
        """Trigger the action."""
        self.coordinator.activate(self._action.action_id)

    async def async_turn_off(self, **kwargs: Any):
        """Nothing to do, the switch turns itself off."""
        _LOGGER.debug("%s resets on its own, ignoring turn off", self._action.name)
