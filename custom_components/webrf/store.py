"""Known actions for WebRF, in memory and on disk."""
import logging
from typing import Dict, Iterator, List, Optional

from homeassistant.core import HomeAssistant
from homeassistant.helpers.storage import Store

from .const import STORAGE_KEY, STORAGE_VERSION
from .exceptions import UnknownEntity
from .models import WebRFAction

_LOGGER = logging.getLogger(__name__)


class ActionStore:
    """Ordered collection of the switches we know about, keyed by action id."""

    def __init__(self):
        """Initialize an empty store."""
        self._actions: Dict[str, WebRFAction] = {}

    def __contains__(self, action_id: str) -> bool:
        return action_id in self._actions

    def __iter__(self) -> Iterator[WebRFAction]:
        return iter(list(self._actions.values()))

    def __len__(self) -> int:
        return len(self._actions)

    def keys(self) -> List[str]:
        """Return the known action ids in insertion order."""
        return list(self._actions)

    def get(self, action_id: str) -> Optional[WebRFAction]:
        """Get a known action."""
        return self._actions.get(action_id)

    def add(self, action: WebRFAction) -> None:
        """Add an action. An action id is only ever bound to one record."""
        if action.action_id in self._actions:
            raise ValueError(f"Action {action.action_id} is already known")
        self._actions[action.action_id] = action

    def pop(self, action_id: str) -> WebRFAction:
        """Remove and return an action."""
        try:
            return self._actions.pop(action_id)
        except KeyError:
            raise UnknownEntity(f"No switch for action {action_id}") from None

    def clear(self) -> List[WebRFAction]:
        """Remove every action and return them."""
        actions = list(self._actions.values())
        self._actions.clear()
        return actions


class ActionStorage:
    """Persist the known actions of one config entry."""

    def __init__(self, hass: HomeAssistant, entry_id: str):
        """Initialize the storage."""
        self.hass = hass
        self._store = Store(hass, STORAGE_VERSION, STORAGE_KEY.format(entry_id=entry_id))

    async def async_load(self) -> List[WebRFAction]:
        """Load previously known actions."""
        data = await self._store.async_load()
        if not data:
            return []

        actions = []
        for item in data.get("actions", []):
            try:
                actions.append(WebRFAction.from_dict(item))
            except (KeyError, TypeError) as ex:
                _LOGGER.warning("Skipping malformed stored action %s: %s", item, ex)

        _LOGGER.info("Restored %d switch(es) from storage", len(actions))
        return actions

    async def async_save(self, store: ActionStore):
        """Save the known actions."""
        await self._store.async_save({"actions": [action.as_dict() for action in store]})
