"""Keep the local switches in line with the actions a WebRF server offers."""
import logging
from typing import Callable, Dict, Iterable, Optional

from homeassistant.core import callback

from .exceptions import UnknownEntity, WebRFError
from .models import ActionDiff, HostEntitySink, WebRFAction
from .store import ActionStore
from .trigger import ActionTrigger

_LOGGER = logging.getLogger(__name__)

TriggerFactory = Callable[[WebRFAction], ActionTrigger]


class Reconciler:
    """Owns the action store and mirrors the server's action list into it.

    Only presence drives changes. An action whose name changes on the server
    keeps its switch; an action that moves to another key loses its switch and
    gets a new one.
    """

    def __init__(
        self,
        client,
        store: ActionStore,
        sink: HostEntitySink,
        trigger_factory: TriggerFactory,
    ):
        """Initialize the reconciler."""
        self._client = client
        self.store = store
        self._sink = sink
        self._trigger_factory = trigger_factory
        self.triggers: Dict[str, ActionTrigger] = {}

    @callback
    def restore(self, actions: Iterable[WebRFAction]) -> None:
        """Take in switches known from a previous run.

        Must run before the first sync so restored switches take part in the diff.
        """
        for action in actions:
            if action.action_id in self.store:
                _LOGGER.warning("Ignoring duplicate stored action %s", action.action_id)
                continue
            _LOGGER.info("Configuring switch %s", action.name)
            self._attach(action)

    async def async_sync(self) -> Optional[ActionDiff]:
        """Run one reconciliation pass.

        Returns the applied diff, or None when the server could not be read, in
        which case nothing was changed.
        """
        _LOGGER.info("Loading switch data")
        try:
            remote = await self._client.async_list_actions()
        except WebRFError as ex:
            _LOGGER.error("Failed to access server: %s", ex)
            return None

        diff = ActionDiff.compute(remote, self.store.keys())

        if diff.to_remove:
            _LOGGER.info("Removing switches: %s", ", ".join(diff.to_remove))
            for action_id in diff.to_remove:
                self._remove_logged(action_id)
        else:
            _LOGGER.info("No switches to remove")

        if diff.to_add:
            _LOGGER.info("Adding switches: %s", ", ".join(diff.to_add))
            for action_id in diff.to_add:
                self.add(action_id, remote[action_id])
        else:
            _LOGGER.info("No switches to add")

        return diff

    @callback
    def add(self, action_id: str, name: str) -> WebRFAction:
        """Create the switch for a new action."""
        _LOGGER.info("Adding new switch with name %s", name)
        action = WebRFAction.from_remote(self._client.api_url, action_id, name)
        self._attach(action)
        return action

    @callback
    def remove(self, action_id: str) -> None:
        """Remove the switch of an action."""
        _LOGGER.info("Removing switch with action %s", action_id)
        action = self.store.pop(action_id)
        trigger = self.triggers.pop(action_id, None)
        if trigger:
            trigger.detach()
        self._sink.unregister(action)

    @callback
    def remove_all(self) -> None:
        """Remove every switch."""
        _LOGGER.info("Removing all switches")
        self.detach_all()
        self.store.clear()
        self._sink.unregister_all()

    @callback
    def detach_all(self) -> None:
        """Stop all triggers without removing their switches."""
        for trigger in self.triggers.values():
            trigger.detach()
        self.triggers.clear()

    @callback
    def activate(self, action_id: str):
        """Turn on the switch of an action."""
        trigger = self.triggers.get(action_id)
        if trigger is None:
            raise UnknownEntity(f"No switch for action {action_id}")
        return trigger.activate()

    def _attach(self, action: WebRFAction) -> None:
        self.store.add(action)
        self.triggers[action.action_id] = self._trigger_factory(action)
        self._sink.register(action)

    def _remove_logged(self, action_id: str) -> None:
        try:
            self.remove(action_id)
        except UnknownEntity:
            _LOGGER.error("Unable to remove switch %s! Does not exist", action_id)
