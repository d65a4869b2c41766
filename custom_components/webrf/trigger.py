"""Momentary switch behaviour for WebRF actions."""
import asyncio
import logging
from typing import Any, Callable, Coroutine, Optional

from homeassistant.core import CALLBACK_TYPE, callback

from .const import RESET_DELAY
from .exceptions import ActionFailed, RegistryUnreachable, UnknownEntity
from .models import HostEntitySink, InvokeOutcome, WebRFAction

_LOGGER = logging.getLogger(__name__)

CallLater = Callable[[float, Callable[[Any], None]], CALLBACK_TYPE]
CreateTask = Callable[[Coroutine], asyncio.Future]


class ActionTrigger:
    """Turn a switch on, call the action, and turn the switch off again.

    The reset is driven by time only. Whatever the server answers, the switch
    goes back to off ``reset_delay`` seconds after the last activation.
    """

    def __init__(
        self,
        action: WebRFAction,
        client,
        sink: HostEntitySink,
        call_later: CallLater,
        create_task: CreateTask,
        reset_delay: float = RESET_DELAY,
    ):
        """Initialize the trigger."""
        self.action = action
        self._client = client
        self._sink = sink
        self._call_later = call_later
        self._create_task = create_task
        self._reset_delay = reset_delay
        self._cancel_reset: Optional[CALLBACK_TYPE] = None
        self._attached = True

    @property
    def attached(self) -> bool:
        """Return False once the switch has been removed."""
        return self._attached

    @callback
    def activate(self) -> asyncio.Future:
        """Handle the switch being turned on.

        Returns the task running the remote call; callers do not need to wait
        for it.
        """
        if not self._attached:
            raise UnknownEntity(f"Switch for action {self.action.action_id} was removed")

        _LOGGER.info("%s was triggered", self.action.name)
        self.action.is_on = True
        self._sink.set_visible_state(self.action, True)
        self._schedule_reset()

        return self._create_task(self._async_invoke())

    @callback
    def detach(self) -> None:
        """Stop touching the action; used when its switch goes away."""
        self._attached = False
        if self._cancel_reset:
            self._cancel_reset()
            self._cancel_reset = None
        self.action.pending = False

    def _schedule_reset(self) -> None:
        if self._cancel_reset:
            self._cancel_reset()
        self.action.pending = True
        self._cancel_reset = self._call_later(self._reset_delay, self._async_reset)

    @callback
    def _async_reset(self, _now=None) -> None:
        """Turn the switch back off."""
        self._cancel_reset = None
        self.action.pending = False
        if not self._attached:
            return

        _LOGGER.debug("%s: updating switch to off", self.action.name)
        self.action.is_on = False
        self._sink.set_visible_state(self.action, False)

    async def _async_call_action(self) -> None:
        outcome = await self._client.async_invoke(self.action.url)
        if outcome is not InvokeOutcome.OK:
            raise ActionFailed(f"{self.action.url} answered {outcome.value}")

    async def _async_invoke(self) -> None:
        """Call the remote action and log how it went."""
        name = self.action.name
        try:
            await self._async_call_action()
        except RegistryUnreachable as ex:
            if self._attached:
                _LOGGER.error("Failed to trigger request for %s: %s", name, ex)
            else:
                _LOGGER.debug("Ignoring failure for removed switch %s: %s", name, ex)
        except ActionFailed as ex:
            if self._attached:
                _LOGGER.error("Failed to trigger %s (%s). Please check the WebRF server", name, ex)
            else:
                _LOGGER.debug("Ignoring result for removed switch %s: %s", name, ex)
        else:
            if self._attached:
                _LOGGER.info("%s triggered successfully", name)
            else:
                _LOGGER.debug("Ignoring result for removed switch %s", name)
