"""Coordinator for WebRF."""
import logging
from datetime import timedelta
from functools import partial
from typing import List, Optional

from homeassistant.core import HomeAssistant, callback
from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.event import async_call_later
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from .const import (
    DOMAIN,
    CONF_URL,
    CONF_SCAN_INTERVAL,
    DEFAULT_SCAN_INTERVAL,
)
from .client import WebRFClient
from .models import HostEntitySink, WebRFAction
from .reconciler import Reconciler
from .store import ActionStorage, ActionStore
from .trigger import ActionTrigger

_LOGGER = logging.getLogger(__name__)


class WebRFCoordinator(DataUpdateCoordinator[List[str]]):
    """Coordinator owning the client, the known actions and the sync passes."""

    def __init__(self, hass: HomeAssistant, entry: ConfigEntry):
        """Initialize the coordinator."""
        scan_interval = entry.options.get(CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL)
        super().__init__(
            hass,
            _LOGGER,
            config_entry=entry,
            name=DOMAIN,
            update_interval=timedelta(seconds=scan_interval) if scan_interval else None,
        )
        self.entry = entry
        self.client = WebRFClient(entry.data[CONF_URL])
        self.store = ActionStore()
        self.reconciler: Optional[Reconciler] = None
        self._storage = ActionStorage(hass, entry.entry_id)
        self._sink: Optional[HostEntitySink] = None
        self._restored: List[WebRFAction] = []

    async def async_setup(self):
        """Set up the client and load the switches of the previous run."""
        await self.client.async_setup()
        self._restored = await self._storage.async_load()

    @callback
    def async_attach_sink(self, sink: HostEntitySink) -> None:
        """Connect the switch platform and bring back the restored switches."""
        self._sink = sink
        self.reconciler = Reconciler(self.client, self.store, sink, self._create_trigger)
        self.reconciler.restore(self._restored)
        self._restored = []

    async def async_start(self):
        """Run the first sync pass; keep syncing if an interval is configured."""
        if self.update_interval:
            # Periodic refreshes are only scheduled while someone listens.
            self.entry.async_on_unload(self.async_add_listener(self._handle_sync_done))
        await self.async_refresh()

    async def async_shutdown(self):
        """Shutdown the coordinator."""
        await super().async_shutdown()
        if self.reconciler:
            self.reconciler.detach_all()
        await self.client.async_shutdown()

    async def _async_update_data(self) -> List[str]:
        """Run a reconciliation pass."""
        if self.reconciler is None:
            _LOGGER.warning("Switch platform is not ready, skipping sync")
            return self.store.keys()

        diff = await self.reconciler.async_sync()
        if diff is not None and diff.changed:
            await self._storage.async_save(self.store)
        return self.store.keys()

    @callback
    def _handle_sync_done(self) -> None:
        _LOGGER.debug("Sync done, %d switch(es) known", len(self.store))

    def _create_trigger(self, action: WebRFAction) -> ActionTrigger:
        return ActionTrigger(
            action,
            self.client,
            self._sink,
            partial(async_call_later, self.hass),
            self.hass.async_create_task,
        )

    @callback
    def activate(self, action_id: str):
        """Turn on the switch of an action."""
        return self.reconciler.activate(action_id)

    async def async_remove_all(self):
        """Remove every switch of this entry."""
        if self.reconciler is None:
            return
        self.reconciler.remove_all()
        await self._storage.async_save(self.store)
        self.async_set_updated_data(self.store.keys())
