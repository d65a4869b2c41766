"""Shared fixtures for the WebRF tests.

The fakes stand in for the WebRF server, the switch platform and Home
Assistant's timer helper so the sync and trigger logic runs without a live
Home Assistant instance.
"""
import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from custom_components.webrf.models import InvokeOutcome
from custom_components.webrf.reconciler import Reconciler
from custom_components.webrf.store import ActionStore
from custom_components.webrf.trigger import ActionTrigger

API_URL = "http://webrf.local/api/v1/"


class FakeClient:
    """Scripted WebRF server."""

    api_url = API_URL

    def __init__(self):
        self.actions = {}
        self.list_error = None
        self.outcome = InvokeOutcome.OK
        self.gate = None
        self.list_calls = 0
        self.invoked = []
        self.running = False

    async def async_setup(self):
        self.running = True

    async def async_shutdown(self):
        self.running = False

    async def async_list_actions(self):
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return dict(self.actions)

    async def async_invoke(self, url):
        self.invoked.append(url)
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class FakeSink:
    """Records what would have been shown to the user."""

    def __init__(self):
        self.events = []
        self.shown = {}

    def register(self, action):
        self.events.append(("register", action.action_id))
        self.shown[action.action_id] = action

    def unregister(self, action):
        self.events.append(("unregister", action.action_id))
        self.shown.pop(action.action_id, None)

    def unregister_all(self):
        self.events.append(("unregister_all",))
        self.shown.clear()

    def set_visible_state(self, action, is_on):
        self.events.append(("state", action.action_id, is_on))

    def states(self, action_id):
        return [e[2] for e in self.events if e[0] == "state" and e[1] == action_id]

    def structural(self):
        return [e for e in self.events if e[0] != "state"]


class FakeTimer:
    def __init__(self, delay, action):
        self.delay = delay
        self.action = action
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.fired = True
        self.action(None)


class FakeScheduler:
    """Replacement for ``async_call_later`` that fires on demand."""

    def __init__(self):
        self.timers = []

    def call_later(self, delay, action):
        timer = FakeTimer(delay, action)
        self.timers.append(timer)
        return timer.cancel

    @property
    def active(self):
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def fire_all(self):
        for timer in self.active:
            timer.fire()


class TaskRecorder:
    """Replacement for ``hass.async_create_task`` keeping hold of the tasks."""

    def __init__(self):
        self.tasks = []

    def __call__(self, coro):
        task = asyncio.get_running_loop().create_task(coro)
        self.tasks.append(task)
        return task

    async def wait(self):
        await asyncio.gather(*self.tasks)


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def sink():
    return FakeSink()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def tasks():
    return TaskRecorder()


@pytest.fixture
def make_trigger(client, sink, scheduler, tasks):
    def _make(action):
        return ActionTrigger(action, client, sink, scheduler.call_later, tasks)
    return _make


@pytest.fixture
def reconciler(client, sink, make_trigger):
    return Reconciler(client, ActionStore(), sink, make_trigger)


@pytest.fixture
def backing_store():
    """Patch Home Assistant's Store used for persisting actions."""
    with patch("custom_components.webrf.store.Store") as store_cls:
        instance = store_cls.return_value
        instance.async_load = AsyncMock(return_value=None)
        instance.async_save = AsyncMock()
        yield store_cls
