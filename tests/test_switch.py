"""Tests for the switch platform glue."""
from unittest.mock import MagicMock, patch

import pytest

from custom_components.webrf.models import WebRFAction
from custom_components.webrf.switch import SwitchPlatformSink, WebRFSwitch

API_URL = "http://webrf.local/api/v1/"


@pytest.fixture
def coordinator():
    coordinator = MagicMock()
    coordinator.entry.entry_id = "entry1"
    return coordinator


@pytest.fixture
def add_entities():
    return MagicMock()


@pytest.fixture
def platform_sink(coordinator, add_entities):
    return SwitchPlatformSink(MagicMock(), coordinator, add_entities)


@pytest.fixture
def action():
    return WebRFAction.from_remote(API_URL, "a1", "Lamp")


def test_register_adds_switch(platform_sink, add_entities, action):
    platform_sink.register(action)

    (entities,), _ = add_entities.call_args
    switch = entities[0]
    assert isinstance(switch, WebRFSwitch)
    assert switch.unique_id == "entry1_a1"
    assert switch.name == "Lamp"
    assert switch.is_on is False
    assert switch.extra_state_attributes == {
        "action_id": "a1",
        "action_url": API_URL + "a1",
    }


def test_switch_follows_action_state(platform_sink, add_entities, action):
    platform_sink.register(action)
    switch = add_entities.call_args.args[0][0]

    action.is_on = True

    assert switch.is_on is True


def test_visible_state_written_once_added(platform_sink, add_entities, action):
    platform_sink.register(action)
    switch = add_entities.call_args.args[0][0]
    switch.async_write_ha_state = MagicMock()

    platform_sink.set_visible_state(action, True)
    switch.async_write_ha_state.assert_not_called()

    switch.hass = MagicMock()
    platform_sink.set_visible_state(action, True)
    switch.async_write_ha_state.assert_called_once()


def test_unregister_removes_registry_entry(platform_sink, add_entities, action):
    platform_sink.register(action)
    switch = add_entities.call_args.args[0][0]
    switch.entity_id = "switch.lamp"

    with patch("custom_components.webrf.switch.er.async_get") as get_registry:
        platform_sink.unregister(action)

    get_registry.return_value.async_remove.assert_called_once_with("switch.lamp")


def test_unregister_unknown_action(platform_sink, action):
    with patch("custom_components.webrf.switch.er.async_get") as get_registry:
        platform_sink.unregister(action)

    get_registry.assert_not_called()


def test_unregister_all(platform_sink, add_entities):
    for action_id in ("a1", "b2"):
        platform_sink.register(WebRFAction.from_remote(API_URL, action_id, action_id))
    for call, entity_id in zip(add_entities.call_args_list, ("switch.a1", "switch.b2")):
        call.args[0][0].entity_id = entity_id

    with patch("custom_components.webrf.switch.er.async_get") as get_registry:
        platform_sink.unregister_all()

    removed = [c.args[0] for c in get_registry.return_value.async_remove.call_args_list]
    assert removed == ["switch.a1", "switch.b2"]


@pytest.mark.asyncio
async def test_turn_on_activates(coordinator, action):
    switch = WebRFSwitch(coordinator, action)

    await switch.async_turn_on()

    coordinator.activate.assert_called_once_with("a1")


@pytest.mark.asyncio
async def test_turn_off_is_ignored(coordinator, action):
    switch = WebRFSwitch(coordinator, action)

    await switch.async_turn_off()

    coordinator.activate.assert_not_called()
