"""Data models for the WebRF integration."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Protocol

from .const import ATTR_ACTION_ID, ATTR_NAME


class InvokeOutcome(Enum):
    """Result of a remote action call that reached the server."""

    OK = "ok"
    FAILED = "failed"


@dataclass
class WebRFAction:
    """Local record of a remote action, backing one switch."""

    action_id: str
    name: str
    url: str
    is_on: bool = False
    pending: bool = field(default=False, compare=False)

    @classmethod
    def from_remote(cls, api_url: str, action_id: str, name: str) -> "WebRFAction":
        """Build a record for an action announced by the server."""
        return cls(action_id=action_id, name=name, url=f"{api_url}{action_id}")

    @classmethod
    def from_dict(cls, data: dict) -> "WebRFAction":
        """Build a record from its stored form."""
        return cls(
            action_id=data[ATTR_ACTION_ID],
            name=data[ATTR_NAME],
            url=data["url"],
        )

    def as_dict(self) -> dict:
        """Return the stored form of the record."""
        return {
            ATTR_ACTION_ID: self.action_id,
            ATTR_NAME: self.name,
            "url": self.url,
        }


@dataclass(frozen=True)
class ActionDiff:
    """Operations needed to bring the local switches in line with the server."""

    to_add: List[str]
    to_remove: List[str]

    @classmethod
    def compute(cls, remote_keys: Iterable[str], local_keys: Iterable[str]) -> "ActionDiff":
        """Diff two key sets; both lists come out sorted."""
        remote = set(remote_keys)
        local = set(local_keys)
        return cls(
            to_add=sorted(remote - local),
            to_remove=sorted(local - remote),
        )

    @property
    def changed(self) -> bool:
        return bool(self.to_add or self.to_remove)


def parse_action_listing(body) -> Dict[str, str]:
    """Extract the action mapping from a listing response body.

    The server answers with ``{"data": {"data": {key: name, ...}}}``. Anything
    else raises ``ValueError``.
    """
    if not isinstance(body, dict):
        raise ValueError("response is not an object")

    outer = body.get("data")
    if not isinstance(outer, dict):
        raise ValueError("missing 'data' object")

    actions = outer.get("data")
    if not isinstance(actions, dict):
        raise ValueError("missing 'data.data' object")

    for key, name in actions.items():
        if not isinstance(name, str):
            raise ValueError(f"action {key!r} has a non-string name")

    return dict(actions)


class HostEntitySink(Protocol):
    """What the hosting platform offers for showing switches."""

    def register(self, action: WebRFAction) -> None:
        """Show a new switch."""

    def unregister(self, action: WebRFAction) -> None:
        """Remove a switch."""

    def unregister_all(self) -> None:
        """Remove every switch."""

    def set_visible_state(self, action: WebRFAction, is_on: bool) -> None:
        """Push the state of a switch."""
