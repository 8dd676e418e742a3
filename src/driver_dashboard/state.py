"""Centralised, path-addressed application state with change notification."""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping, MutableSequence
from copy import deepcopy
import logging
from typing import Any

from .events.bus import EventBus, SubscriberTable, Unsubscribe
from .events.domain import STATE_CHANGE, StateChange
from .exceptions import InvalidPathError

LOGGER = logging.getLogger(__name__)

PLATFORMS: tuple[str, ...] = ("grab", "maxim", "gojek", "indrive")

DEFAULT_FUEL_CONSUMPTION = 14
DEFAULT_FUEL_PRICE = 10_000

# Sections restored by StateStore.restore_defaults().
RESETTABLE_SECTIONS: tuple[str, ...] = ("platforms", "fuel", "additional_costs")


def default_state(
    *,
    fuel_consumption: float = DEFAULT_FUEL_CONSUMPTION,
    fuel_price: float = DEFAULT_FUEL_PRICE,
    settings: Mapping[str, Any] | None = None,
    initial_view: str = "dashboard",
) -> dict[str, Any]:
    """Build the fixed initial shape of the dashboard state tree."""
    state: dict[str, Any] = {
        "platforms": {
            name: {"topup": 0, "sisa": 0, "kotor": 0} for name in PLATFORMS
        },
        "fuel": {
            "jarak": 0,
            "konsumsi": fuel_consumption,
            "harga": fuel_price,
            "liter_terpakai": 0,
            "biaya_bbm": 0,
        },
        "additional_costs": {
            "parkir": 0,
            "makan": 0,
            "kuota": 0,
            "tol": 0,
            "lainnya": 0,
            "total": 0,
        },
        "results": {
            "total_kotor": 0,
            "biaya_bbm": 0,
            "total_additional_costs": 0,
            "pendapatan_bersih": 0,
        },
        "ui": {
            "current_view": initial_view,
            "sidebar_collapsed": False,
            "loading": False,
            "notifications": [],
        },
        "settings": {
            "auto_calculate": True,
            "auto_save": True,
            "notifications": True,
            "gps_tracking": False,
        },
    }
    if settings:
        state["settings"].update(settings)
    return state


def split_path(path: str) -> list[str]:
    """Split a dot-delimited path, rejecting empty paths and segments."""
    if not isinstance(path, str) or not path:
        raise InvalidPathError("State path must be a non-empty string.")
    segments = path.split(".")
    if any(not segment for segment in segments):
        raise InvalidPathError(f"State path {path!r} contains an empty segment.")
    return segments


def _index(segment: str, sequence: MutableSequence[Any]) -> int | None:
    if not segment.isdigit():
        return None
    position = int(segment)
    if position >= len(sequence):
        return None
    return position


def _child(container: Any, segment: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(segment)
    if isinstance(container, MutableSequence):
        position = _index(segment, container)
        return None if position is None else container[position]
    return None


def _lookup(tree: dict[str, Any], path: Any) -> Any:
    if path is None:
        return tree
    if not isinstance(path, str):
        return None
    if not path:
        return tree
    current: Any = tree
    for segment in path.split("."):
        current = _child(current, segment)
        if current is None:
            return None
    return current


class StateStore:
    """Single source of truth for application data.

    ``set`` is the only write path: every mutation publishes a global
    ``"state:change"`` event on the bus first, then notifies the
    subscribers registered for the exact path that changed.
    """

    def __init__(
        self, bus: EventBus, initial_state: Mapping[str, Any] | None = None
    ) -> None:
        self._bus = bus
        self._initial: dict[str, Any] = deepcopy(
            dict(initial_state) if initial_state is not None else default_state()
        )
        self._state: dict[str, Any] = deepcopy(self._initial)
        self._subscribers = SubscriberTable(
            logger=LOGGER, key_name="path", failure_event="state.subscriber_failed"
        )

    @property
    def bus(self) -> EventBus:
        return self._bus

    def get(self, path: str | None = None) -> Any:
        """Return the value at ``path``, or the whole tree when no path is given.

        The whole tree is returned by reference. Missing segments and paths
        that are not strings yield None.
        """
        return _lookup(self._state, path)

    def initial(self, path: str | None = None) -> Any:
        """Return a copy of the value ``path`` had when the store was created."""
        return deepcopy(_lookup(self._initial, path))

    def set(self, path: str, value: Any) -> None:
        """Assign ``value`` at ``path``, creating intermediate dicts as needed."""
        segments = split_path(path)
        *parents, last = segments

        target: Any = self._state
        for segment in parents:
            target = self._descend(target, segment, path)

        if isinstance(target, MutableMapping):
            old_value = target.get(last)
            target[last] = value
        else:
            position = _index(last, target)
            if position is None:
                raise InvalidPathError(
                    f"Index {last!r} in state path {path!r} is out of range."
                )
            old_value = target[position]
            target[position] = value

        LOGGER.debug("State changed: %s", path)
        self._bus.publish(
            STATE_CHANGE,
            StateChange(path=path, value=value, old_value=old_value, full_state=self._state),
        )
        self._subscribers.dispatch(path, value, old_value, path)

    @staticmethod
    def _descend(container: Any, segment: str, path: str) -> Any:
        if isinstance(container, MutableMapping):
            child = container.get(segment)
            if not isinstance(child, (MutableMapping, MutableSequence)):
                child = container[segment] = {}
            return child
        position = _index(segment, container)
        if position is None:
            raise InvalidPathError(
                f"Index {segment!r} in state path {path!r} is out of range."
            )
        child = container[position]
        if not isinstance(child, (MutableMapping, MutableSequence)):
            child = container[position] = {}
        return child

    def subscribe(self, path: str, callback: Callable[..., Any]) -> Unsubscribe:
        """Notify ``callback(value, old_value, path)`` when exactly ``path`` is set.

        No prefix or wildcard matching: a subscriber on ``"fuel"`` is not
        notified by ``set("fuel.jarak", ...)``.
        """
        return self._subscribers.add(path, callback)

    def subscriber_count(self, path: str) -> int:
        return self._subscribers.count(path)

    def reset(self, path: str, initial_value: Any) -> None:
        """Replace a subtree with a copy of ``initial_value`` through ``set``."""
        self.set(path, deepcopy(initial_value))

    def restore_defaults(self) -> None:
        """Reset the earnings input sections to the shape the store started with."""
        for section in RESETTABLE_SECTIONS:
            if section in self._initial:
                self.reset(section, self._initial[section])
