"""Event bus for decoupled component communication.

Usage:
    bus = EventBus()

    def on_navigate(view):
        print(f"Navigating to {view}")

    unsubscribe = bus.subscribe("navigate", on_navigate)

    bus.publish("navigate", "analytics")
    unsubscribe()

Delivery is synchronous. A callback that publishes again runs the nested
publish to completion before the outer publish moves on to its next
callback (depth-first).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import inspect
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)

Unsubscribe = Callable[[], None]


def positional_capacity(callback: Callable[..., Any]) -> int | None:
    """Return how many positional arguments ``callback`` accepts.

    ``None`` means unbounded (``*args``) or unknown, in which case every
    argument is passed through.
    """
    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return None
    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


@dataclass(eq=False)
class _Registration:
    callback: Callable[..., Any]
    capacity: int | None
    active: bool = True

    def invoke(self, args: tuple[Any, ...]) -> None:
        if self.capacity is not None:
            args = args[: self.capacity]
        self.callback(*args)


class SubscriberTable:
    """Ordered callback registrations grouped by key.

    Shared by the event bus (keyed by topic) and the state store (keyed by
    exact path). A key with no registrations left is dropped from the table.
    """

    def __init__(
        self, *, logger: logging.Logger, key_name: str, failure_event: str
    ) -> None:
        self._logger = logger
        self._key_name = key_name
        self._failure_event = failure_event
        self._entries: dict[str, list[_Registration]] = {}

    def add(self, key: str, callback: Callable[..., Any]) -> Unsubscribe:
        if not callable(callback):
            raise TypeError(f"callback for {self._key_name} {key!r} is not callable")
        registration = _Registration(callback, positional_capacity(callback))
        self._entries.setdefault(key, []).append(registration)

        def unsubscribe() -> None:
            if not registration.active:
                return
            registration.active = False
            registrations = self._entries.get(key)
            if registrations is None:
                return
            try:
                registrations.remove(registration)
            except ValueError:
                return
            if not registrations:
                del self._entries[key]

        return unsubscribe

    def discard(self, key: str) -> None:
        for registration in self._entries.pop(key, []):
            registration.active = False

    def clear(self) -> None:
        for key in list(self._entries):
            self.discard(key)

    def count(self, key: str) -> int:
        return len(self._entries.get(key, ()))

    def keys(self) -> list[str]:
        return list(self._entries)

    def dispatch(self, key: str, *args: Any) -> int:
        """Invoke the registrations of ``key`` in order; return how many ran.

        Iterates a snapshot, so registrations added while dispatching wait
        for the next dispatch and registrations removed before being reached
        are skipped.
        """
        registrations = self._entries.get(key)
        if not registrations:
            return 0
        delivered = 0
        for registration in list(registrations):
            if not registration.active:
                continue
            delivered += 1
            try:
                registration.invoke(args)
            except Exception:
                self._logger.exception(
                    "Callback failed for %s %r",
                    self._key_name,
                    key,
                    extra={"event": self._failure_event, self._key_name: key},
                )
        return delivered


class EventBus:
    """Process-wide publish/subscribe bus.

    Construct one per process and hand it to the components and stores that
    need it.
    """

    def __init__(self) -> None:
        self._subscribers = SubscriberTable(
            logger=LOGGER, key_name="topic", failure_event="bus.callback_failed"
        )

    def subscribe(self, topic: str, callback: Callable[..., Any]) -> Unsubscribe:
        """Subscribe to a topic.

        Args:
            topic: Topic to listen for (e.g., "state:change")
            callback: Called with the published data, or with no argument
                when it accepts none

        Returns:
            A handle removing exactly this registration; safe to call twice.
        """
        unsubscribe = self._subscribers.add(topic, callback)
        LOGGER.debug("Subscribed to topic: %s", topic)
        return unsubscribe

    def subscribe_once(
        self, topic: str, callback: Callable[..., Any]
    ) -> Unsubscribe:
        """Subscribe for a single delivery.

        The registration is removed before ``callback`` runs, so publishing
        the same topic from inside the callback does not reach it again.
        """
        capacity = positional_capacity(callback)

        def deliver_once(data: Any = None) -> None:
            unsubscribe()
            if capacity == 0:
                callback()
            else:
                callback(data)

        unsubscribe = self.subscribe(topic, deliver_once)
        return unsubscribe

    def publish(self, topic: str, data: Any = None) -> None:
        """Deliver ``data`` to every subscriber of ``topic`` in order.

        Callback exceptions are logged and never reach the caller.
        """
        delivered = self._subscribers.dispatch(topic, data)
        if not delivered:
            LOGGER.debug("No subscribers for topic: %s", topic)

    def unsubscribe_topic(self, topic: str) -> None:
        """Remove every registration for ``topic``."""
        self._subscribers.discard(topic)

    def reset(self) -> None:
        """Remove every topic and registration."""
        self._subscribers.clear()

    def has_subscribers(self, topic: str) -> bool:
        return self._subscribers.count(topic) > 0

    def subscriber_count(self, topic: str) -> int:
        return self._subscribers.count(topic)

    def topics(self) -> list[str]:
        return self._subscribers.keys()
