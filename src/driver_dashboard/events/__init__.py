"""Event bus and domain event payloads."""

from .bus import EventBus, SubscriberTable, Unsubscribe
from .domain import NAVIGATE, STATE_CHANGE, StateChange

__all__ = [
    "EventBus",
    "NAVIGATE",
    "STATE_CHANGE",
    "StateChange",
    "SubscriberTable",
    "Unsubscribe",
]
