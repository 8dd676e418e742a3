"""Process-wide bus and store, built once at startup and passed around."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any

from .config import DEFAULT_CONFIG, VALID_VIEWS
from .events.bus import EventBus, Unsubscribe
from .events.domain import NAVIGATE
from .state import StateStore, default_state

LOGGER = logging.getLogger(__name__)


@dataclass
class Runtime:
    """The shared event bus and state store of one running dashboard."""

    bus: EventBus
    store: StateStore
    _wiring: list[Unsubscribe] = field(default_factory=list, repr=False)

    def navigate(self, view: str) -> None:
        self.bus.publish(NAVIGATE, view)

    def close(self) -> None:
        """Drop the runtime's own subscriptions."""
        wiring, self._wiring = self._wiring, []
        for unsubscribe in wiring:
            unsubscribe()


def create_runtime(config: dict[str, Any] | None = None) -> Runtime:
    """Build the bus and a store seeded from ``config`` and wire navigation."""
    config = config or DEFAULT_CONFIG
    fuel = config.get("fuel", DEFAULT_CONFIG["fuel"])
    ui = config.get("ui", DEFAULT_CONFIG["ui"])

    bus = EventBus()
    store = StateStore(
        bus,
        default_state(
            fuel_consumption=fuel["consumption_km_per_liter"],
            fuel_price=fuel["price_per_liter"],
            settings=config.get("settings"),
            initial_view=ui["initial_view"],
        ),
    )
    runtime = Runtime(bus=bus, store=store)

    def on_navigate(view: Any) -> None:
        if view not in VALID_VIEWS:
            LOGGER.warning("Ignoring navigation to unknown view %r", view)
            return
        store.set("ui.current_view", view)

    runtime._wiring.append(bus.subscribe(NAVIGATE, on_navigate))
    return runtime
