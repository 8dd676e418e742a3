"""Textual host for the dashboard component tree."""

from __future__ import annotations

import logging
from typing import Any

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Button, Footer, Header, Input, Static

from . import earnings
from .config import load_config
from .dom import Element, render_text
from .events.bus import Unsubscribe
from .formatting import display_value
from .logging_utils import configure_logging
from .runtime import Runtime, create_runtime
from .state import PLATFORMS
from .widgets import AdditionalCosts, FuelInput, PlatformInput, ResultsSummary, TextInput
from .widgets.additional_costs import COST_INPUT_FIELDS, PRESET_LABELS
from .widgets.fuel_input import FUEL_FIELDS

LOGGER = logging.getLogger(__name__)

PLATFORM_EMOJI: dict[str, str] = {
    "grab": "🟢",
    "maxim": "🟡",
    "gojek": "🛵",
    "indrive": "🔵",
}


class DashboardApp(App[None]):
    """Earnings dashboard: terminal inputs drive components, the summary is rendered as text."""

    CSS = """
    Screen {
        layout: vertical;
        background: $background;
    }

    #dashboard {
        height: 1fr;
    }

    #inputs {
        width: 1fr;
        padding: 0 1;
        border-right: solid $panel;
    }

    #inputs Input {
        margin-bottom: 1;
    }

    #presets {
        height: auto;
        margin-bottom: 1;
    }

    #presets Button {
        min-width: 12;
        margin-right: 1;
    }

    .section-title {
        margin-top: 1;
        text-style: bold;
    }

    #summary {
        width: 1fr;
        padding: 1 2;
    }
    """

    BINDINGS = [
        Binding("ctrl+r", "reset", "Reset"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self, config: dict[str, Any] | None = None, runtime: Runtime | None = None
    ) -> None:
        super().__init__()
        self.config = config if config is not None else load_config()
        configure_logging(self.config["logging"])
        self.title = str(self.config["app"]["title"])
        self.runtime = runtime or create_runtime(self.config)

        bus, store = self.runtime.bus, self.runtime.store
        self.root_element = Element("main", element_id="dashboard-root")
        self.fuel_input = FuelInput(bus=bus, store=store)
        self.platform_inputs = {
            name: PlatformInput(platform=name, emoji=PLATFORM_EMOJI[name], bus=bus, store=store)
            for name in PLATFORMS
        }
        self.additional_costs = AdditionalCosts(bus=bus, store=store)
        self.summary = ResultsSummary(bus=bus, store=store)
        self.summary_text = ""
        self._unsubscribe_results: Unsubscribe | None = None

        self._field_inputs: dict[str, TextInput] = {
            f"fuel-{key}": self.fuel_input.inputs[key] for key, *_rest in FUEL_FIELDS
        }
        for name, component in self.platform_inputs.items():
            self._field_inputs[f"{name}-topup"] = component.topup_input
            self._field_inputs[f"{name}-sisa"] = component.sisa_input
        for key, text_input in self.additional_costs.inputs.items():
            self._field_inputs[f"cost-{key}"] = text_input

    def compose(self) -> ComposeResult:
        """Compose app widgets."""
        yield Header()
        with Horizontal(id="dashboard"):
            with VerticalScroll(id="inputs"):
                yield Static("⛽ Data BBM & Jarak", classes="section-title")
                for key, caption, _icon, _hint, placeholder in FUEL_FIELDS:
                    yield Input(
                        value=self._field_inputs[f"fuel-{key}"].value,
                        placeholder=f"{caption} ({placeholder})",
                        id=f"fuel-{key}",
                    )
                for name in PLATFORMS:
                    yield Static(
                        f"{PLATFORM_EMOJI[name]} {name.capitalize()}",
                        classes="section-title",
                    )
                    yield Input(placeholder="Top-up", id=f"{name}-topup")
                    yield Input(placeholder="Sisa", id=f"{name}-sisa")
                yield Static("💸 Biaya Tambahan", classes="section-title")
                with Horizontal(id="presets"):
                    for name, text in PRESET_LABELS.items():
                        yield Button(text, id=f"preset-{name}")
                for key, caption, _icon, _hint in COST_INPUT_FIELDS:
                    yield Input(placeholder=caption, id=f"cost-{key}")
            yield Static(id="summary")
        yield Footer()

    def on_mount(self) -> None:
        """Mount the component tree and redraw the summary whenever results change."""
        self.fuel_input.mount(self.root_element)
        for component in self.platform_inputs.values():
            component.mount(self.root_element)
        self.additional_costs.mount(self.root_element)
        self.summary.mount(self.root_element)
        # Registered after the summary so its re-render has already happened.
        self._unsubscribe_results = self.runtime.store.subscribe(
            "results", self._refresh_summary
        )
        self._refresh_summary()

    def on_unmount(self) -> None:
        """Release component resources and subscriptions."""
        if self._unsubscribe_results is not None:
            self._unsubscribe_results()
            self._unsubscribe_results = None
        self.summary.unmount()
        self.additional_costs.unmount()
        for component in self.platform_inputs.values():
            component.unmount()
        self.fuel_input.unmount()
        self.runtime.close()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Forward terminal input to the matching component input."""
        target = self._field_inputs.get(event.input.id or "")
        if target is None:
            return
        target.type_text(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Apply an additional cost preset and show its values in the inputs."""
        button_id = event.button.id or ""
        preset = self.additional_costs.preset_buttons.get(button_id.removeprefix("preset-"))
        if preset is None:
            return
        preset.click()
        self._sync_inputs()

    def _sync_inputs(self) -> None:
        for input_id, component in self._field_inputs.items():
            widget = self.query_one(f"#{input_id}", Input)
            if widget.value == component.value:
                continue
            with widget.prevent(Input.Changed):
                widget.value = component.value

    def _refresh_summary(self) -> None:
        node = self.summary.node
        self.summary_text = render_text(node) if node is not None else ""
        self.query_one("#summary", Static).update(Text(self.summary_text))

    def action_reset(self) -> None:
        """Restore default inputs and recompute results."""
        earnings.reset_earnings(self.runtime.store)
        fuel = self.runtime.store.get("fuel") or {}
        for input_id, component in self._field_inputs.items():
            value = ""
            if input_id.startswith("fuel-"):
                value = display_value(fuel.get(input_id.removeprefix("fuel-")))
            component.set_value(value)
        self._sync_inputs()
        LOGGER.info("Dashboard inputs reset", extra={"event": "app.reset"})
