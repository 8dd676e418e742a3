"""Daily running costs with one-click presets."""

from __future__ import annotations

from typing import Any

from .. import earnings
from ..component import Component, ComponentConfig
from ..dom import Element
from ..formatting import display_value, format_currency
from .button import Button
from .label import Label
from .text_input import TextInput

# (state key, caption, icon, hint)
COST_INPUT_FIELDS: tuple[tuple[str, str, str, str], ...] = (
    ("parkir", "Parkir", "🅿️", "Biaya parkir harian"),
    ("makan", "Makan & Minum", "🍽️", "Biaya konsumsi harian"),
    ("kuota", "Kuota Internet", "📱", "Biaya kuota data harian"),
    ("tol", "Tol", "🛣️", "Biaya tol (jika ada)"),
    ("lainnya", "Lainnya", "📝", "Biaya lain-lain"),
)

PRESET_LABELS: dict[str, str] = {
    "hemat": "💰 Hemat (15k)",
    "normal": "🍽️ Normal (35k)",
    "lengkap": "🛣️ Lengkap (55k)",
}


class AdditionalCostsConfig(ComponentConfig):
    title: str = "Biaya Tambahan"
    icon: str = "💸"


class AdditionalCosts(Component):
    """Cost inputs written to ``additional_costs``; presets fill them in at once."""

    config_model = AdditionalCostsConfig

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        costs = (self.get_state("additional_costs") if self.store is not None else None) or {}
        self.inputs: dict[str, TextInput] = {
            key: TextInput(
                placeholder="0",
                input_type="number",
                value=display_value(costs.get(key)),
                class_name="currency-input",
                on_input=lambda _value: self.calculate_and_update(),
            )
            for key, _caption, _icon, _hint in COST_INPUT_FIELDS
        }
        self.preset_buttons: dict[str, Button] = {
            name: Button(
                text=text,
                variant="btn-xs btn-outline",
                on_click=lambda _event, name=name: self.apply_preset(name),
            )
            for name, text in PRESET_LABELS.items()
        }

    def before_mount(self) -> None:
        self.subscribe_to_state("additional_costs", lambda _costs: self.update())

    def calculate_and_update(self) -> None:
        earnings.update_additional_costs(
            self._require_store(),
            {
                key: earnings.parse_amount(self.inputs[key].value, integer=True)
                for key in self.inputs
            },
        )

    def apply_preset(self, name: str) -> None:
        earnings.apply_cost_preset(self._require_store(), name)
        costs = self.get_state("additional_costs") or {}
        for key, text_input in self.inputs.items():
            text_input.set_value(display_value(costs.get(key)))

    def render(self) -> Element:
        config = self.config
        total = (self.get_state("additional_costs") or {}).get("total", 0)
        rows = [
            self.create_element(
                "div",
                None,
                Label(text=caption, icon=icon, description=hint),
                self.inputs[key],
            )
            for key, caption, icon, hint in COST_INPUT_FIELDS
        ]
        return self.create_element(
            "section",
            {"id": "additional-costs", "class_name": "card"},
            Label(text=config.title, icon=config.icon),
            self.create_element(
                "div", {"class_name": "presets"}, list(self.preset_buttons.values())
            ),
            self.create_element("div", {"class_name": "grid"}, rows),
            self.create_element(
                "div",
                {"id": "additional-total", "class_name": "row total"},
                f"Total Biaya Tambahan: Rp {format_currency(total)}",
            ),
        )
