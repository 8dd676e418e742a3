"""Fuel and distance inputs feeding the fuel cost calculation."""

from __future__ import annotations

from typing import Any

from .. import earnings
from ..component import Component, ComponentConfig
from ..dom import Element
from ..formatting import display_value
from .label import Label
from .text_input import TextInput

# (state key, caption, icon, hint, placeholder)
FUEL_FIELDS: tuple[tuple[str, str, str, str, str], ...] = (
    ("jarak", "Jarak Tempuh (km)", "📏", "Reset Trip A di pagi hari, catat di sore hari", "0"),
    ("konsumsi", "Konsumsi (km/liter)", "🛣️", "Rata-rata konsumsi kendaraan Anda", "14"),
    ("harga", "Harga BBM (Rp/liter)", "💰", "Harga BBM hari ini (cek struk SPBU)", "10000"),
)


class FuelInputConfig(ComponentConfig):
    title: str = "Data BBM & Jarak"
    icon: str = "⛽"


class FuelInput(Component):
    """Three numeric inputs whose changes are written to the ``fuel`` section."""

    config_model = FuelInputConfig

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        fuel = (self.get_state("fuel") if self.store is not None else None) or {}
        self.inputs: dict[str, TextInput] = {
            key: TextInput(
                placeholder=placeholder,
                input_type="number",
                value=display_value(fuel.get(key)),
                class_name="currency-input",
                on_input=lambda _value: self.calculate_and_update(),
            )
            for key, _caption, _icon, _hint, placeholder in FUEL_FIELDS
        }

    def calculate_and_update(self) -> None:
        store = self._require_store()
        konsumsi, harga = earnings.fuel_defaults(store)
        earnings.update_fuel(
            store,
            {
                "jarak": earnings.parse_amount(self.inputs["jarak"].value),
                "konsumsi": earnings.parse_amount(self.inputs["konsumsi"].value, konsumsi),
                "harga": earnings.parse_amount(self.inputs["harga"].value, harga, integer=True),
            },
        )

    def render(self) -> Element:
        config = self.config
        rows = [
            self.create_element(
                "div",
                None,
                Label(text=caption, icon=icon, description=hint),
                self.inputs[key],
            )
            for key, caption, icon, hint, _placeholder in FUEL_FIELDS
        ]
        return self.create_element(
            "section",
            {"id": "fuel-input", "class_name": "card"},
            Label(text=config.title, icon=config.icon),
            self.create_element("div", {"class_name": "grid"}, rows),
        )
