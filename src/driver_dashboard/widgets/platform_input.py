"""Per-platform balance inputs."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from .. import earnings
from ..component import Component, ComponentConfig
from ..dom import Element
from ..state import PLATFORMS
from .label import Label
from .text_input import TextInput


class PlatformInputConfig(ComponentConfig):
    platform: str = PLATFORMS[0]
    emoji: str = ""

    @field_validator("platform", mode="before")
    @classmethod
    def _validate_platform(cls, value: Any) -> str:
        if not isinstance(value, str) or value.strip().lower() not in PLATFORMS:
            raise ValueError(f"platform must be one of {', '.join(PLATFORMS)}.")
        return value.strip().lower()


class PlatformInput(Component):
    """Top-up and remaining balance for one platform; gross is their difference."""

    config_model = PlatformInputConfig

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.topup_input = TextInput(
            placeholder="0",
            input_type="number",
            class_name="currency-input",
            on_input=lambda _value: self.calculate_and_update(),
        )
        self.sisa_input = TextInput(
            placeholder="0",
            input_type="number",
            class_name="currency-input",
            on_input=lambda _value: self.calculate_and_update(),
        )

    def calculate_and_update(self) -> None:
        earnings.update_platform(
            self._require_store(),
            self.config.platform,
            {
                "topup": earnings.parse_amount(self.topup_input.value, integer=True),
                "sisa": earnings.parse_amount(self.sisa_input.value, integer=True),
            },
        )

    def render(self) -> Element:
        config = self.config
        return self.create_element(
            "section",
            {"id": f"platform-{config.platform}", "class_name": "card"},
            Label(text=config.platform.capitalize(), icon=config.emoji),
            self.create_element(
                "div",
                {"class_name": "grid"},
                self.create_element(
                    "div",
                    None,
                    Label(text="Top-up", description="Jumlah saldo yang di-top up hari ini"),
                    self.topup_input,
                ),
                self.create_element(
                    "div",
                    None,
                    Label(text="Sisa", description="Saldo yang tersisa di akhir hari"),
                    self.sisa_input,
                ),
            ),
        )
