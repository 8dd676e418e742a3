"""Field caption with optional icon and helper text."""

from __future__ import annotations

from ..component import Component, ComponentConfig
from ..dom import Element


class LabelConfig(ComponentConfig):
    text: str = ""
    icon: str = ""
    description: str = ""


class Label(Component):
    config_model = LabelConfig

    def render(self) -> Element:
        config = self.config
        caption = f"{config.icon} {config.text}".strip()
        return self.create_element(
            "label",
            {"class_name": "label"},
            self.create_element("span", {"class_name": "label-text"}, caption),
            self.create_element(
                "span", {"class_name": "label-text-alt"}, config.description
            )
            if config.description
            else None,
        )
