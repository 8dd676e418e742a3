"""Status badge."""

from __future__ import annotations

from ..component import Component, ComponentConfig
from ..dom import Element


class BadgeConfig(ComponentConfig):
    text: str = ""
    variant: str = "badge-primary"
    size: str = ""
    outline: bool = False
    class_name: str = ""


class Badge(Component):
    config_model = BadgeConfig

    def render(self) -> Element:
        config = self.config
        classes = " ".join(
            part
            for part in (
                "badge",
                config.variant,
                config.size,
                "badge-outline" if config.outline else "",
                config.class_name,
            )
            if part
        )
        return self.create_element("div", {"class_name": classes}, config.text)

    def set_text(self, text: str) -> None:
        self.update(text=text)

    def set_variant(self, variant: str) -> None:
        self.update(variant=variant)
