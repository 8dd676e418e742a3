"""Clickable button."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..component import Component, ComponentConfig
from ..dom import DomEvent, Element


class ButtonConfig(ComponentConfig):
    text: str = ""
    variant: str = "btn-primary"
    disabled: bool = False
    on_click: Callable[[DomEvent], Any] | None = None


class Button(Component):
    """Button that forwards clicks to ``on_click`` unless disabled."""

    config_model = ButtonConfig

    def render(self) -> Element:
        config = self.config
        element = self.create_element(
            "button",
            {"class_name": f"btn {config.variant}".strip(), "disabled": config.disabled},
            config.text,
        )
        self.bind_external_event(element, "click", self._handle_click)
        return element

    def _handle_click(self, event: DomEvent) -> None:
        if self.config.disabled or self.config.on_click is None:
            return
        self.config.on_click(event)

    def click(self) -> None:
        """Simulate a click on the rendered element."""
        if isinstance(self.node, Element):
            self.node.dispatch_event("click")
