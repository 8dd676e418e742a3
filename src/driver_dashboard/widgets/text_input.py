"""Single-line input field."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..component import Component, ComponentConfig
from ..dom import DomEvent, Element


class TextInputConfig(ComponentConfig):
    placeholder: str = ""
    input_type: str = "text"
    value: str = ""
    class_name: str = ""
    on_input: Callable[[str], Any] | None = None


class TextInput(Component):
    """Input field that keeps its current value across re-renders.

    ``value`` in the configuration is only the starting value; afterwards the
    value changes through user input or ``set_value``.
    """

    config_model = TextInputConfig

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._value: str = self.config.value
        self._element: Element | None = None

    @property
    def value(self) -> str:
        return self._value

    def render(self) -> Element:
        config = self.config
        element = self.create_element(
            "input",
            {
                "type": config.input_type,
                "placeholder": config.placeholder,
                "value": self._value,
                "class_name": f"input {config.class_name}".strip(),
            },
        )
        self.bind_external_event(element, "input", self._handle_input)
        self._element = element
        return element

    def before_unmount(self) -> None:
        self._element = None

    def _handle_input(self, event: DomEvent) -> None:
        self._value = event.target.value
        if self.config.on_input is not None:
            self.config.on_input(self._value)

    def set_value(self, value: Any) -> None:
        """Change the value without re-rendering or firing ``on_input``."""
        self._value = "" if value is None else str(value)
        if self._element is not None:
            self._element.value = self._value

    def focus(self) -> None:
        if self._element is not None:
            self._element.focus()

    def type_text(self, text: str) -> None:
        """Replace the value as a user would and fire the input event."""
        if self._element is None:
            self.set_value(text)
            return
        self._element.value = text
        self._element.dispatch_event("input")
