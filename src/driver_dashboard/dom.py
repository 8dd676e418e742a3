"""Minimal element tree that components render into.

Nodes form a single-parent tree. Appending a node that already has a parent
moves it, and listeners are plain callables keyed by event type.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)

EventHandler = Callable[["DomEvent"], Any]


@dataclass
class DomEvent:
    """Event delivered to element listeners."""

    type: str
    target: Element
    detail: Any = None
    propagation_stopped: bool = field(default=False, init=False)

    def stop(self) -> None:
        self.propagation_stopped = True


class Node:
    """Base tree node."""

    def __init__(self) -> None:
        self.parent: Element | None = None

    @property
    def attached(self) -> bool:
        return self.parent is not None

    def detach(self) -> None:
        """Remove this node from its parent, if any."""
        if self.parent is not None:
            self.parent.remove_child(self)

    def walk(self) -> Iterator[Node]:
        yield self

    @property
    def text_content(self) -> str:
        return ""


class TextNode(Node):
    def __init__(self, text: str) -> None:
        super().__init__()
        self.text = str(text)

    @property
    def text_content(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"TextNode({self.text!r})"


class Element(Node):
    """Tagged node with attributes, children and event listeners."""

    def __init__(
        self,
        tag: str,
        attributes: dict[str, Any] | None = None,
        *,
        element_id: str | None = None,
        class_name: str = "",
    ) -> None:
        super().__init__()
        self.tag = tag
        self.attributes: dict[str, Any] = dict(attributes or {})
        self.element_id = element_id
        self.class_name = class_name
        self.children: list[Node] = []
        self.focused = False
        self._listeners: dict[str, list[EventHandler]] = {}

    def __repr__(self) -> str:
        suffix = f"#{self.element_id}" if self.element_id else ""
        return f"Element({self.tag}{suffix}, children={len(self.children)})"

    # -- tree ---------------------------------------------------------------

    def append_child(self, child: Node) -> Node:
        if child is self or (isinstance(child, Element) and self in child.walk()):
            raise ValueError("Cannot append a node to itself or its descendants.")
        child.detach()
        self.children.append(child)
        child.parent = self
        return child

    def insert_child(self, index: int, child: Node) -> Node:
        if child is self or (isinstance(child, Element) and self in child.walk()):
            raise ValueError("Cannot insert a node into itself or its descendants.")
        child.detach()
        self.children.insert(index, child)
        child.parent = self
        return child

    def remove_child(self, child: Node) -> Node:
        self.children.remove(child)
        child.parent = None
        return child

    def replace_child(self, new_child: Node, old_child: Node) -> Node:
        """Put ``new_child`` where ``old_child`` sits and detach ``old_child``."""
        if old_child.parent is not self:
            raise ValueError("Node to replace is not a child of this element.")
        if new_child is old_child:
            return old_child
        new_child.detach()
        position = self.children.index(old_child)
        self.children[position] = new_child
        old_child.parent = None
        new_child.parent = self
        return old_child

    def walk(self) -> Iterator[Node]:
        yield self
        for child in self.children:
            yield from child.walk()

    def query_one(self, selector: str) -> Element | None:
        """Find the first descendant-or-self matching ``#id`` or a tag name."""
        for node in self.walk():
            if not isinstance(node, Element):
                continue
            if selector.startswith("#"):
                if node.element_id == selector[1:]:
                    return node
            elif node.tag == selector:
                return node
        return None

    @property
    def text_content(self) -> str:
        return "".join(child.text_content for child in self.children)

    # -- attributes ---------------------------------------------------------

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = value

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    @property
    def value(self) -> str:
        return str(self.attributes.get("value", ""))

    @value.setter
    def value(self, new_value: Any) -> None:
        self.attributes["value"] = "" if new_value is None else str(new_value)

    def focus(self) -> None:
        self.focused = True

    # -- events -------------------------------------------------------------

    def add_event_listener(self, event_type: str, handler: EventHandler) -> None:
        self._listeners.setdefault(event_type, []).append(handler)

    def remove_event_listener(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._listeners.get(event_type)
        if not handlers:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            return
        if not handlers:
            del self._listeners[event_type]

    def listener_count(self, event_type: str | None = None) -> int:
        if event_type is not None:
            return len(self._listeners.get(event_type, ()))
        return sum(len(handlers) for handlers in self._listeners.values())

    def dispatch_event(self, event_type: str, detail: Any = None) -> DomEvent:
        """Run the listeners for ``event_type`` here, then bubble to ancestors.

        A failing listener is logged and does not stop the others.
        """
        event = DomEvent(type=event_type, target=self, detail=detail)
        node: Element | None = self
        while node is not None and not event.propagation_stopped:
            for handler in list(node._listeners.get(event_type, ())):
                try:
                    handler(event)
                except Exception:
                    LOGGER.exception(
                        "Listener failed for %s on <%s>",
                        event_type,
                        node.tag,
                        extra={"event": "dom.listener_failed", "event_type": event_type},
                    )
            node = node.parent
        return event


def render_text(node: Node, indent: int = 0) -> str:
    """Render a subtree as indented plain text for terminal display."""
    lines: list[str] = []
    _render_lines(node, indent, lines)
    return "\n".join(lines)


def _render_lines(node: Node, depth: int, lines: list[str]) -> None:
    pad = "  " * depth
    if isinstance(node, TextNode):
        if node.text.strip():
            lines.append(f"{pad}{node.text}")
        return
    if not isinstance(node, Element):
        return
    if node.tag == "input":
        placeholder = node.get_attribute("placeholder", "")
        lines.append(f"{pad}[{node.value or placeholder}]")
        return
    if node.tag == "button":
        marker = " (disabled)" if node.get_attribute("disabled") else ""
        lines.append(f"{pad}< {node.text_content} >{marker}")
        return
    inline = all(isinstance(child, TextNode) for child in node.children)
    if inline:
        text = node.text_content
        if text.strip():
            lines.append(f"{pad}{text}")
        return
    for child in node.children:
        _render_lines(child, depth + 1 if node.tag == "section" else depth, lines)
