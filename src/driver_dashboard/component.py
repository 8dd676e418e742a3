"""Component base class: lifecycle, rendering contract and resource tracking.

A component renders an element subtree it owns exclusively. Updates throw
the previous subtree away and render a fresh one in the same position; no
diffing is attempted. Every subscription and listener a component acquires
through its helpers is released when it unmounts.

Two error policies apply here. Exceptions raised by ``render`` and the
lifecycle hooks propagate to the caller of ``mount``/``update``/``unmount``.
Exceptions raised by bus and store callbacks are logged and isolated by the
bus and store themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from .dom import Element, EventHandler, Node, TextNode
from .events.bus import EventBus, Unsubscribe
from .exceptions import ComponentConfigError, ComponentError
from .state import StateStore

LOGGER = logging.getLogger(__name__)

ConfigT = TypeVar("ConfigT", bound="ComponentConfig")


class LifecycleState(str, Enum):
    """Lifecycle of a single component instance."""

    UNMOUNTED = "UNMOUNTED"
    MOUNTING = "MOUNTING"
    MOUNTED = "MOUNTED"
    UPDATING = "UPDATING"
    UNMOUNTING = "UNMOUNTING"


class ComponentConfig(BaseModel):
    """Base for component configuration.

    Subclasses declare the recognised options as typed fields with defaults.
    Instances are frozen: a render always sees one consistent configuration.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)


def _validate_config(model: type[ConfigT], data: Mapping[str, Any]) -> ConfigT:
    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        raise ComponentConfigError(
            f"Invalid configuration for {model.__name__}: {exc}"
        ) from exc


def merge_config(current: ConfigT, changes: Mapping[str, Any] | None) -> ConfigT:
    """Shallow-merge ``changes`` over ``current`` and re-validate."""
    if not changes:
        return current
    return _validate_config(type(current), {**dict(current), **changes})


@dataclass(frozen=True)
class BoundListener:
    node: Element
    event_type: str
    handler: EventHandler


class Component(ABC):
    """Base class for every dashboard component.

    Subclasses set ``config_model`` and implement ``render``. Listeners must
    be attached with ``bind_external_event`` (or ``on_<event>`` attributes
    passed to ``create_element``) and subscriptions taken with
    ``subscribe_to_state``/``subscribe_to_bus`` so unmount can release them.
    """

    config_model: ClassVar[type[ComponentConfig]] = ComponentConfig

    def __init__(
        self,
        config: Mapping[str, Any] | ComponentConfig | None = None,
        *,
        bus: EventBus | None = None,
        store: StateStore | None = None,
        **fields: Any,
    ) -> None:
        if isinstance(config, ComponentConfig):
            if not isinstance(config, self.config_model):
                raise ComponentConfigError(
                    f"{type(self).__name__} expects {self.config_model.__name__}, "
                    f"got {type(config).__name__}."
                )
            self._config = merge_config(config, fields)
        else:
            self._config = _validate_config(self.config_model, {**(config or {}), **fields})

        self._bus = bus
        self._store = store
        self._lifecycle = LifecycleState.UNMOUNTED
        self._node: Node | None = None
        self._subscriptions: list[Unsubscribe] = []
        self._listeners: list[BoundListener] = []
        self._children: list[Component] = []
        self._rendering_children: list[Component] | None = None
        self._rendering_moves: list[tuple[Node, Element | None, int]] | None = None
        self._rendering_listeners: list[BoundListener] | None = None
        # Listeners bound by the most recent successful render.
        self._render_listeners: list[BoundListener] = []

    # -- introspection ------------------------------------------------------

    @property
    def config(self) -> Any:
        return self._config

    @property
    def lifecycle(self) -> LifecycleState:
        return self._lifecycle

    @property
    def mounted(self) -> bool:
        return self._lifecycle in (
            LifecycleState.MOUNTED,
            LifecycleState.UPDATING,
            LifecycleState.UNMOUNTING,
        )

    @property
    def node(self) -> Node | None:
        return self._node

    @property
    def children(self) -> list[Component]:
        return list(self._children)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    @property
    def bus(self) -> EventBus | None:
        if self._bus is None and self._store is not None:
            return self._store.bus
        return self._bus

    @property
    def store(self) -> StateStore | None:
        return self._store

    # -- hooks --------------------------------------------------------------

    def before_mount(self) -> None:
        """Called before the first render."""

    def after_mount(self) -> None:
        """Called once the node exists and is attached."""

    def before_unmount(self) -> None:
        """Called before subscriptions and listeners are released."""

    @abstractmethod
    def render(self) -> Node:
        """Build and return a fresh subtree from the current configuration."""

    # -- lifecycle ----------------------------------------------------------

    def mount(self, parent: Element | None = None) -> Node | None:
        """Render and optionally attach to ``parent``; no-op when mounted."""
        if self._lifecycle is not LifecycleState.UNMOUNTED:
            return self._node

        self._lifecycle = LifecycleState.MOUNTING
        try:
            self.before_mount()
            node, children, listeners = self._render_tracked()
        except Exception:
            self._release()
            self._lifecycle = LifecycleState.UNMOUNTED
            raise

        if parent is not None:
            parent.append_child(node)
        self._node = node
        self._children = children
        self._render_listeners = listeners
        self._lifecycle = LifecycleState.MOUNTED
        LOGGER.debug("Mounted %s", type(self).__name__)
        self.after_mount()
        return node

    def update(self, changes: Mapping[str, Any] | None = None, /, **fields: Any) -> None:
        """Merge configuration changes and, when mounted, re-render in place."""
        previous_config = self._config
        self._config = merge_config(self._config, {**(changes or {}), **fields})
        if self._lifecycle is not LifecycleState.MOUNTED or self._node is None:
            return

        old_node = self._node
        self._lifecycle = LifecycleState.UPDATING
        try:
            new_node, children, listeners = self._render_tracked()
        except Exception:
            self._config = previous_config
            raise
        finally:
            self._lifecycle = LifecycleState.MOUNTED

        # Listeners bound outside render (hooks, helpers) stay until unmount.
        self._detach_listeners(self._render_listeners)
        self._render_listeners = listeners
        parent = old_node.parent
        if parent is not None:
            parent.replace_child(new_node, old_node)
        self._node = new_node

        for child in self._children:
            if not any(child is kept for kept in children):
                child.unmount()
        self._children = children

    def unmount(self) -> None:
        """Release everything the component owns; no-op when not mounted."""
        if self._lifecycle is not LifecycleState.MOUNTED:
            return

        self._lifecycle = LifecycleState.UNMOUNTING
        try:
            self.before_unmount()
        finally:
            self._release()
            if self._node is not None:
                self._node.detach()
            self._node = None
            self._lifecycle = LifecycleState.UNMOUNTED
            LOGGER.debug("Unmounted %s", type(self).__name__)

    def _render_tracked(self) -> tuple[Node, list[Component], list[BoundListener]]:
        outer_children = self._rendering_children
        outer_moves = self._rendering_moves
        outer_listeners = self._rendering_listeners
        self._rendering_children = []
        self._rendering_moves = []
        self._rendering_listeners = []
        try:
            node = self.render()
            if not isinstance(node, Node):
                raise ComponentError(
                    f"{type(self).__name__}.render() returned {type(node).__name__}, "
                    "expected a Node."
                )
        except Exception:
            # Put reused children back where the previous render had them.
            for moved, parent, index in reversed(self._rendering_moves):
                if parent is None:
                    moved.detach()
                else:
                    parent.insert_child(index, moved)
            for child in self._rendering_children:
                if not any(child is existing for existing in self._children):
                    child.unmount()
            self._detach_listeners(self._rendering_listeners)
            raise
        else:
            return node, self._rendering_children, self._rendering_listeners
        finally:
            self._rendering_children = outer_children
            self._rendering_moves = outer_moves
            self._rendering_listeners = outer_listeners

    def _release(self) -> None:
        children, self._children = self._children, []
        for child in children:
            child.unmount()

        subscriptions, self._subscriptions = self._subscriptions, []
        for unsubscribe in subscriptions:
            unsubscribe()

        self._detach_listeners(list(self._listeners))
        self._render_listeners = []

    def _detach_listeners(self, listeners: Iterable[BoundListener]) -> None:
        doomed = list(listeners)
        for bound in doomed:
            bound.node.remove_event_listener(bound.event_type, bound.handler)
        if doomed:
            self._listeners = [
                bound
                for bound in self._listeners
                if not any(bound is gone for gone in doomed)
            ]

    # -- helpers ------------------------------------------------------------

    def bind_external_event(
        self, node: Element, event_type: str, handler: EventHandler
    ) -> None:
        """Attach ``handler`` to ``node`` and track it for cleanup."""
        node.add_event_listener(event_type, handler)
        bound = BoundListener(node, event_type, handler)
        self._listeners.append(bound)
        if self._rendering_listeners is not None:
            self._rendering_listeners.append(bound)

    def subscribe_to_state(
        self, path: str, callback: Callable[..., Any]
    ) -> Unsubscribe:
        unsubscribe = self._require_store().subscribe(path, callback)
        self._subscriptions.append(unsubscribe)
        return unsubscribe

    def subscribe_to_bus(self, topic: str, callback: Callable[..., Any]) -> Unsubscribe:
        unsubscribe = self._require_bus().subscribe(topic, callback)
        self._subscriptions.append(unsubscribe)
        return unsubscribe

    def emit(self, topic: str, data: Any = None) -> None:
        self._require_bus().publish(topic, data)

    def get_state(self, path: str | None = None) -> Any:
        return self._require_store().get(path)

    def set_state(self, path: str, value: Any) -> None:
        self._require_store().set(path, value)

    def create_element(
        self, tag: str, attributes: Mapping[str, Any] | None = None, *children: Any
    ) -> Element:
        """Build an element, wiring ``on_<event>`` callables as tracked listeners.

        ``id`` and ``class_name`` map onto the element; any other attribute is
        stored as-is. Children may be strings, nodes, components or nested
        lists of those; ``None`` and ``False`` are skipped.
        """
        element = Element(tag)
        for key, value in (attributes or {}).items():
            if key == "id":
                element.element_id = value
            elif key == "class_name":
                element.class_name = value
            elif key.startswith("on_") and callable(value):
                self.bind_external_event(element, key[3:], value)
            else:
                element.set_attribute(key, value)
        self._append_children(element, children)
        return element

    def _append_children(self, element: Element, children: Iterable[Any]) -> None:
        for child in children:
            if child is None or child is False:
                continue
            if isinstance(child, Node):
                element.append_child(child)
            elif isinstance(child, Component):
                self.adopt_child(child, element)
            elif isinstance(child, (list, tuple)):
                self._append_children(element, child)
            else:
                element.append_child(TextNode(str(child)))

    def adopt_child(self, child: Component, parent: Element) -> None:
        """Mount ``child`` under ``parent`` and unmount it together with this component.

        A child that is already mounted keeps its node, which is moved under
        ``parent``.
        """
        if child.mounted and child.node is not None:
            node = child.node
            if self._rendering_moves is not None:
                previous_parent = node.parent
                position = (
                    previous_parent.children.index(node) if previous_parent is not None else 0
                )
                self._rendering_moves.append((node, previous_parent, position))
            parent.append_child(node)
        else:
            child.mount(parent)
        if self._rendering_children is not None:
            self._rendering_children.append(child)
        elif not any(child is existing for existing in self._children):
            self._children.append(child)

    def _require_bus(self) -> EventBus:
        bus = self.bus
        if bus is None:
            raise ComponentError(f"{type(self).__name__} was created without an event bus.")
        return bus

    def _require_store(self) -> StateStore:
        if self._store is None:
            raise ComponentError(f"{type(self).__name__} was created without a state store.")
        return self._store
