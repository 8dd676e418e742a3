"""Top-level package for driver-dashboard."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .app import DashboardApp
    from .component import Component, ComponentConfig, LifecycleState
    from .config import ensure_config_dir, load_config
    from .events import EventBus
    from .exceptions import (
        ComponentConfigError,
        ComponentError,
        ConfigValidationError,
        DashboardError,
        InvalidPathError,
    )
    from .runtime import Runtime, create_runtime
    from .state import StateStore

__all__ = [
    "Component",
    "ComponentConfig",
    "ComponentConfigError",
    "ComponentError",
    "ConfigValidationError",
    "DashboardApp",
    "DashboardError",
    "EventBus",
    "InvalidPathError",
    "LifecycleState",
    "Runtime",
    "StateStore",
    "create_runtime",
    "ensure_config_dir",
    "load_config",
]


def __getattr__(name: str) -> Any:
    """Lazily import symbols to keep the UI dependencies optional at import time."""
    if name == "EventBus":
        from .events import EventBus

        return EventBus
    if name == "StateStore":
        from .state import StateStore

        return StateStore
    if name in {"Component", "ComponentConfig", "LifecycleState"}:
        from .component import Component, ComponentConfig, LifecycleState

        return {
            "Component": Component,
            "ComponentConfig": ComponentConfig,
            "LifecycleState": LifecycleState,
        }[name]
    if name in {"ensure_config_dir", "load_config"}:
        from .config import ensure_config_dir, load_config

        return {"ensure_config_dir": ensure_config_dir, "load_config": load_config}[name]
    if name in {
        "ComponentConfigError",
        "ComponentError",
        "ConfigValidationError",
        "DashboardError",
        "InvalidPathError",
    }:
        from . import exceptions

        return getattr(exceptions, name)
    if name in {"Runtime", "create_runtime"}:
        from .runtime import Runtime, create_runtime

        return {"Runtime": Runtime, "create_runtime": create_runtime}[name]
    if name == "DashboardApp":
        from .app import DashboardApp

        return DashboardApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
