"""Domain exception hierarchy for the driver dashboard."""

from __future__ import annotations


class DashboardError(RuntimeError):
    """Base class for all dashboard errors."""


class InvalidPathError(DashboardError, ValueError):
    """Raised when a state path is empty or contains empty segments."""


class ComponentError(DashboardError):
    """Raised when a component is used against its lifecycle contract."""


class ComponentConfigError(ComponentError):
    """Raised when component configuration fails validation."""


class ConfigValidationError(DashboardError):
    """Raised when configuration cannot be validated safely."""


class UnknownPlatformError(DashboardError, KeyError):
    """Raised when an earnings update names a platform that is not tracked."""


class UnknownPresetError(DashboardError, KeyError):
    """Raised when an additional-cost preset name is not recognised."""
