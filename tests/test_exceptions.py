"""Tests for domain exception hierarchy."""

from __future__ import annotations

import unittest

from driver_dashboard.exceptions import (
    ComponentConfigError,
    ComponentError,
    ConfigValidationError,
    DashboardError,
    InvalidPathError,
    UnknownPlatformError,
    UnknownPresetError,
)


class ExceptionHierarchyTests(unittest.TestCase):
    """Validate exception inheritance contract."""

    def test_exception_hierarchy(self) -> None:
        self.assertTrue(issubclass(DashboardError, RuntimeError))
        self.assertTrue(issubclass(InvalidPathError, DashboardError))
        self.assertTrue(issubclass(InvalidPathError, ValueError))
        self.assertTrue(issubclass(ComponentError, DashboardError))
        self.assertTrue(issubclass(ComponentConfigError, ComponentError))
        self.assertTrue(issubclass(ConfigValidationError, DashboardError))
        self.assertTrue(issubclass(UnknownPlatformError, KeyError))
        self.assertTrue(issubclass(UnknownPresetError, DashboardError))


if __name__ == "__main__":
    unittest.main()
