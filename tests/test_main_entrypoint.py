"""Tests for CLI entrypoint wiring."""

from __future__ import annotations

import contextlib
from copy import deepcopy
import io
from pathlib import Path
import unittest
from unittest.mock import patch

from driver_dashboard.__main__ import main
from driver_dashboard.config import DEFAULT_CONFIG


class MainEntrypointTests(unittest.TestCase):
    """Validate top-level main() behavior."""

    def _run(self, argv: list[str]) -> tuple[object, object, object]:
        with patch("driver_dashboard.__main__.ensure_config_dir") as ensure_mock, patch(
            "driver_dashboard.__main__.load_config", return_value=deepcopy(DEFAULT_CONFIG)
        ) as load_mock, patch("driver_dashboard.__main__.DashboardApp") as app_cls_mock:
            main(argv)
        return ensure_mock, load_mock, app_cls_mock

    def test_main_ensures_config_and_runs_app(self) -> None:
        ensure_mock, load_mock, app_cls_mock = self._run([])

        ensure_mock.assert_called_once()  # type: ignore[attr-defined]
        load_mock.assert_called_once_with(None)  # type: ignore[attr-defined]
        app_cls_mock.assert_called_once()  # type: ignore[attr-defined]
        app_cls_mock.return_value.run.assert_called_once()  # type: ignore[attr-defined]

    def test_config_option_selects_file(self) -> None:
        _ensure, load_mock, app_cls_mock = self._run(["--config", "/tmp/driver.toml"])

        load_mock.assert_called_once_with(Path("/tmp/driver.toml"))  # type: ignore[attr-defined]
        config = app_cls_mock.call_args.kwargs["config"]  # type: ignore[attr-defined]
        self.assertEqual(config["ui"]["initial_view"], "dashboard")

    def test_view_option_overrides_initial_view(self) -> None:
        _ensure, _load, app_cls_mock = self._run(["--view", "analytics"])

        config = app_cls_mock.call_args.kwargs["config"]  # type: ignore[attr-defined]
        self.assertEqual(config["ui"]["initial_view"], "analytics")

    def test_unknown_view_is_rejected(self) -> None:
        with patch("driver_dashboard.__main__.DashboardApp") as app_cls_mock, \
                contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main(["--view", "nowhere"])
        app_cls_mock.assert_not_called()

    def test_version_flag_prints_and_skips_app(self) -> None:
        output = io.StringIO()
        with patch("driver_dashboard.__main__.DashboardApp") as app_cls_mock, \
                contextlib.redirect_stdout(output):
            main(["--version"])
        app_cls_mock.assert_not_called()
        self.assertTrue(output.getvalue().startswith("driver-dashboard "))


if __name__ == "__main__":
    unittest.main()
