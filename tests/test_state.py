"""Tests for the path-addressed state store."""

from __future__ import annotations

import unittest

from driver_dashboard.events.bus import EventBus
from driver_dashboard.events.domain import STATE_CHANGE, StateChange
from driver_dashboard.exceptions import InvalidPathError
from driver_dashboard.state import PLATFORMS, StateStore, default_state, split_path


class StateStoreTests(unittest.TestCase):
    """Validate reads, writes and change notification order."""

    def setUp(self) -> None:
        self.bus = EventBus()
        self.store = StateStore(self.bus)

    def test_initial_shape(self) -> None:
        state = self.store.get()
        self.assertEqual(
            set(state),
            {"platforms", "fuel", "additional_costs", "results", "ui", "settings"},
        )
        self.assertEqual(tuple(state["platforms"]), PLATFORMS)
        self.assertEqual(self.store.get("fuel.konsumsi"), 14)
        self.assertEqual(self.store.get("fuel.harga"), 10_000)
        self.assertEqual(self.store.get("ui.current_view"), "dashboard")
        self.assertEqual(self.store.get("results.pendapatan_bersih"), 0)

    def test_get_missing_path_returns_none(self) -> None:
        self.assertIsNone(self.store.get("fuel.nope"))
        self.assertIsNone(self.store.get("nope.deeper.still"))
        self.assertIsNone(self.store.get("fuel.jarak.too_deep"))

    def test_get_without_path_returns_whole_tree(self) -> None:
        self.assertIs(self.store.get(), self.store.get(""))
        self.assertIn("fuel", self.store.get())

    def test_get_with_non_string_path_returns_none(self) -> None:
        self.assertIsNone(self.store.get(5))  # type: ignore[arg-type]
        self.assertIsNone(self.store.get(("fuel",)))  # type: ignore[arg-type]
        self.assertIs(self.store.get(None), self.store.get())

    def test_set_then_get(self) -> None:
        self.store.set("fuel.jarak", 120)
        self.assertEqual(self.store.get("fuel.jarak"), 120)

    def test_set_creates_missing_intermediates(self) -> None:
        self.store.set("a.b.c", 5)
        self.assertEqual(self.store.get("a"), {"b": {"c": 5}})

    def test_set_replaces_scalar_intermediate(self) -> None:
        self.store.set("fuel.jarak.km", 3)
        self.assertEqual(self.store.get("fuel.jarak"), {"km": 3})

    def test_set_addresses_list_items_by_index(self) -> None:
        self.store.set("ui.notifications", ["a", "b"])
        self.store.set("ui.notifications.1", "c")
        self.assertEqual(self.store.get("ui.notifications"), ["a", "c"])
        self.assertEqual(self.store.get("ui.notifications.0"), "a")

    def test_set_out_of_range_index_raises(self) -> None:
        self.store.set("ui.notifications", [])
        with self.assertRaises(InvalidPathError):
            self.store.set("ui.notifications.3", "x")

    def test_invalid_paths_are_rejected_without_notification(self) -> None:
        events: list[object] = []
        self.bus.subscribe(STATE_CHANGE, events.append)
        for path in ("", "a..b", ".a", "a."):
            with self.subTest(path=path):
                with self.assertRaises(InvalidPathError):
                    self.store.set(path, 1)
        self.assertEqual(events, [])

    def test_invalid_path_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            split_path("")

    def test_global_event_precedes_path_subscribers(self) -> None:
        order: list[str] = []
        self.store.subscribe("fuel.jarak", lambda *_args: order.append("path"))
        self.bus.subscribe(STATE_CHANGE, lambda _change: order.append("global"))

        self.store.set("fuel.jarak", 10)

        self.assertEqual(order, ["global", "path"])

    def test_state_change_payload(self) -> None:
        changes: list[StateChange] = []
        self.bus.subscribe(STATE_CHANGE, changes.append)

        self.store.set("fuel.jarak", 25)

        self.assertEqual(len(changes), 1)
        change = changes[0]
        self.assertEqual(change.path, "fuel.jarak")
        self.assertEqual(change.value, 25)
        self.assertEqual(change.old_value, 0)
        self.assertIs(change.full_state, self.store.get())

    def test_path_subscriber_receives_value_old_value_and_path(self) -> None:
        calls: list[tuple[object, object, str]] = []
        self.store.subscribe(
            "fuel.jarak", lambda value, old, path: calls.append((value, old, path))
        )

        self.store.set("fuel.jarak", 7)
        self.store.set("fuel.jarak", 9)

        self.assertEqual(calls, [(7, 0, "fuel.jarak"), (9, 7, "fuel.jarak")])

    def test_first_write_reports_absent_old_value(self) -> None:
        store = StateStore(self.bus, {})
        calls: list[tuple[object, object, str]] = []
        store.subscribe("fuel.jarak", lambda *args: calls.append(args))

        store.set("fuel.jarak", 10)

        self.assertEqual(store.get("fuel.jarak"), 10)
        self.assertEqual(calls, [(10, None, "fuel.jarak")])

    def test_subscribers_on_same_path_fire_in_registration_order(self) -> None:
        order: list[str] = []
        self.store.subscribe("results", lambda: order.append("c1"))
        self.store.subscribe("results", lambda: order.append("c2"))

        self.store.set("results", {})
        self.store.set("results", {})

        self.assertEqual(order, ["c1", "c2", "c1", "c2"])

    def test_path_subscriber_may_accept_fewer_arguments(self) -> None:
        values: list[object] = []
        self.store.subscribe("fuel.jarak", values.append)

        self.store.set("fuel.jarak", 3)

        self.assertEqual(values, [3])

    def test_notification_fires_even_when_value_is_unchanged(self) -> None:
        calls: list[object] = []
        self.store.subscribe("fuel.jarak", calls.append)

        self.store.set("fuel.jarak", 0)
        self.store.set("fuel.jarak", 0)

        self.assertEqual(calls, [0, 0])

    def test_path_matching_is_exact(self) -> None:
        parent_calls: list[object] = []
        child_calls: list[object] = []
        self.store.subscribe("fuel", parent_calls.append)
        self.store.subscribe("fuel.jarak", child_calls.append)

        self.store.set("fuel.jarak", 5)
        self.assertEqual(parent_calls, [])
        self.assertEqual(child_calls, [5])

        self.store.set("fuel", {"jarak": 6})
        self.assertEqual(len(parent_calls), 1)
        self.assertEqual(child_calls, [5])

    def test_unsubscribe_stops_notifications(self) -> None:
        calls: list[object] = []
        unsubscribe = self.store.subscribe("fuel.jarak", calls.append)
        self.assertEqual(self.store.subscriber_count("fuel.jarak"), 1)

        unsubscribe()
        unsubscribe()
        self.store.set("fuel.jarak", 1)

        self.assertEqual(calls, [])
        self.assertEqual(self.store.subscriber_count("fuel.jarak"), 0)

    def test_failing_path_subscriber_is_isolated(self) -> None:
        calls: list[object] = []

        def explode(_value: object) -> None:
            raise ValueError("bad subscriber")

        self.store.subscribe("fuel.jarak", explode)
        self.store.subscribe("fuel.jarak", calls.append)

        with self.assertLogs("driver_dashboard.state", level="ERROR") as logs:
            self.store.set("fuel.jarak", 4)

        self.assertEqual(calls, [4])
        self.assertEqual(self.store.get("fuel.jarak"), 4)
        self.assertEqual(logs.records[0].event, "state.subscriber_failed")

    def test_subscriber_setting_state_sees_nested_notifications(self) -> None:
        seen: list[object] = []
        self.store.subscribe("a", lambda value: self.store.set("b", value * 2))
        self.store.subscribe("b", seen.append)

        self.store.set("a", 2)

        self.assertEqual(self.store.get("b"), 4)
        self.assertEqual(seen, [4])

    def test_reset_replaces_subtree_with_copy(self) -> None:
        initial = {"topup": 0, "sisa": 0, "kotor": 0}
        self.store.set("platforms.grab", {"topup": 100, "sisa": 20, "kotor": 80})

        self.store.reset("platforms.grab", initial)
        self.store.get("platforms.grab")["topup"] = 999

        self.assertEqual(initial["topup"], 0)

    def test_restore_defaults_resets_input_sections(self) -> None:
        self.store.set("fuel.jarak", 50)
        self.store.set("platforms.maxim.topup", 300)
        self.store.set("additional_costs.parkir", 2_000)
        self.store.set("ui.current_view", "settings")
        paths: list[str] = []
        self.bus.subscribe(STATE_CHANGE, lambda change: paths.append(change.path))

        self.store.restore_defaults()

        self.assertEqual(paths, ["platforms", "fuel", "additional_costs"])
        self.assertEqual(self.store.get("fuel.jarak"), 0)
        self.assertEqual(self.store.get("platforms.maxim.topup"), 0)
        self.assertEqual(self.store.get("additional_costs.parkir"), 0)
        self.assertEqual(self.store.get("ui.current_view"), "settings")

    def test_initial_state_is_copied(self) -> None:
        seed = default_state(fuel_consumption=20, fuel_price=12_000)
        store = StateStore(self.bus, seed)

        store.set("fuel.jarak", 10)

        self.assertEqual(seed["fuel"]["jarak"], 0)
        self.assertEqual(store.get("fuel.konsumsi"), 20)
        self.assertEqual(store.get("fuel.harga"), 12_000)


    def test_initial_returns_copy_of_seeded_value(self) -> None:
        store = StateStore(self.bus, default_state(fuel_consumption=20, fuel_price=12_000))
        store.set("fuel.konsumsi", 9)

        self.assertEqual(store.initial("fuel.konsumsi"), 20)
        self.assertEqual(store.initial("fuel")["harga"], 12_000)
        self.assertIsNone(store.initial("fuel.nope"))

        store.initial("fuel")["harga"] = 1
        self.assertEqual(store.initial("fuel.harga"), 12_000)

class DefaultStateTests(unittest.TestCase):
    """Validate the initial state builder."""

    def test_settings_and_view_overrides(self) -> None:
        state = default_state(settings={"gps_tracking": True}, initial_view="analytics")
        self.assertTrue(state["settings"]["gps_tracking"])
        self.assertTrue(state["settings"]["auto_save"])
        self.assertEqual(state["ui"]["current_view"], "analytics")

    def test_each_call_builds_a_fresh_tree(self) -> None:
        first = default_state()
        first["platforms"]["grab"]["topup"] = 1
        self.assertEqual(default_state()["platforms"]["grab"]["topup"], 0)


if __name__ == "__main__":
    unittest.main()
