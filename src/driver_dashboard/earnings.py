"""Earnings calculations composed on top of the state store.

Everything here reads with ``store.get`` and writes with ``store.set``, so
each step fires the usual change notifications.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
import math
from typing import Any

from .exceptions import UnknownPlatformError, UnknownPresetError
from .formatting import round_half_up
from .state import DEFAULT_FUEL_CONSUMPTION, DEFAULT_FUEL_PRICE, PLATFORMS, StateStore

LOGGER = logging.getLogger(__name__)

COST_FIELDS: tuple[str, ...] = ("parkir", "makan", "kuota", "tol", "lainnya")

COST_PRESETS: dict[str, dict[str, int]] = {
    "hemat": {"parkir": 5_000, "makan": 10_000, "kuota": 0, "tol": 0, "lainnya": 0},
    "normal": {"parkir": 10_000, "makan": 20_000, "kuota": 5_000, "tol": 0, "lainnya": 0},
    "lengkap": {
        "parkir": 15_000,
        "makan": 25_000,
        "kuota": 5_000,
        "tol": 10_000,
        "lainnya": 0,
    },
}


def parse_amount(raw: Any, default: float = 0, *, integer: bool = False) -> float:
    """Parse user input leniently; blank, invalid or zero input yields ``default``."""
    try:
        value = float(str(raw).strip())
    except (TypeError, ValueError):
        return default
    if not math.isfinite(value):
        return default
    if integer:
        value = int(value)
    return value or default


def fuel_usage(jarak: float, konsumsi: float, harga: float) -> tuple[float, float]:
    """Return ``(liter_terpakai, biaya_bbm)`` for a distance and consumption rate."""
    if konsumsi <= 0:
        return 0.0, 0.0
    liters = jarak / konsumsi
    return liters, liters * harga


def platform_gross(topup: float, sisa: float) -> float:
    """Gross platform earnings: top-up balance minus what is left at day end."""
    return topup - sisa


def update_platform(store: StateStore, platform: str, data: Mapping[str, Any]) -> None:
    if platform not in PLATFORMS:
        raise UnknownPlatformError(platform)
    topup = data.get("topup", 0) or 0
    sisa = data.get("sisa", 0) or 0
    store.set(
        f"platforms.{platform}",
        {"topup": topup, "sisa": sisa, "kotor": platform_gross(topup, sisa)},
    )
    calculate_results(store)


def fuel_defaults(store: StateStore) -> tuple[float, float]:
    """Consumption and price the store was seeded with, used for blank inputs."""
    initial = store.initial("fuel") or {}
    return (
        initial.get("konsumsi") or DEFAULT_FUEL_CONSUMPTION,
        initial.get("harga") or DEFAULT_FUEL_PRICE,
    )


def update_fuel(store: StateStore, data: Mapping[str, Any]) -> None:
    """Shallow-merge fuel inputs, derive liters and cost, then recompute results."""
    fuel = {**(store.get("fuel") or {}), **data}
    default_konsumsi, default_harga = fuel_defaults(store)
    konsumsi = fuel.get("konsumsi") or default_konsumsi
    harga = fuel.get("harga") or default_harga
    liters, cost = fuel_usage(fuel.get("jarak") or 0, konsumsi, harga)
    fuel.update(konsumsi=konsumsi, harga=harga, liter_terpakai=liters, biaya_bbm=cost)
    store.set("fuel", fuel)
    calculate_results(store)


def update_additional_costs(store: StateStore, data: Mapping[str, Any]) -> None:
    costs = {**(store.get("additional_costs") or {}), **data}
    costs["total"] = sum(costs.get(name) or 0 for name in COST_FIELDS)
    store.set("additional_costs", costs)
    calculate_results(store)


def apply_cost_preset(store: StateStore, name: str) -> None:
    preset = COST_PRESETS.get(name)
    if preset is None:
        raise UnknownPresetError(name)
    LOGGER.info("Applying additional cost preset %s", name)
    update_additional_costs(store, preset)


def calculate_results(store: StateStore) -> dict[str, Any]:
    """Recompute the derived ``results`` section and return it."""
    platforms = store.get("platforms") or {}
    fuel = store.get("fuel") or {}
    additional = store.get("additional_costs") or {}

    total_kotor = sum((entry or {}).get("kotor", 0) or 0 for entry in platforms.values())
    biaya_bbm = round_half_up(fuel.get("biaya_bbm"))
    total_additional = additional.get("total", 0) or 0
    results = {
        "total_kotor": total_kotor,
        "biaya_bbm": biaya_bbm,
        "total_additional_costs": total_additional,
        "pendapatan_bersih": total_kotor - biaya_bbm - total_additional,
    }
    store.set("results", results)
    return results


def reset_earnings(store: StateStore) -> None:
    """Restore the input sections to their defaults and recompute results."""
    store.restore_defaults()
    calculate_results(store)
