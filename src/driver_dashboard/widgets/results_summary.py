"""Earnings summary that re-renders whenever ``results`` changes."""

from __future__ import annotations

from ..component import Component, ComponentConfig
from ..dom import Element
from ..formatting import format_currency
from .badge import Badge

SUMMARY_ROWS: tuple[tuple[str, str], ...] = (
    ("total_kotor", "Total Kotor"),
    ("biaya_bbm", "Biaya BBM"),
    ("total_additional_costs", "Biaya Tambahan"),
)


class ResultsSummaryConfig(ComponentConfig):
    title: str = "Ringkasan Pendapatan"
    icon: str = "💰"
    show_breakdown: bool = True


class ResultsSummary(Component):
    config_model = ResultsSummaryConfig

    def before_mount(self) -> None:
        self.subscribe_to_state("results", lambda _results: self.update())

    def render(self) -> Element:
        config = self.config
        results = self.get_state("results") or {}
        net = results.get("pendapatan_bersih", 0) or 0

        rows = []
        if config.show_breakdown:
            rows = [
                self.create_element(
                    "div",
                    {"class_name": "row"},
                    f"{caption}: Rp {format_currency(results.get(key))}",
                )
                for key, caption in SUMMARY_ROWS
            ]
        status = Badge(
            text="Untung" if net >= 0 else "Rugi",
            variant="badge-success" if net >= 0 else "badge-error",
        )
        return self.create_element(
            "section",
            {"id": "results-summary", "class_name": "card"},
            self.create_element("h2", None, f"{config.icon} {config.title}".strip()),
            rows,
            self.create_element(
                "div",
                {"id": "net-income", "class_name": "row net"},
                f"Pendapatan Bersih: Rp {format_currency(net)}",
            ),
            status,
        )
