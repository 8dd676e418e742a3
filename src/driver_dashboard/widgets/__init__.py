"""Widget exports for the dashboard UI."""

from .additional_costs import AdditionalCosts
from .badge import Badge
from .button import Button
from .fuel_input import FuelInput
from .label import Label
from .platform_input import PlatformInput
from .results_summary import ResultsSummary
from .text_input import TextInput

__all__ = [
    "AdditionalCosts",
    "Badge",
    "Button",
    "FuelInput",
    "Label",
    "PlatformInput",
    "ResultsSummary",
    "TextInput",
]
