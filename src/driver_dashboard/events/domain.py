from __future__ import annotations

from dataclasses import dataclass
from typing import Any

STATE_CHANGE = "state:change"
NAVIGATE = "navigate"


@dataclass(frozen=True)
class StateChange:
    path: str
    value: Any
    old_value: Any
    full_state: dict[str, Any]
