"""Interactive editing: format flow, pagination and autocomplete."""

from __future__ import annotations

from .capacity import CapacityOracle, LineCountCapacity, RowBudgetCapacity
from .debounce import Debouncer
from .flow import (
    FORMAT_CYCLE,
    FORMAT_FLOW,
    CycleDirection,
    cycle_format,
    initial_format,
    next_flow_format,
)
from .history import EditHistory, Snapshot
from .pagination import PaginationEngine
from .session import EditingSession

__all__ = [
    "FORMAT_CYCLE",
    "FORMAT_FLOW",
    "CapacityOracle",
    "CycleDirection",
    "Debouncer",
    "EditHistory",
    "EditingSession",
    "LineCountCapacity",
    "PaginationEngine",
    "RowBudgetCapacity",
    "Snapshot",
    "cycle_format",
    "initial_format",
    "next_flow_format",
]
