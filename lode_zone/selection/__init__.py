"""
Selection Layer
===============

Bounded Context: Strategy-driven weighted-random zone selection.

Design Philosophy:
- Pure, read-only functions over live zone statistics
- Closed set of strategies
"""

from lode_zone.selection.strategies import (
    SelectionParams,
    Strategy,
    effective_weight,
    select_zone,
    weighted_choice,
)

__all__ = [
    "SelectionParams",
    "Strategy",
    "effective_weight",
    "select_zone",
    "weighted_choice",
]
