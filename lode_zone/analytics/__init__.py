"""
Analytics Layer
===============

Bounded Context: Usage tracking, distribution metrics and rebalancing.

Responsibilities:
- Bounded placement history (FIFO)
- Center utilization and balance score
- Immutable statistics snapshots
- Weight damping for over-dense zones

Design Philosophy:
- Mutable accumulators (DistributionTracker), immutable outputs (DistributionStats)
- Metrics are pure functions of zone statistics
"""

from lode_zone.analytics.tracker import DistributionHistoryEntry, DistributionTracker
from lode_zone.analytics.stats import (
    DistributionStats,
    average_density,
    balance_score,
    center_utilization,
)
from lode_zone.analytics.rebalancer import Rebalancer

__all__ = [
    "DistributionHistoryEntry",
    "DistributionTracker",
    "DistributionStats",
    "average_density",
    "balance_score",
    "center_utilization",
    "Rebalancer",
]
