"""
Distribution Statistics Module
==============================

Pure aggregate metrics over a set of zones plus the immutable
DistributionStats snapshot.

Design:
- Pure functions of zone statistics (no mutation)
- Never divides by zero: empty inputs have defined values
- numpy for the dispersion maths
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

import numpy as np

from lode_zone.analytics.tracker import DistributionHistoryEntry
from lode_zone.zone import Zone, ZoneKind


def average_density(zones: Iterable[Zone]) -> float:
    """Mean of per-zone densities; 0 for no zones."""
    densities = [zone.density() for zone in zones]
    if not densities:
        return 0.0
    return float(np.mean(densities))


def total_active(zones: Iterable[Zone]) -> int:
    return sum(zone.active_count for zone in zones)


def center_utilization(zones: Iterable[Zone]) -> float:
    """Share of active placements sitting in center zones; 0 when nothing is active."""
    zones = list(zones)
    total = total_active(zones)
    if total == 0:
        return 0.0
    center = sum(zone.active_count for zone in zones if zone.kind == ZoneKind.CENTER)
    return center / total


def balance_score(zones: Iterable[Zone]) -> float:
    """
    Spread of load across zones, in [0, 1] (1 = perfectly even).

    Works on area-weighted density (density x area, i.e. the active count of
    each zone) so thin bands and the big center square compare on equal
    footing. With cv the coefficient of variation of those loads the score is
    1 / (1 + cv^2): equal load gives 1, a single loaded zone among 13 gives
    1/13, and an empty layout counts as balanced.
    """
    loads = np.array([zone.density() * zone.area() for zone in zones], dtype=float)
    if loads.size == 0:
        return 1.0

    mean = loads.mean()
    if mean <= 0:
        return 1.0

    cv_squared = loads.var() / (mean * mean)
    return float(1.0 / (1.0 + cv_squared))


@dataclass(frozen=True)
class DistributionStats:
    """
    Immutable distribution statistics snapshot.

    to_dict() uses the camelCase keys expected by the placement collaborators.
    """

    zone_density: Dict[str, float]
    center_utilization: float
    balance_score: float
    total_zones: int
    zone_types: Dict[str, int]
    average_density: float
    total_active: int = 0
    recent_placements: List[DistributionHistoryEntry] = field(default_factory=list)

    @classmethod
    def from_zones(
        cls,
        zones: Iterable[Zone],
        recent: Iterable[DistributionHistoryEntry] = (),
    ) -> "DistributionStats":
        zones = list(zones)
        return cls(
            zone_density={zone.zone_id: zone.density() for zone in zones},
            center_utilization=center_utilization(zones),
            balance_score=balance_score(zones),
            total_zones=len(zones),
            zone_types={
                kind.value: sum(1 for zone in zones if zone.kind == kind)
                for kind in ZoneKind
            },
            average_density=average_density(zones),
            total_active=total_active(zones),
            recent_placements=list(recent),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            "zoneDensity": dict(self.zone_density),
            "centerUtilization": self.center_utilization,
            "balanceScore": self.balance_score,
            "totalZones": self.total_zones,
            "zoneTypes": dict(self.zone_types),
            "averageDensity": self.average_density,
            "totalActive": self.total_active,
            "recentPlacements": [entry.to_dict() for entry in self.recent_placements],
        }

    def __str__(self) -> str:
        return (
            f"zones={self.total_zones} active={self.total_active} "
            f"balance={self.balance_score:.2f} center={self.center_utilization:.2f}"
        )
