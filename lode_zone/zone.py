"""
Zone Module
===========

Bounded Context: A placement zone and its live usage statistics.

Design:
- Geometry is immutable (ZoneBounds), statistics are mutable
- Mutable accumulators, immutable snapshots (ZoneView)
- weight is clamped to a positive floor after every mutation
- Caller must synchronize if multi-threaded (see ZoneManager)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

import numpy as np
import supervision as sv

from lode_zone.geometry.shapes import ZoneBounds

MIN_WEIGHT = 1e-6


class ZoneKind(str, Enum):
    """Semantic zone type."""
    EDGE = "edge"
    CENTER = "center"
    TRANSITION = "transition"


@dataclass(frozen=True)
class ZoneView:
    """
    Immutable snapshot of a zone, handed to collaborators.

    Value object: safe to keep after the zone's generation is replaced.
    """

    zone_id: str
    kind: ZoneKind
    bounds: ZoneBounds
    weight: float
    base_weight: float
    active_count: int
    total_usage: int
    last_used: float
    area: float
    density: float

    def center(self) -> sv.Point:
        return self.bounds.center()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            "id": self.zone_id,
            "type": self.kind.value,
            "bounds": self.bounds.to_dict(),
            "weight": self.weight,
            "activeFragments": self.active_count,
            "totalUsage": self.total_usage,
            "lastUsed": self.last_used,
            "density": self.density,
        }

    def __str__(self) -> str:
        return f"{self.zone_id}: {self.active_count}/{self.total_usage}"


class Zone:
    """
    Rectangular viewport region with a semantic kind and usage statistics.

    Usage:
        zone = Zone("center", ZoneKind.CENTER, bounds, weight=1.5)
        zone.record_usage(now=clock())
        zone.release()
        view = zone.snapshot()  # Immutable
    """

    def __init__(
        self,
        zone_id: str,
        kind: ZoneKind,
        bounds: ZoneBounds,
        weight: float = 1.0,
        weight_floor: float = MIN_WEIGHT,
    ):
        """
        Args:
            zone_id: Stable key, unique within a layout generation
            kind: Zone kind (immutable)
            bounds: Zone rectangle
            weight: Initial (base) selection weight
            weight_floor: Lowest weight any mutation may leave behind
        """
        if weight_floor <= 0:
            raise ValueError(f"weight_floor must be > 0, got {weight_floor}")

        self._zone_id = zone_id
        self._kind = ZoneKind(kind)
        self._bounds = bounds
        self._weight_floor = weight_floor

        self._weight = max(weight_floor, weight)
        self._base_weight = self._weight

        self.active_count = 0
        self.total_usage = 0
        self.last_used = 0.0

    @property
    def zone_id(self) -> str:
        return self._zone_id

    @property
    def kind(self) -> ZoneKind:
        return self._kind

    @property
    def bounds(self) -> ZoneBounds:
        return self._bounds

    @property
    def weight_floor(self) -> float:
        return self._weight_floor

    @property
    def weight(self) -> float:
        return self._weight

    @weight.setter
    def weight(self, value: float) -> None:
        self._weight = max(self._weight_floor, float(value))

    @property
    def base_weight(self) -> float:
        """Weight restored by reset_weight() (layout or profile weight)."""
        return self._base_weight

    @base_weight.setter
    def base_weight(self, value: float) -> None:
        self._base_weight = max(self._weight_floor, float(value))

    def reset_weight(self) -> None:
        self._weight = self._base_weight

    # Geometry delegates

    def center(self) -> sv.Point:
        return self._bounds.center()

    def random_position(
        self,
        margin: float = 0.0,
        rng: Optional[np.random.Generator] = None,
    ) -> sv.Point:
        return self._bounds.random_position(margin, rng)

    def contains(self, x: float, y: float) -> bool:
        return self._bounds.contains(x, y)

    def area(self) -> float:
        return self._bounds.area()

    def density(self) -> float:
        """Active placements per square pixel; 0 for zero-area zones."""
        area = self.area()
        if area <= 0:
            return 0.0
        return self.active_count / area

    # Statistics

    def record_usage(self, now: float) -> None:
        """Count a new placement in this zone."""
        self.active_count += 1
        self.total_usage += 1
        self.last_used = now

    def release(self) -> None:
        """Remove a placement; extra releases are clamped at zero."""
        self.active_count = max(0, self.active_count - 1)

    def snapshot(self) -> ZoneView:
        """Get immutable statistics snapshot."""
        return ZoneView(
            zone_id=self._zone_id,
            kind=self._kind,
            bounds=self._bounds,
            weight=self._weight,
            base_weight=self._base_weight,
            active_count=self.active_count,
            total_usage=self.total_usage,
            last_used=self.last_used,
            area=self.area(),
            density=self.density(),
        )

    def __repr__(self) -> str:
        return (
            f"Zone(id={self._zone_id!r}, kind={self._kind.value}, "
            f"weight={self._weight:.3f}, active={self.active_count})"
        )
