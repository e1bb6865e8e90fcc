"""
Zone Layout Module
==================

Bounded Context: Partitioning a viewport into the 13 weighted zones.

Design:
- Deterministic: identical (viewport, config) -> identical layout
- Always 4 edge + 5 center + 4 transition zones, each with positive area
- Same formulas for both orientations so zone semantics survive rotation
- Config resolution (viewport-size adjustments, extreme aspect fallback)
  is a separate pure step so callers can layer their own adjustments
"""

from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Optional

from lode_zone.config import LayoutConfig
from lode_zone.geometry.shapes import Orientation, Viewport, ZoneBounds
from lode_zone.zone import MIN_WEIGHT, Zone, ZoneKind

EDGE_WEIGHT = 0.8
CENTER_WEIGHT = 1.5
TRANSITION_WEIGHT = 1.0

WIDE_ASPECT_RATIO = 2.5
TALL_ASPECT_RATIO = 0.5
VERY_WIDE_ASPECT_RATIO = 2.0

# Extreme aspect ratio fallbacks: (edge_margin, center_zone_size, transition_zone_width)
WIDE_FALLBACK = (0.03, 0.3, 0.2)
TALL_FALLBACK = (0.04, 0.5, 0.1)

MAX_EDGE_MARGIN = 0.25
MAX_CENTER_ZONE_SIZE = 0.9
MAX_TRANSITION_ZONE_WIDTH = 0.5


def clamp_layout_fractions(config: LayoutConfig) -> LayoutConfig:
    """Clamp geometry fractions into the range where every zone keeps positive area."""
    return replace(
        config,
        edge_margin=min(config.edge_margin, MAX_EDGE_MARGIN),
        center_zone_size=min(config.center_zone_size, MAX_CENTER_ZONE_SIZE),
        transition_zone_width=min(config.transition_zone_width, MAX_TRANSITION_ZONE_WIDTH),
    )


def is_extreme_aspect_ratio(viewport: Viewport) -> bool:
    aspect = viewport.aspect_ratio
    return aspect < TALL_ASPECT_RATIO or aspect > WIDE_ASPECT_RATIO


@dataclass
class ZoneLayout:
    """
    One generation of zones for a viewport.

    Ordered (edges, centers, transitions) and keyed by zone id. Replaced
    wholesale on the next build; statistics are never carried over.
    """

    viewport: Viewport
    config: LayoutConfig
    zones: Dict[str, Zone]

    @property
    def orientation(self) -> Orientation:
        return self.viewport.orientation

    def get(self, zone_id: str) -> Optional[Zone]:
        return self.zones.get(zone_id)

    def by_kind(self, kind: ZoneKind) -> List[Zone]:
        return [zone for zone in self.zones.values() if zone.kind == kind]

    def __iter__(self) -> Iterator[Zone]:
        return iter(self.zones.values())

    def __len__(self) -> int:
        return len(self.zones)

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self.zones


class ZoneLayoutBuilder:
    """
    Builds a ZoneLayout from viewport dimensions and a LayoutConfig.

    Usage:
        builder = ZoneLayoutBuilder()
        layout = builder.build(Viewport(1920, 1080), LayoutConfig())
        layout.get("center").center()  # Point(x=960, y=540)
    """

    def __init__(self, weight_floor: float = MIN_WEIGHT):
        """
        Args:
            weight_floor: Lowest weight the built zones may ever reach
        """
        self.weight_floor = weight_floor

    def resolve_config(self, viewport: Viewport, config: LayoutConfig) -> LayoutConfig:
        """
        Adjust the geometry fractions for the viewport.

        Extreme aspect ratios return the fixed fallback values untouched;
        everything else is adjusted by viewport size class, very wide
        aspect, minimum pixel sizes and orientation.
        """
        aspect = viewport.aspect_ratio

        if is_extreme_aspect_ratio(viewport):
            edge, center, transition = WIDE_FALLBACK if aspect > WIDE_ASPECT_RATIO else TALL_FALLBACK
            return replace(
                config,
                edge_margin=edge,
                center_zone_size=center,
                transition_zone_width=transition,
            )

        min_dimension = viewport.min_dimension
        if min_dimension < config.small_viewport_threshold:
            edge, center = 0.03, 0.5
        elif min_dimension >= config.large_viewport_threshold:
            edge, center = 0.06, 0.35
        else:
            edge, center = 0.05, 0.4
        transition = config.transition_zone_width

        if aspect > VERY_WIDE_ASPECT_RATIO:
            center = min(center, 0.3)
            transition = 0.2

        min_fraction = config.min_zone_size / min_dimension
        edge = max(edge, min_fraction)
        center = max(center, min_fraction * 4)
        transition = max(transition, min_fraction * 2)

        if viewport.orientation == Orientation.PORTRAIT:
            center *= 1.1

        return replace(
            config,
            edge_margin=min(edge, MAX_EDGE_MARGIN),
            center_zone_size=min(center, MAX_CENTER_ZONE_SIZE),
            transition_zone_width=min(transition, MAX_TRANSITION_ZONE_WIDTH),
        )

    def build(
        self,
        viewport: Viewport,
        config: LayoutConfig,
        resolve: bool = True,
    ) -> ZoneLayout:
        """
        Compute the 13 zones for a viewport.

        Args:
            viewport: Current viewport
            config: Base layout configuration
            resolve: Apply resolve_config() first (False when the caller
                already produced a final config)

        Returns:
            New ZoneLayout generation
        """
        if resolve:
            config = self.resolve_config(viewport, config)
        else:
            config = clamp_layout_fractions(config)

        zones: Dict[str, Zone] = {}
        for zone in self._edge_zones(viewport, config):
            zones[zone.zone_id] = zone
        for zone in self._center_zones(viewport, config):
            zones[zone.zone_id] = zone
        for zone in self._transition_zones(viewport, config):
            zones[zone.zone_id] = zone

        return ZoneLayout(viewport=viewport, config=config, zones=zones)

    def _zone(self, zone_id: str, kind: ZoneKind, bounds: ZoneBounds, weight: float) -> Zone:
        return Zone(zone_id, kind, bounds, weight=weight, weight_floor=self.weight_floor)

    def _edge_zones(self, viewport: Viewport, config: LayoutConfig) -> List[Zone]:
        w, h = viewport.width, viewport.height
        e = config.edge_margin * viewport.min_dimension

        return [
            self._zone("edge-top", ZoneKind.EDGE, ZoneBounds(0, w, 0, e), EDGE_WEIGHT),
            self._zone("edge-right", ZoneKind.EDGE, ZoneBounds(w - e, w, 0, h), EDGE_WEIGHT),
            self._zone("edge-bottom", ZoneKind.EDGE, ZoneBounds(0, w, h - e, h), EDGE_WEIGHT),
            self._zone("edge-left", ZoneKind.EDGE, ZoneBounds(0, e, 0, h), EDGE_WEIGHT),
        ]

    def _center_zones(self, viewport: Viewport, config: LayoutConfig) -> List[Zone]:
        w, h = viewport.width, viewport.height
        e = config.edge_margin * viewport.min_dimension
        half = config.center_zone_size * viewport.min_dimension / 2
        cx, cy = w / 2, h / 2

        # Sub-center bands are up to `half` thick, stopping at the edge band
        # when there is room for it.
        top = _outward(cy - half, half, floor=e)
        bottom = _inward(cy + half, half, ceiling=h - e, limit=h)
        left = _outward(cx - half, half, floor=e)
        right = _inward(cx + half, half, ceiling=w - e, limit=w)

        return [
            self._zone("center", ZoneKind.CENTER,
                       ZoneBounds(cx - half, cx + half, cy - half, cy + half), CENTER_WEIGHT),
            self._zone("center-top", ZoneKind.CENTER,
                       ZoneBounds(cx - half, cx + half, top, cy - half), CENTER_WEIGHT),
            self._zone("center-right", ZoneKind.CENTER,
                       ZoneBounds(cx + half, right, cy - half, cy + half), CENTER_WEIGHT),
            self._zone("center-bottom", ZoneKind.CENTER,
                       ZoneBounds(cx - half, cx + half, cy + half, bottom), CENTER_WEIGHT),
            self._zone("center-left", ZoneKind.CENTER,
                       ZoneBounds(left, cx - half, cy - half, cy + half), CENTER_WEIGHT),
        ]

    def _transition_zones(self, viewport: Viewport, config: LayoutConfig) -> List[Zone]:
        w, h = viewport.width, viewport.height
        e = config.edge_margin * viewport.min_dimension
        tx = config.transition_zone_width * w
        ty = config.transition_zone_width * h

        # Corner rectangles at the inner corners of the edge bands.
        left = (e, e + tx)
        right = (w - e - tx, w - e)
        top = (e, e + ty)
        bottom = (h - e - ty, h - e)

        return [
            self._zone("transition-top-left", ZoneKind.TRANSITION,
                       ZoneBounds(*left, *top), TRANSITION_WEIGHT),
            self._zone("transition-top-right", ZoneKind.TRANSITION,
                       ZoneBounds(*right, *top), TRANSITION_WEIGHT),
            self._zone("transition-bottom-right", ZoneKind.TRANSITION,
                       ZoneBounds(*right, *bottom), TRANSITION_WEIGHT),
            self._zone("transition-bottom-left", ZoneKind.TRANSITION,
                       ZoneBounds(*left, *bottom), TRANSITION_WEIGHT),
        ]


def _outward(inner: float, extent: float, floor: float) -> float:
    """Lower coordinate of a band ending at `inner`, stopping at `floor` if possible."""
    if floor < inner:
        return max(floor, inner - extent)
    return max(0.0, inner - extent)


def _inward(inner: float, extent: float, ceiling: float, limit: float) -> float:
    """Upper coordinate of a band starting at `inner`, stopping at `ceiling` if possible."""
    if ceiling > inner:
        return min(ceiling, inner + extent)
    return min(limit, inner + extent)
