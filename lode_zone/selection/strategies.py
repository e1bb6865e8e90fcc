"""
Selection Strategies Module
===========================

Pure functions that pick one zone from the live zone set.

Design:
- Closed Strategy enum, dispatched exhaustively (no string-keyed lookup)
- Read-only: strategies never mutate zones or history
- Randomness only from the injected numpy Generator; ties are resolved by
  the stable zone iteration order so a seeded generator reproduces draws
- Fallback to a broader subset whenever a preferred subset is empty
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Optional, Sequence, Union

import numpy as np

from lode_zone.analytics.stats import average_density, center_utilization
from lode_zone.config import DistributionConfig, LayoutConfig
from lode_zone.errors import InvalidStateError
from lode_zone.zone import Zone, ZoneKind


class Strategy(str, Enum):
    """Zone distribution strategy."""
    BALANCED = "balanced"
    CENTER_WEIGHTED = "center-weighted"
    EDGE_ONLY = "edge-only"
    ORGANIC = "organic"

    @classmethod
    def parse(cls, value: Union["Strategy", str]) -> "Strategy":
        """Accept a Strategy or its string name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown strategy: {value!r}. Must be one of {valid}") from None


@dataclass(frozen=True)
class SelectionParams:
    """
    Tunables for a selection call.

    center_traversal, complex_paths and max_zone_density come from the device
    tier profile (max_zone_density=None disables the tier density cap);
    kind_bias is an optional per-kind multiplier (neutral by default).
    """

    max_density_ratio: float = 2.0
    density_penalty: float = 0.3
    recency_bonus: float = 1.5
    recency_window: float = 5000.0
    center_probability: float = 0.7
    organic_window: int = 5
    center_traversal: bool = True
    complex_paths: bool = True
    kind_bias: Mapping[ZoneKind, float] = field(default_factory=dict)
    max_zone_density: Optional[float] = None  # fragments per square pixel
    tier_density_penalty: float = 0.2
    center_boost: float = 2.0
    center_boost_threshold: float = 0.3

    @classmethod
    def from_config(
        cls,
        layout: LayoutConfig,
        distribution: DistributionConfig,
        **overrides,
    ) -> "SelectionParams":
        values = dict(
            max_density_ratio=layout.max_density_ratio,
            density_penalty=distribution.density_penalty,
            recency_bonus=distribution.recency_bonus,
            recency_window=distribution.recency_window,
            center_probability=distribution.center_probability,
            organic_window=distribution.organic_window,
        )
        values.update(overrides)
        return cls(**values)


def effective_weight(
    zone: Zone,
    mean_density: float,
    now: float,
    params: SelectionParams,
    center_share: float = 1.0,
) -> float:
    """
    Selection weight of a zone for one draw.

    base weight x density penalty x tier density cap x recency bonus
    x center boost (x optional kind bias).

    Args:
        zone: Candidate zone
        mean_density: Average density over the whole layout
        now: Current clock value (ms)
        params: Selection tunables
        center_share: Share of active placements in center zones
    """
    weight = zone.weight
    density = zone.density()

    if density > mean_density * params.max_density_ratio:
        weight *= params.density_penalty

    if params.max_zone_density is not None and density > params.max_zone_density:
        weight *= params.tier_density_penalty

    if now - zone.last_used > params.recency_window:
        weight *= params.recency_bonus

    if (
        zone.kind == ZoneKind.CENTER
        and params.center_traversal
        and center_share < params.center_boost_threshold
    ):
        weight *= params.center_boost

    return weight * params.kind_bias.get(zone.kind, 1.0)


def weighted_choice(
    zones: Sequence[Zone],
    weights: Sequence[float],
    rng: np.random.Generator,
) -> Zone:
    """
    Cumulative-weight roulette over zones in their given order.

    Draws r in [0, total) once and walks the zones subtracting weights until r
    falls inside a zone's span.
    """
    total = float(sum(weights))
    if total <= 0:
        return zones[0]

    r = rng.random() * total
    for zone, weight in zip(zones, weights):
        if r < weight:
            return zone
        r -= weight

    # Float rounding can leave r a hair above the last span.
    for zone, weight in zip(reversed(zones), reversed(weights)):
        if weight > 0:
            return zone
    return zones[-1]


def select_balanced(
    pool: Sequence[Zone],
    all_zones: Sequence[Zone],
    rng: np.random.Generator,
    now: float,
    params: SelectionParams,
) -> Zone:
    """Weighted draw over `pool`; density and center share come from the whole layout."""
    mean_density = average_density(all_zones)
    center_share = center_utilization(all_zones)
    weights = [
        effective_weight(zone, mean_density, now, params, center_share)
        for zone in pool
    ]
    return weighted_choice(pool, weights, rng)


def _of_kind(zones: Sequence[Zone], kind: ZoneKind) -> List[Zone]:
    return [zone for zone in zones if zone.kind == kind]


def select_edge_only(
    zones: Sequence[Zone],
    rng: np.random.Generator,
    now: float,
    params: SelectionParams,
) -> Zone:
    pool = _of_kind(zones, ZoneKind.EDGE) or list(zones)
    return select_balanced(pool, zones, rng, now, params)


def select_center_weighted(
    zones: Sequence[Zone],
    rng: np.random.Generator,
    now: float,
    params: SelectionParams,
) -> Zone:
    """Center zones with probability center_probability, the rest otherwise."""
    if not params.center_traversal:
        return select_edge_only(zones, rng, now, params)

    centers = _of_kind(zones, ZoneKind.CENTER)
    others = [zone for zone in zones if zone.kind != ZoneKind.CENTER]

    if rng.random() < params.center_probability:
        pool = centers or list(zones)
    else:
        pool = others or list(zones)

    return select_balanced(pool, zones, rng, now, params)


def select_organic(
    zones: Sequence[Zone],
    recent_kinds: Sequence[ZoneKind],
    rng: np.random.Generator,
    now: float,
    params: SelectionParams,
) -> Zone:
    """
    Break up monotone runs of one zone kind.

    A window of all edges swings back to center-weighted, a window of all
    centers moves on to transition zones, anything else is balanced. An
    empty window counts as "all edges", so a fresh layout leans center.
    """
    if not params.complex_paths:
        return select_balanced(zones, zones, rng, now, params)

    window = list(recent_kinds)[-params.organic_window:]

    if all(kind == ZoneKind.EDGE for kind in window) and params.center_traversal:
        return select_center_weighted(zones, rng, now, params)

    if window and all(kind == ZoneKind.CENTER for kind in window):
        transitions = _of_kind(zones, ZoneKind.TRANSITION)
        return select_balanced(transitions or list(zones), zones, rng, now, params)

    return select_balanced(zones, zones, rng, now, params)


def select_zone(
    zones: Sequence[Zone],
    strategy: Union[Strategy, str],
    recent_kinds: Sequence[ZoneKind],
    rng: np.random.Generator,
    now: float,
    params: SelectionParams,
) -> str:
    """
    Pick a zone id with the given strategy.

    Args:
        zones: Live zones in stable layout order
        strategy: Strategy (or its name)
        recent_kinds: Kinds of the most recent placements, oldest first
        rng: Random generator
        now: Current clock value (ms)
        params: Selection tunables

    Returns:
        Id of the selected zone

    Raises:
        InvalidStateError: If there are no zones to choose from
        ValueError: If the strategy name is unknown
    """
    zones = list(zones)
    if not zones:
        raise InvalidStateError("Cannot select a zone from an empty layout")

    strategy = Strategy.parse(strategy)

    if strategy is Strategy.BALANCED:
        zone = select_balanced(zones, zones, rng, now, params)
    elif strategy is Strategy.CENTER_WEIGHTED:
        zone = select_center_weighted(zones, rng, now, params)
    elif strategy is Strategy.EDGE_ONLY:
        zone = select_edge_only(zones, rng, now, params)
    elif strategy is Strategy.ORGANIC:
        zone = select_organic(zones, recent_kinds, rng, now, params)
    else:
        raise AssertionError(f"Unhandled strategy: {strategy}")

    return zone.zone_id

