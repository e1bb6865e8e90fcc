"""
Device Tier Module
==================

Bounded Context: Device/performance tier profiles and frame-rate driven
tier changes.

Design:
- Profiles are immutable and looked up by a closed enum
- PerformanceTierMonitor is a small stateful accumulator: feed it frame
  rate samples, it answers with a tier change (or None)
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Deque, Dict, Mapping, Optional

from lode_zone.selection.strategies import Strategy
from lode_zone.zone import ZoneKind


class DeviceTier(str, Enum):
    """Coarse device/performance tier."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    def degraded(self) -> "DeviceTier":
        if self is DeviceTier.HIGH:
            return DeviceTier.MEDIUM
        return DeviceTier.LOW

    def upgraded(self) -> "DeviceTier":
        if self is DeviceTier.LOW:
            return DeviceTier.MEDIUM
        return DeviceTier.HIGH


@dataclass(frozen=True)
class TierProfile:
    """Zone behaviour for one device tier."""

    tier: DeviceTier
    strategy: Strategy
    center_traversal: bool
    complex_paths: bool
    max_active_fragments: int
    max_zone_density: float  # fragments per square pixel
    center_weight: float
    edge_weight: float
    transition_weight: float

    @property
    def weights(self) -> Dict[ZoneKind, float]:
        return {
            ZoneKind.CENTER: self.center_weight,
            ZoneKind.EDGE: self.edge_weight,
            ZoneKind.TRANSITION: self.transition_weight,
        }


TIER_PROFILES: Mapping[DeviceTier, TierProfile] = MappingProxyType({
    DeviceTier.HIGH: TierProfile(
        tier=DeviceTier.HIGH,
        strategy=Strategy.ORGANIC,
        center_traversal=True,
        complex_paths=True,
        max_active_fragments=30,
        max_zone_density=0.0005,
        center_weight=1.5,
        edge_weight=0.8,
        transition_weight=1.2,
    ),
    DeviceTier.MEDIUM: TierProfile(
        tier=DeviceTier.MEDIUM,
        strategy=Strategy.BALANCED,
        center_traversal=True,
        complex_paths=True,
        max_active_fragments=20,
        max_zone_density=0.0003,
        center_weight=1.2,
        edge_weight=1.0,
        transition_weight=1.0,
    ),
    DeviceTier.LOW: TierProfile(
        tier=DeviceTier.LOW,
        strategy=Strategy.EDGE_ONLY,
        center_traversal=False,
        complex_paths=False,
        max_active_fragments=12,
        max_zone_density=0.0002,
        center_weight=0.5,
        edge_weight=1.5,
        transition_weight=0.8,
    ),
})


def profile_for(tier) -> TierProfile:
    """Profile for a DeviceTier or its string name."""
    return TIER_PROFILES[DeviceTier(tier)]


class PerformanceTierMonitor:
    """
    Tracks recent frame rates and decides when to degrade or upgrade a tier.

    A mean below frame_rate_threshold for `degrade_after` consecutive samples
    degrades; a mean above threshold x upgrade_margin for `upgrade_after`
    consecutive samples upgrades. Anything in between resets both streaks.

    Usage:
        monitor = PerformanceTierMonitor(DeviceTier.HIGH)
        new_tier = monitor.observe(frame_rate=22.0)
        if new_tier is not None:
            adapter.set_device_tier(new_tier)
    """

    def __init__(
        self,
        tier: DeviceTier = DeviceTier.MEDIUM,
        frame_rate_threshold: float = 30.0,
        window: int = 5,
        degrade_after: int = 3,
        upgrade_after: int = 5,
        upgrade_margin: float = 1.5,
    ):
        self.tier = DeviceTier(tier)
        self.frame_rate_threshold = frame_rate_threshold
        self.degrade_after = degrade_after
        self.upgrade_after = upgrade_after
        self.upgrade_margin = upgrade_margin

        self._frame_rates: Deque[float] = deque(maxlen=window)
        self._degrade_streak = 0
        self._upgrade_streak = 0

    @property
    def average_frame_rate(self) -> float:
        """Mean of the sample window (60 before any sample)."""
        if not self._frame_rates:
            return 60.0
        return sum(self._frame_rates) / len(self._frame_rates)

    def observe(self, frame_rate: float) -> Optional[DeviceTier]:
        """
        Record a frame rate sample.

        Returns:
            The new tier if it changed, else None
        """
        self._frame_rates.append(float(frame_rate))
        average = self.average_frame_rate

        if average < self.frame_rate_threshold:
            self._degrade_streak += 1
            self._upgrade_streak = 0
            if self._degrade_streak >= self.degrade_after and self.tier is not DeviceTier.LOW:
                return self._change(self.tier.degraded())
        elif average > self.frame_rate_threshold * self.upgrade_margin and self.tier is not DeviceTier.HIGH:
            self._upgrade_streak += 1
            self._degrade_streak = 0
            if self._upgrade_streak >= self.upgrade_after:
                return self._change(self.tier.upgraded())
        else:
            self._degrade_streak = 0
            self._upgrade_streak = 0

        return None

    def exceeds_fragment_limit(self, active_fragments: int) -> bool:
        return active_fragments > profile_for(self.tier).max_active_fragments

    def reset(self, tier: Optional[DeviceTier] = None) -> None:
        """Clear samples and streaks (optionally switching tier)."""
        if tier is not None:
            self.tier = DeviceTier(tier)
        self._frame_rates.clear()
        self._degrade_streak = 0
        self._upgrade_streak = 0

    def _change(self, tier: DeviceTier) -> DeviceTier:
        self.tier = tier
        self._degrade_streak = 0
        self._upgrade_streak = 0
        return tier

    def __repr__(self) -> str:
        return f"PerformanceTierMonitor(tier={self.tier.value}, fps={self.average_frame_rate:.1f})"
