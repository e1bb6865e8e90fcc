"""
Unit tests for device tier profiles and the frame-rate tier monitor
"""
import pytest

from lode_zone.selection.strategies import Strategy
from lode_zone.tiers import DeviceTier, PerformanceTierMonitor, profile_for
from lode_zone.zone import ZoneKind


class TestProfiles:
    """Tests for TIER_PROFILES"""

    def test_low_tier_is_edge_only(self):
        profile = profile_for("low")
        assert profile.strategy is Strategy.EDGE_ONLY
        assert not profile.center_traversal
        assert not profile.complex_paths

    def test_high_tier_is_organic(self):
        profile = profile_for(DeviceTier.HIGH)
        assert profile.strategy is Strategy.ORGANIC
        assert profile.max_active_fragments == 30

    def test_weights(self):
        assert profile_for("medium").weights == {
            ZoneKind.CENTER: 1.2,
            ZoneKind.EDGE: 1.0,
            ZoneKind.TRANSITION: 1.0,
        }

    def test_unknown_tier(self):
        with pytest.raises(ValueError):
            profile_for("ultra")

    def test_degrade_and_upgrade_saturate(self):
        assert DeviceTier.LOW.degraded() is DeviceTier.LOW
        assert DeviceTier.HIGH.upgraded() is DeviceTier.HIGH
        assert DeviceTier.MEDIUM.degraded() is DeviceTier.LOW


class TestPerformanceTierMonitor:
    """Tests for frame-rate driven tier changes"""

    def test_no_samples_reports_sixty(self):
        assert PerformanceTierMonitor().average_frame_rate == 60.0

    def test_degrades_after_sustained_low_frame_rate(self):
        monitor = PerformanceTierMonitor(DeviceTier.HIGH)
        assert monitor.observe(20) is None
        assert monitor.observe(20) is None
        assert monitor.observe(20) is DeviceTier.MEDIUM
        assert monitor.tier is DeviceTier.MEDIUM

    def test_upgrades_after_sustained_high_frame_rate(self):
        monitor = PerformanceTierMonitor(DeviceTier.LOW)
        results = [monitor.observe(60) for _ in range(5)]
        assert results[:4] == [None] * 4
        assert results[4] is DeviceTier.MEDIUM

    def test_middle_frame_rate_resets_streak(self):
        monitor = PerformanceTierMonitor(DeviceTier.HIGH, window=1)
        monitor.observe(20)
        monitor.observe(20)
        monitor.observe(40)
        assert monitor.observe(20) is None
        assert monitor.tier is DeviceTier.HIGH

    def test_low_tier_cannot_degrade(self):
        monitor = PerformanceTierMonitor(DeviceTier.LOW)
        assert all(monitor.observe(10) is None for _ in range(10))

    def test_fragment_limit(self):
        monitor = PerformanceTierMonitor(DeviceTier.LOW)
        assert not monitor.exceeds_fragment_limit(12)
        assert monitor.exceeds_fragment_limit(13)

    def test_reset(self):
        monitor = PerformanceTierMonitor(DeviceTier.HIGH)
        monitor.observe(10)
        monitor.reset(DeviceTier.LOW)
        assert monitor.tier is DeviceTier.LOW
        assert monitor.average_frame_rate == 60.0
