"""
Unit tests for distribution tracking, statistics and rebalancing
"""
import pytest

from lode_zone.analytics.rebalancer import Rebalancer
from lode_zone.analytics.stats import (
    DistributionStats,
    average_density,
    balance_score,
    center_utilization,
)
from lode_zone.analytics.tracker import DistributionTracker
from lode_zone.zone import ZoneKind


class TestDistributionTracker:
    """Tests for the bounded placement history"""

    def test_fifo_eviction(self):
        tracker = DistributionTracker(max_history_size=3)
        for i in range(5):
            tracker.record(f"z{i}", ZoneKind.EDGE, float(i))

        assert len(tracker) == 3
        assert [entry.zone_id for entry in tracker.entries] == ["z2", "z3", "z4"]

    def test_recent_kinds_oldest_first(self):
        tracker = DistributionTracker()
        tracker.record("edge-top", ZoneKind.EDGE, 1.0)
        tracker.record("center", ZoneKind.CENTER, 2.0)
        tracker.record("transition-top-left", ZoneKind.TRANSITION, 3.0)

        assert tracker.recent_kinds(2) == [ZoneKind.CENTER, ZoneKind.TRANSITION]
        assert tracker.recent(0) == []

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            DistributionTracker(max_history_size=0)


class TestMetrics:
    """Tests for balance score and center utilization"""

    def test_empty_layout_is_balanced(self, hd_zones):
        assert balance_score(hd_zones) == 1.0
        assert balance_score([]) == 1.0

    def test_equal_usage_scores_high(self, hd_zones):
        for zone in hd_zones:
            zone.record_usage(now=0.0)
        assert balance_score(hd_zones) > 0.5

    def test_single_hot_zone_scores_low(self, hd_zones):
        for _ in range(10):
            hd_zones[0].record_usage(now=0.0)
        score = balance_score(hd_zones)
        assert 0.0 <= score < 0.5

    def test_center_utilization_without_placements(self, hd_zones):
        assert center_utilization(hd_zones) == 0.0

    def test_center_utilization_share(self, hd_zones):
        by_id = {zone.zone_id: zone for zone in hd_zones}
        by_id["center"].record_usage(now=0.0)
        by_id["edge-left"].record_usage(now=0.0)
        assert center_utilization(hd_zones) == pytest.approx(0.5)

    def test_average_density_of_nothing(self):
        assert average_density([]) == 0.0


class TestDistributionStats:
    """Tests for the stats snapshot"""

    def test_zone_types(self, hd_zones):
        stats = DistributionStats.from_zones(hd_zones)
        assert stats.total_zones == 13
        assert stats.zone_types == {"edge": 4, "center": 5, "transition": 4}

    def test_to_dict_keys(self, hd_zones):
        data = DistributionStats.from_zones(hd_zones).to_dict()
        for key in (
            "zoneDensity",
            "centerUtilization",
            "balanceScore",
            "totalZones",
            "zoneTypes",
            "averageDensity",
        ):
            assert key in data
        assert set(data["zoneDensity"]) == {zone.zone_id for zone in hd_zones}


class TestRebalancer:
    """Tests for weight damping"""

    def test_overloaded_zone_strictly_decreases(self, hd_zones):
        hot = hd_zones[0]
        for _ in range(10):
            hot.record_usage(now=0.0)

        rebalancer = Rebalancer()
        previous = hot.weight
        for _ in range(25):
            damped = rebalancer.rebalance(hd_zones)
            assert damped == [hot.zone_id]
            assert 0 < hot.weight < previous
            previous = hot.weight

    def test_untouched_zones_keep_weight(self, hd_zones):
        hd_zones[0].record_usage(now=0.0)
        before = [zone.weight for zone in hd_zones[1:]]
        Rebalancer().rebalance(hd_zones)
        assert [zone.weight for zone in hd_zones[1:]] == before

    def test_nothing_to_damp_when_idle(self, hd_zones):
        assert Rebalancer().rebalance(hd_zones) == []

    def test_damp_converges_above_floor(self):
        rebalancer = Rebalancer(damping_factor=0.5, weight_floor=0.1)
        assert rebalancer.damp(1.1) == pytest.approx(0.6)
        assert rebalancer.damp(0.05) == 0.05

    def test_reset_weights(self, hd_zones):
        hd_zones[0].record_usage(now=0.0)
        Rebalancer().rebalance(hd_zones)
        Rebalancer.reset_weights(hd_zones)
        assert hd_zones[0].weight == hd_zones[0].base_weight

    @pytest.mark.parametrize("kwargs", [{"damping_factor": 1.0}, {"weight_floor": 0.0}])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(ValueError):
            Rebalancer(**kwargs)
