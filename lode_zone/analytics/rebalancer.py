"""
Rebalancer Module
=================

The engine's corrective mechanism against sustained clustering.

Design:
- Damps the weight of every over-dense zone toward a floor
- Converges: floor + (w - floor) * damping never crosses the floor
- Restoring weights is explicit (reset_weights)
"""

from typing import Iterable, List

from lode_zone.analytics.stats import average_density
from lode_zone.zone import Zone


class Rebalancer:
    """
    Damps weights of zones whose density exceeds average x max_density_ratio.

    Usage:
        rebalancer = Rebalancer(max_density_ratio=2.0, damping_factor=0.7, weight_floor=0.05)
        damped = rebalancer.rebalance(zones)  # ids of damped zones
    """

    def __init__(
        self,
        max_density_ratio: float = 2.0,
        damping_factor: float = 0.7,
        weight_floor: float = 0.05,
    ):
        if not 0.0 < damping_factor < 1.0:
            raise ValueError(f"damping_factor must be in (0.0, 1.0), got {damping_factor}")
        if weight_floor <= 0:
            raise ValueError(f"weight_floor must be > 0, got {weight_floor}")

        self.max_density_ratio = max_density_ratio
        self.damping_factor = damping_factor
        self.weight_floor = weight_floor

    def overloaded(self, zones: Iterable[Zone]) -> List[Zone]:
        """Zones whose density exceeds the average by more than max_density_ratio."""
        zones = list(zones)
        threshold = average_density(zones) * self.max_density_ratio
        return [zone for zone in zones if zone.density() > threshold]

    def damp(self, weight: float) -> float:
        if weight <= self.weight_floor:
            return weight
        return self.weight_floor + (weight - self.weight_floor) * self.damping_factor

    def rebalance(self, zones: Iterable[Zone]) -> List[str]:
        """
        Damp every overloaded zone.

        Returns:
            Ids of the zones whose weight was reduced
        """
        damped = []
        for zone in self.overloaded(zones):
            zone.weight = max(zone.weight_floor, self.damp(zone.weight))
            damped.append(zone.zone_id)
        return damped

    @staticmethod
    def reset_weights(zones: Iterable[Zone]) -> None:
        for zone in zones:
            zone.reset_weight()
