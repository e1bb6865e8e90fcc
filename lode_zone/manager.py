"""
Zone Manager Module
===================

Bounded Context: Orchestration of the zone distribution engine.

Design:
- Owns one ZoneLayout generation, the placement history and the rebalancer
- Closed feedback loop: select -> record usage -> stats -> rebalance -> weights
- Single-threaded and cooperative: no timers; the delayed weight reset is
  checked on the next selection
- Mutating calls are serialized behind one lock for multi-threaded hosts
- Fail fast on selection from an empty layout; tolerate stale zone ids

Dependencies:
- numpy (random generator)
- supervision (Point for suggested positions)
"""

import threading
from typing import Callable, Dict, List, Mapping, Optional, Union

import numpy as np
import supervision as sv

from lode_zone.analytics.rebalancer import Rebalancer
from lode_zone.analytics.stats import DistributionStats, balance_score, total_active
from lode_zone.analytics.tracker import DistributionHistoryEntry, DistributionTracker
from lode_zone.clock import monotonic_ms
from lode_zone.config import EngineConfig, LayoutConfig
from lode_zone.errors import InvalidStateError
from lode_zone.geometry.shapes import Viewport
from lode_zone.layout import ZoneLayout, ZoneLayoutBuilder, is_extreme_aspect_ratio
from lode_zone.logging import LogEvent, StructuredLogger, create_logger
from lode_zone.selection.strategies import SelectionParams, Strategy, select_zone
from lode_zone.zone import Zone, ZoneKind, ZoneView


class ZoneManager:
    """
    Places fragments across a viewport's zones with usage feedback.

    Usage:
        manager = ZoneManager(EngineConfig(seed=7))
        manager.initialize_zones(Viewport(1920, 1080))

        zone_id = manager.select_zone("organic")
        manager.record_zone_usage(zone_id)
        ...
        manager.record_zone_release(zone_id)

        stats = manager.get_distribution_stats()
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[np.random.Generator] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            config: Engine configuration (default: EngineConfig())
            clock: Monotonic clock in milliseconds (default: time.monotonic based)
            rng: Random generator (default: seeded from config.seed)
            logger: Structured logger (default: create_logger("manager"))
        """
        self.config = config or EngineConfig()
        self._clock = clock or monotonic_ms
        self._rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.logger = logger or create_logger("manager")

        distribution = self.config.distribution
        self._builder = ZoneLayoutBuilder(weight_floor=distribution.weight_floor)
        self._tracker = DistributionTracker(distribution.max_history_size)
        self._rebalancer = Rebalancer(
            max_density_ratio=self.config.layout.max_density_ratio,
            damping_factor=distribution.damping_factor,
            weight_floor=distribution.weight_floor,
        )

        self._layout: Optional[ZoneLayout] = None
        self._weights_reset_at: Optional[float] = None
        self._selection_overrides: Dict[str, object] = {}
        self._lock = threading.RLock()

        self.default_strategy = Strategy.BALANCED
        self.max_active_fragments: Optional[int] = None

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def initialize_zones(
        self,
        viewport: Viewport,
        config: Optional[LayoutConfig] = None,
        resolve: bool = True,
    ) -> None:
        """
        Build a fresh zone generation for the viewport.

        Previous zones, their statistics and the placement history are
        discarded; nothing is carried over.

        Args:
            viewport: Current viewport
            config: Layout config (default: the engine's layout config)
            resolve: Apply viewport-driven config resolution
        """
        base = config or self.config.layout

        with self._lock:
            self._layout = self._builder.build(viewport, base, resolve=resolve)
            self._tracker.clear()
            self._weights_reset_at = None
            self._rebalancer.max_density_ratio = self._layout.config.max_density_ratio

        resolved = self._layout.config
        if resolve and is_extreme_aspect_ratio(viewport):
            self.logger.info(
                event=LogEvent.EXTREME_ASPECT_FALLBACK,
                message=f"Applied extreme aspect ratio config for {viewport.width}x{viewport.height}",
                metadata={
                    'aspect_ratio': round(viewport.aspect_ratio, 3),
                    'center_zone_size': resolved.center_zone_size,
                    'transition_zone_width': resolved.transition_zone_width,
                },
            )

        self.logger.info(
            event=LogEvent.ZONES_INITIALIZED,
            message=f"Initialized {len(self._layout)} zones for {viewport.width}x{viewport.height} viewport",
            metadata={
                'viewport': list(viewport.as_tuple()),
                'orientation': viewport.orientation.value,
                'edge_margin': resolved.edge_margin,
                'center_zone_size': resolved.center_zone_size,
                'transition_zone_width': resolved.transition_zone_width,
            },
        )

    @property
    def is_initialized(self) -> bool:
        return self._layout is not None and len(self._layout) > 0

    @property
    def viewport(self) -> Optional[Viewport]:
        return self._layout.viewport if self._layout is not None else None

    @property
    def layout_config(self) -> Optional[LayoutConfig]:
        """Resolved layout config of the current generation."""
        return self._layout.config if self._layout is not None else None

    def now(self) -> float:
        """Current time on the manager's clock (ms)."""
        return self._clock()

    def _zones(self) -> List[Zone]:
        if self._layout is None:
            return []
        return list(self._layout)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def configure_selection(self, **overrides) -> None:
        """
        Override SelectionParams fields (e.g. center_traversal, kind_bias).

        Replaces any previous overrides.
        """
        # Fail fast on unknown field names
        SelectionParams.from_config(self.config.layout, self.config.distribution, **overrides)
        with self._lock:
            self._selection_overrides = dict(overrides)

    def selection_params(self) -> SelectionParams:
        layout_config = self.layout_config or self.config.layout
        return SelectionParams.from_config(
            layout_config, self.config.distribution, **self._selection_overrides
        )

    def select_zone(self, strategy: Union[Strategy, str, None] = None) -> str:
        """
        Select a zone for the next placement.

        Does not record usage; callers report it with record_zone_usage().

        Args:
            strategy: Strategy or name (default: default_strategy)

        Returns:
            Selected zone id

        Raises:
            InvalidStateError: If zones have not been initialized
            ValueError: If the strategy name is unknown
        """
        with self._lock:
            if not self.is_initialized:
                error = InvalidStateError("Zones not initialized; call initialize_zones() first")
                self.logger.error(
                    event=LogEvent.INVALID_STATE,
                    message="Zone selection attempted on an empty layout",
                    exc_info=error,
                )
                raise error

            now = self._clock()
            self._reset_weights_if_due(now)

            params = self.selection_params()
            recent = self._tracker.recent_kinds(params.organic_window)

            return select_zone(
                self._zones(),
                strategy if strategy is not None else self.default_strategy,
                recent,
                self._rng,
                now,
                params,
            )

    def suggest_position(self, zone_id: str, margin: float = 0.1) -> Optional[sv.Point]:
        """Random point inside a zone (None for unknown ids)."""
        with self._lock:
            zone = self._layout.get(zone_id) if self._layout is not None else None
            if zone is None:
                return None
            return zone.random_position(margin, self._rng)

    # ------------------------------------------------------------------
    # Usage tracking
    # ------------------------------------------------------------------

    def record_zone_usage(self, zone_id: str) -> bool:
        """
        Record a placement in a zone.

        Unknown ids (e.g. from a replaced generation) are ignored.

        Returns:
            True if the zone exists and was updated
        """
        with self._lock:
            zone = self._layout.get(zone_id) if self._layout is not None else None
            if zone is None:
                self._log_unknown(zone_id, "usage")
                return False

            now = self._clock()
            zone.record_usage(now)
            self._tracker.record(zone.zone_id, zone.kind, now)

            zones = self._zones()
            score = balance_score(zones)
            if score < self.config.distribution.rebalance_threshold:
                self.trigger_rebalancing()

            active = total_active(zones)

        if self.max_active_fragments is not None and active > self.max_active_fragments:
            self.logger.warning(
                event=LogEvent.MAX_FRAGMENTS_EXCEEDED,
                message=f"Exceeding maximum active fragments ({active}/{self.max_active_fragments})",
                metadata={'active_fragments': active, 'max_allowed': self.max_active_fragments},
            )

        return True

    def record_zone_release(self, zone_id: str) -> bool:
        """
        Record that a placement left a zone.

        Returns:
            True if the zone exists and was updated
        """
        with self._lock:
            zone = self._layout.get(zone_id) if self._layout is not None else None
            if zone is None:
                self._log_unknown(zone_id, "release")
                return False
            zone.release()
            return True

    def _log_unknown(self, zone_id: str, operation: str) -> None:
        self.logger.debug(
            event=LogEvent.UNKNOWN_ZONE_IGNORED,
            message=f"Ignoring {operation} for unknown zone '{zone_id}'",
            metadata={'zone_id': zone_id, 'operation': operation},
        )

    @property
    def history(self) -> List[DistributionHistoryEntry]:
        return self._tracker.entries

    def total_active_fragments(self) -> int:
        return total_active(self._zones())

    # ------------------------------------------------------------------
    # Weights
    # ------------------------------------------------------------------

    def trigger_rebalancing(self) -> List[str]:
        """
        Damp the weights of over-dense zones and schedule a weight reset.

        Returns:
            Ids of damped zones
        """
        with self._lock:
            zones = self._zones()
            if not zones:
                return []

            damped = self._rebalancer.rebalance(zones)
            # Earliest pending reset wins
            if self._weights_reset_at is None:
                self._weights_reset_at = self._clock() + self.config.distribution.weight_reset_delay
            score = balance_score(zones)

        self.logger.info(
            event=LogEvent.REBALANCE_TRIGGERED,
            message=f"Rebalanced {len(damped)} zone(s)",
            metadata={'zones': damped, 'balance_score': round(score, 4)},
        )
        return damped

    def reset_zone_weights(self) -> None:
        """Restore every zone's weight to its base weight."""
        with self._lock:
            self._rebalancer.reset_weights(self._zones())
            self._weights_reset_at = None

        self.logger.info(
            event=LogEvent.WEIGHTS_RESET,
            message="Zone weights restored to base values",
        )

    def _reset_weights_if_due(self, now: float) -> None:
        if self._weights_reset_at is not None and now >= self._weights_reset_at:
            self.reset_zone_weights()

    def apply_kind_weights(
        self,
        weights: Mapping[ZoneKind, float],
        multiply: bool = False,
    ) -> None:
        """
        Set (or scale) base weights per zone kind for the current generation.

        Args:
            weights: Weight per kind; kinds not present are left alone
            multiply: Scale the current base weight instead of replacing it
        """
        with self._lock:
            for zone in self._zones():
                if zone.kind not in weights:
                    continue
                factor = weights[zone.kind]
                zone.base_weight = zone.base_weight * factor if multiply else factor
                zone.weight = zone.base_weight

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_zone(self, zone_id: str) -> Optional[ZoneView]:
        """Snapshot of a zone, or None if it is not in the current generation."""
        with self._lock:
            zone = self._layout.get(zone_id) if self._layout is not None else None
            return zone.snapshot() if zone is not None else None

    def get_zones_by_type(self, kind: Union[ZoneKind, str]) -> List[ZoneView]:
        kind = ZoneKind(kind)
        with self._lock:
            return [zone.snapshot() for zone in self._zones() if zone.kind == kind]

    def get_zones(self) -> List[ZoneView]:
        with self._lock:
            return [zone.snapshot() for zone in self._zones()]

    def get_distribution_stats(self, recent: int = 10) -> DistributionStats:
        """Aggregate statistics plus the last `recent` placements."""
        with self._lock:
            return DistributionStats.from_zones(self._zones(), self._tracker.recent(recent))

    def destroy(self) -> None:
        """Tear down the current generation and history."""
        with self._lock:
            final_stats = DistributionStats.from_zones(self._zones())
            self._layout = None
            self._tracker.clear()
            self._weights_reset_at = None

        self.logger.info(
            event=LogEvent.MANAGER_DESTROYED,
            message="Zone manager destroyed",
            metadata={'final_stats': str(final_stats)},
        )

    def __repr__(self) -> str:
        return (
            f"ZoneManager(zones={len(self._zones())}, history={len(self._tracker)}, "
            f"strategy={self.default_strategy.value})"
        )
