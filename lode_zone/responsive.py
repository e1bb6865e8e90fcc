"""
Responsive Adapter Module
=========================

Bounded Context: Viewport and device-signal driven layout adaptation.

Design:
- Composition: wraps a plain ZoneManager and adjusts its calls, no subclassing
- Debounce without timers: a pending viewport carries a deadline and is
  applied by poll(), which select_zone() calls first
- Every applied signal rebuilds the layout from scratch (clean generation)
- Strategy forcing: low tier, low battery or reduced motion -> edge-only
"""

from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Dict, Optional, Union

from lode_zone.config import LayoutConfig
from lode_zone.geometry.shapes import Viewport
from lode_zone.layout import MAX_EDGE_MARGIN, ZoneLayoutBuilder, clamp_layout_fractions
from lode_zone.logging import LogEvent, StructuredLogger, create_logger
from lode_zone.manager import ZoneManager
from lode_zone.selection.strategies import Strategy
from lode_zone.tiers import DeviceTier, PerformanceTierMonitor, TierProfile, profile_for
from lode_zone.zone import ZoneKind

ORIENTATION_EXTRA_DELAY = 100.0  # ms on top of orientation_change_delay
SIGNIFICANT_SIZE_CHANGE = 0.1

MOBILE_WEIGHT_FACTORS = {ZoneKind.CENTER: 1.5, ZoneKind.EDGE: 0.7}
LOW_MOTION_WEIGHT_FACTORS = {ZoneKind.EDGE: 1.5, ZoneKind.CENTER: 0.6}


@dataclass(frozen=True)
class DeviceSignals:
    """External device signals consumed by the adapter."""

    tier: DeviceTier = DeviceTier.MEDIUM
    reduced_motion: bool = False
    battery_level: float = 1.0
    charging: bool = True

    def __post_init__(self):
        """Validate signals."""
        object.__setattr__(self, 'tier', DeviceTier(self.tier))
        if not 0.0 <= self.battery_level <= 1.0:
            raise ValueError(f"battery_level must be in [0.0, 1.0], got {self.battery_level}")


@dataclass(frozen=True)
class AdapterStatus:
    """Immutable snapshot of the adapter state."""

    viewport: Optional[Viewport]
    tier: DeviceTier
    is_mobile: bool
    reduced_motion: bool
    low_power: bool
    strategy: Strategy
    pending_viewport: bool

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['viewport'] = list(self.viewport.as_tuple()) if self.viewport else None
        data['tier'] = self.tier.value
        data['strategy'] = self.strategy.value
        return data


class ResponsiveAdapter:
    """
    Keeps a ZoneManager's layout in step with viewport and device signals.

    Usage:
        adapter = ResponsiveAdapter(ZoneManager(config), DeviceSignals(tier="high"))
        adapter.attach(Viewport(1920, 1080))

        adapter.on_viewport_change(Viewport(1080, 1920))  # debounced
        zone_id = adapter.select_zone()  # applies pending change when due
        adapter.record_zone_usage(zone_id)
    """

    def __init__(
        self,
        manager: ZoneManager,
        signals: Optional[DeviceSignals] = None,
        clock: Optional[Callable[[], float]] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            manager: Wrapped zone manager
            signals: Initial device signals (default: medium tier, no preferences)
            clock: Millisecond clock (default: the manager's clock)
            logger: Structured logger (default: create_logger("responsive"))
        """
        self.manager = manager
        self.config = manager.config.responsive
        self.layout_config: LayoutConfig = manager.config.layout
        self._clock = clock or manager.now
        self.logger = logger or create_logger("responsive")

        self._signals = signals or DeviceSignals()
        self._builder = ZoneLayoutBuilder()
        self._monitor = PerformanceTierMonitor(
            self._signals.tier,
            frame_rate_threshold=self.config.frame_rate_threshold,
        )

        self._viewport: Optional[Viewport] = None
        self._pending: Optional[Viewport] = None
        self._pending_deadline: Optional[float] = None

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def signals(self) -> DeviceSignals:
        return self._signals

    @property
    def viewport(self) -> Optional[Viewport]:
        return self._viewport

    @property
    def profile(self) -> TierProfile:
        return profile_for(self._signals.tier)

    def is_mobile(self, viewport: Optional[Viewport] = None) -> bool:
        viewport = viewport or self._viewport
        return viewport is not None and viewport.width <= self.config.mobile_breakpoint

    @property
    def low_power(self) -> bool:
        """Battery at or below threshold and discharging."""
        return (
            self._signals.battery_level <= self.config.battery_level_threshold
            and not self._signals.charging
        )

    @property
    def forces_edge_only(self) -> bool:
        return (
            self.low_power
            or self._signals.reduced_motion
            or self._signals.tier is DeviceTier.LOW
        )

    def effective_strategy(self, requested: Union[Strategy, str, None] = None) -> Strategy:
        """Strategy actually used for a request under the current signals."""
        if self.forces_edge_only:
            return Strategy.EDGE_ONLY
        if requested is None:
            return self.profile.strategy
        return Strategy.parse(requested)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def adapted_config(self, viewport: Viewport) -> LayoutConfig:
        """
        Layout config for the viewport under the current signals.

        Starts from the builder's viewport resolution, then applies mobile
        touch sizing and the low-tier center shrink.
        """
        resolved = self._builder.resolve_config(viewport, self.layout_config)
        edge = resolved.edge_margin
        center = resolved.center_zone_size
        transition = resolved.transition_zone_width

        if self.is_mobile(viewport):
            min_dimension = viewport.min_dimension
            touch_size = max(
                min_dimension * self.config.touch_zone_size,
                self.config.min_touch_zone_size,
            )
            edge = max(edge, touch_size / min_dimension)
            center = 0.6 if viewport.width <= self.config.small_screen_threshold else 0.5
            transition = 0.2

        if not self.profile.center_traversal:
            center *= 0.8

        return clamp_layout_fractions(replace(
            resolved,
            edge_margin=min(edge, MAX_EDGE_MARGIN),
            center_zone_size=center,
            transition_zone_width=transition,
        ))

    def attach(self, viewport: Viewport) -> None:
        """Build the first generation for the host's viewport."""
        self._viewport = viewport
        self._pending = None
        self._pending_deadline = None
        self._rebuild()

    def _rebuild(self) -> None:
        viewport = self._viewport
        if viewport is None:
            return

        profile = self.profile
        mobile = self.is_mobile(viewport)

        self.manager.initialize_zones(viewport, self.adapted_config(viewport), resolve=False)
        self.manager.apply_kind_weights(profile.weights)
        if mobile:
            self.manager.apply_kind_weights(MOBILE_WEIGHT_FACTORS, multiply=True)
        if self.low_power or self._signals.reduced_motion:
            self.manager.apply_kind_weights(LOW_MOTION_WEIGHT_FACTORS, multiply=True)

        distribution = self.manager.config.distribution
        self.manager.default_strategy = profile.strategy
        self.manager.max_active_fragments = profile.max_active_fragments
        self.manager.configure_selection(
            center_traversal=profile.center_traversal,
            complex_paths=profile.complex_paths,
            max_zone_density=profile.max_zone_density,
            center_probability=(
                self.config.mobile_center_probability if mobile else distribution.center_probability
            ),
            kind_bias={ZoneKind.CENTER: self.config.mobile_center_bias} if mobile else {},
        )

    # ------------------------------------------------------------------
    # Viewport signals
    # ------------------------------------------------------------------

    def on_viewport_change(self, viewport: Viewport) -> None:
        """
        Schedule a viewport change (resize or orientation change).

        Orientation flips wait orientation_change_delay + 100 ms, plain
        resizes wait resize_debounce_time. A newer event replaces the
        pending one and restarts the wait.
        """
        reference = self._viewport
        orientation_change = reference is not None and reference.orientation != viewport.orientation

        if orientation_change:
            delay = self.layout_config.orientation_change_delay + ORIENTATION_EXTRA_DELAY
        else:
            delay = self.layout_config.resize_debounce_time

        self._pending = viewport
        self._pending_deadline = self._clock() + delay

        self.logger.debug(
            event=LogEvent.VIEWPORT_CHANGE_SCHEDULED,
            message=f"Viewport change to {viewport.width}x{viewport.height} scheduled",
            metadata={'delay_ms': delay, 'orientation_change': orientation_change},
        )

    @property
    def has_pending_change(self) -> bool:
        return self._pending is not None

    def poll(self, force: bool = False) -> bool:
        """
        Apply the pending viewport change if its debounce has elapsed.

        Args:
            force: Apply regardless of the deadline

        Returns:
            True if the layout was rebuilt
        """
        if self._pending is None:
            return False
        if not force and self._clock() < self._pending_deadline:
            return False

        viewport = self._pending
        self._pending = None
        self._pending_deadline = None

        previous = self._viewport
        if previous is not None and not self.changed_significantly(previous, viewport):
            return False

        self._viewport = viewport
        self._rebuild()

        orientation_change = previous is not None and previous.orientation != viewport.orientation
        self.logger.info(
            event=LogEvent.VIEWPORT_CHANGED,
            message=(
                f"Recalculated zones: "
                f"{previous.width if previous else 0}x{previous.height if previous else 0} -> "
                f"{viewport.width}x{viewport.height}"
            ),
            metadata={
                'reason': 'orientation_change' if orientation_change else 'viewport_resize',
                'orientation': viewport.orientation.value,
            },
        )
        return True

    def changed_significantly(self, previous: Viewport, current: Viewport) -> bool:
        """Orientation flip, >10% size change, or aspect change above threshold."""
        if previous.orientation != current.orientation:
            return True

        width_change = abs(current.width - previous.width) / previous.width
        height_change = abs(current.height - previous.height) / previous.height
        if width_change > SIGNIFICANT_SIZE_CHANGE or height_change > SIGNIFICANT_SIZE_CHANGE:
            return True

        aspect_change = abs(current.aspect_ratio - previous.aspect_ratio)
        return aspect_change > self.layout_config.aspect_ratio_threshold

    # ------------------------------------------------------------------
    # Device signals
    # ------------------------------------------------------------------

    def set_device_tier(self, tier: Union[DeviceTier, str]) -> None:
        tier = DeviceTier(tier)
        if tier is self._signals.tier:
            return

        previous = self._signals.tier
        self._signals = replace(self._signals, tier=tier)
        self._monitor.reset(tier)

        self.logger.info(
            event=LogEvent.TIER_CHANGED,
            message=f"Performance tier set to: {tier.value}",
            metadata={
                'previous': previous.value,
                'tier': tier.value,
                'strategy': self.profile.strategy.value,
                'center_traversal': self.profile.center_traversal,
            },
        )
        self._rebuild()

    def set_reduced_motion(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled == self._signals.reduced_motion:
            return

        self._signals = replace(self._signals, reduced_motion=enabled)
        self.logger.info(
            event=LogEvent.REDUCED_MOTION_CHANGED,
            message=f"Reduced motion {'enabled' if enabled else 'disabled'}",
        )
        self._rebuild()

    def set_battery_status(self, level: float, charging: bool) -> None:
        was_low_power = self.low_power
        self._signals = replace(self._signals, battery_level=level, charging=bool(charging))

        if self.low_power == was_low_power:
            return

        if self.low_power:
            self.logger.info(
                event=LogEvent.LOW_POWER_MODE,
                message=f"Applying low battery optimizations ({round(level * 100)}%)",
                metadata={'battery_level': level, 'charging': charging},
            )
        self._rebuild()

    def report_frame_rate(self, frame_rate: float) -> Optional[DeviceTier]:
        """
        Feed a frame-rate sample to the tier monitor.

        A tier change rebuilds the layout; exceeding the tier's fragment
        limit triggers rebalancing.

        Returns:
            The new tier if it changed, else None
        """
        new_tier = self._monitor.observe(frame_rate)
        if new_tier is not None:
            self.set_device_tier(new_tier)

        if self._monitor.exceeds_fragment_limit(self.manager.total_active_fragments()):
            self.manager.trigger_rebalancing()

        return new_tier

    # ------------------------------------------------------------------
    # Manager surface
    # ------------------------------------------------------------------

    def select_zone(self, strategy: Union[Strategy, str, None] = None) -> str:
        """Apply any due viewport change, then select with the effective strategy."""
        self.poll()
        return self.manager.select_zone(self.effective_strategy(strategy))

    def record_zone_usage(self, zone_id: str) -> bool:
        return self.manager.record_zone_usage(zone_id)

    def record_zone_release(self, zone_id: str) -> bool:
        return self.manager.record_zone_release(zone_id)

    def status(self) -> AdapterStatus:
        return AdapterStatus(
            viewport=self._viewport,
            tier=self._signals.tier,
            is_mobile=self.is_mobile(),
            reduced_motion=self._signals.reduced_motion,
            low_power=self.low_power,
            strategy=self.effective_strategy(),
            pending_viewport=self._pending is not None,
        )
