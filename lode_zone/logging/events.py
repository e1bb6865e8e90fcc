"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for the zone distribution engine.

Event Naming Convention:
    <component>.<category>.<action>

    component: zone, viewport, device, error
    category: layout, rebalance, weights, fragments
    action: initialized, triggered, reset, exceeded

Example Log Query (CloudWatch Insights):
    fields @timestamp, event, metadata.balance_score
    | filter event = "zone.rebalance.triggered"
    | stats count() by bin(5m)
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - zone.*: Zone layout, selection and rebalancing
    - viewport.*: Viewport resize / orientation handling
    - device.*: Device tier and preference signals
    - error.*: Error conditions
    """

    # ========== Zone Events ==========
    ZONES_INITIALIZED = "zone.layout.initialized"
    """A new zone generation was built for a viewport."""

    EXTREME_ASPECT_FALLBACK = "zone.layout.extreme_aspect_fallback"
    """Viewport aspect ratio forced the fallback layout configuration."""

    REBALANCE_TRIGGERED = "zone.rebalance.triggered"
    """Over-dense zones had their weights damped."""

    WEIGHTS_RESET = "zone.weights.reset"
    """Zone weights restored to their base values."""

    UNKNOWN_ZONE_IGNORED = "zone.unknown_ignored"
    """Usage/release referenced a zone id not in the current generation."""

    MAX_FRAGMENTS_EXCEEDED = "zone.fragments.limit_exceeded"
    """Active fragments exceed the tier limit."""

    MANAGER_DESTROYED = "zone.manager.destroyed"
    """Zone manager torn down."""

    # ========== Viewport Events ==========
    VIEWPORT_CHANGE_SCHEDULED = "viewport.change.scheduled"
    """Viewport change received and debounced."""

    VIEWPORT_CHANGED = "viewport.changed"
    """Debounced viewport change applied (layout rebuilt)."""

    # ========== Device Events ==========
    TIER_CHANGED = "device.tier_changed"
    """Performance tier changed (explicitly or by frame-rate monitoring)."""

    REDUCED_MOTION_CHANGED = "device.reduced_motion_changed"
    """Reduced-motion preference toggled."""

    LOW_POWER_MODE = "device.low_power"
    """Battery fell below threshold while discharging."""

    # ========== Error Events ==========
    INVALID_STATE = "error.invalid_state"
    """Operation attempted on an empty or uninitialized layout."""


ZONE_EVENTS = {
    LogEvent.ZONES_INITIALIZED,
    LogEvent.EXTREME_ASPECT_FALLBACK,
    LogEvent.REBALANCE_TRIGGERED,
    LogEvent.WEIGHTS_RESET,
    LogEvent.UNKNOWN_ZONE_IGNORED,
    LogEvent.MAX_FRAGMENTS_EXCEEDED,
    LogEvent.MANAGER_DESTROYED,
}

VIEWPORT_EVENTS = {
    LogEvent.VIEWPORT_CHANGE_SCHEDULED,
    LogEvent.VIEWPORT_CHANGED,
}

DEVICE_EVENTS = {
    LogEvent.TIER_CHANGED,
    LogEvent.REDUCED_MOTION_CHANGED,
    LogEvent.LOW_POWER_MODE,
}

ERROR_EVENTS = {
    LogEvent.INVALID_STATE,
}
