"""
Lode Zone
=========

Bounded Context: Spatial distribution of transient visual fragments.

Design Philosophy:
- Separation of Concerns: Geometry, Layout, Selection, Analytics, Rendering
- Closed feedback loop: select -> record usage -> stats -> rebalance -> weights
- Deterministic under a seed: clock and random generator are injectable
- Fail fast on programming errors, tolerate stale zone ids

Architecture:

    lode_zone/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   └── shapes.py      # Viewport, ZoneBounds, Orientation
    │
    ├── zone.py            # Zone (mutable stats), ZoneView (snapshot)
    ├── layout.py          # ZoneLayoutBuilder: viewport -> 13 zones
    │
    ├── selection/         # Weighted-random selection (stateless)
    │   └── strategies.py  # Strategy, SelectionParams, select_zone
    │
    ├── analytics/         # Statistics & rebalancing (stateful)
    │   ├── tracker.py     # DistributionTracker (bounded history)
    │   ├── stats.py       # DistributionStats, balance_score
    │   └── rebalancer.py  # Rebalancer (weight damping)
    │
    ├── rendering/         # Visualization (stateless drawing)
    │   └── visualizer.py  # ZoneLayoutVisualizer
    │
    ├── manager.py         # ZoneManager (orchestration)
    ├── tiers.py           # DeviceTier profiles, PerformanceTierMonitor
    └── responsive.py      # ResponsiveAdapter (viewport/device signals)

Usage:

    # 1. Plain engine
    from lode_zone import EngineConfig, Viewport, ZoneManager

    manager = ZoneManager(EngineConfig(seed=42))
    manager.initialize_zones(Viewport(1920, 1080))

    zone_id = manager.select_zone("organic")
    manager.record_zone_usage(zone_id)
    position = manager.suggest_position(zone_id)
    ...
    manager.record_zone_release(zone_id)

    stats = manager.get_distribution_stats()

    # 2. Responsive (device signals, debounced viewport changes)
    from lode_zone import DeviceSignals, ResponsiveAdapter

    adapter = ResponsiveAdapter(manager, DeviceSignals(tier="low"))
    adapter.attach(Viewport(390, 844))
    adapter.on_viewport_change(Viewport(844, 390))
    zone_id = adapter.select_zone()  # edge-only on low tier

    # 3. Visualize
    from lode_zone.rendering import ZoneLayoutVisualizer

    visualizer = ZoneLayoutVisualizer()
    frame = visualizer.draw_layout(
        visualizer.blank_frame(manager.viewport), manager.get_zones()
    )
"""

# Configuration
from lode_zone.config import DistributionConfig, EngineConfig, LayoutConfig, ResponsiveConfig

# Errors
from lode_zone.errors import InvalidStateError, ZoneError

# Geometry + layout
from lode_zone.geometry.shapes import Orientation, Viewport, ZoneBounds
from lode_zone.zone import Zone, ZoneKind, ZoneView
from lode_zone.layout import ZoneLayout, ZoneLayoutBuilder

# Selection
from lode_zone.selection.strategies import SelectionParams, Strategy

# Analytics
from lode_zone.analytics.tracker import DistributionHistoryEntry
from lode_zone.analytics.stats import DistributionStats

# Orchestration
from lode_zone.manager import ZoneManager
from lode_zone.tiers import DeviceTier, PerformanceTierMonitor, TierProfile
from lode_zone.responsive import AdapterStatus, DeviceSignals, ResponsiveAdapter

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "DistributionConfig",
    "EngineConfig",
    "LayoutConfig",
    "ResponsiveConfig",
    # Errors
    "InvalidStateError",
    "ZoneError",
    # Geometry + layout
    "Orientation",
    "Viewport",
    "ZoneBounds",
    "Zone",
    "ZoneKind",
    "ZoneView",
    "ZoneLayout",
    "ZoneLayoutBuilder",
    # Selection
    "SelectionParams",
    "Strategy",
    # Analytics
    "DistributionHistoryEntry",
    "DistributionStats",
    # Orchestration
    "ZoneManager",
    "DeviceTier",
    "PerformanceTierMonitor",
    "TierProfile",
    "AdapterStatus",
    "DeviceSignals",
    "ResponsiveAdapter",
]
