"""
Geometry Layer
==============

Bounded Context: Pure viewport geometry.

Responsibilities:
- Rectangle and viewport representation (immutable)
- Point containment, area, sampling
- NO selection, NO usage tracking, NO drawing

Design Philosophy:
- Pure functions where possible
- Immutable data structures
- Fail-fast validation
"""

from lode_zone.geometry.shapes import Orientation, Viewport, ZoneBounds

__all__ = [
    "Orientation",
    "Viewport",
    "ZoneBounds",
]
