"""
Rendering Layer
===============

Stateless drawing of zone layouts (debugging and demos).
"""

from lode_zone.rendering.visualizer import DEFAULT_KIND_COLORS, ZoneLayoutVisualizer

__all__ = ['DEFAULT_KIND_COLORS', 'ZoneLayoutVisualizer']
