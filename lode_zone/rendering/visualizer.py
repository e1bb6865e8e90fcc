"""
Zone Layout Visualizer Module
=============================

Pure visualization layer for zone layouts and usage.

Design:
- Stateless rendering (works on ZoneView snapshots only)
- No business logic
- Fill opacity follows relative usage so clusters stand out
- Uses supervision drawing utilities

Dependencies:
- supervision (draw utilities, Color, Point, Rect)
- numpy (frames)
"""

from typing import Dict, Iterable, Optional

import numpy as np
import supervision as sv

from lode_zone.geometry.shapes import Viewport
from lode_zone.zone import ZoneKind, ZoneView

DEFAULT_KIND_COLORS: Dict[ZoneKind, sv.Color] = {
    ZoneKind.EDGE: sv.Color(r=66, g=135, b=245),
    ZoneKind.CENTER: sv.Color(r=245, g=166, b=35),
    ZoneKind.TRANSITION: sv.Color(r=126, g=211, b=33),
}


class ZoneLayoutVisualizer:
    """
    Stateless visualizer for zone layouts.

    Usage:
        visualizer = ZoneLayoutVisualizer()
        frame = visualizer.blank_frame(manager.viewport)
        frame = visualizer.draw_layout(frame, manager.get_zones())
    """

    def __init__(
        self,
        kind_colors: Optional[Dict[ZoneKind, sv.Color]] = None,
        text_color: sv.Color = sv.Color(r=255, g=255, b=255),
        text_background_color: sv.Color = sv.Color(r=0, g=0, b=0),
        thickness: int = 2,
        text_scale: float = 0.5,
        text_thickness: int = 1,
        text_padding: int = 4,
        min_opacity: float = 0.15,
        max_opacity: float = 0.6,
    ):
        """
        Args:
            kind_colors: Color per zone kind (default: DEFAULT_KIND_COLORS)
            text_color: Color for labels
            text_background_color: Background color for labels
            thickness: Outline thickness
            text_scale: Scale factor for labels
            text_thickness: Thickness for labels
            text_padding: Padding for label background
            min_opacity: Fill opacity of an unused zone
            max_opacity: Fill opacity of the most used zone
        """
        if not 0.0 <= min_opacity <= max_opacity <= 1.0:
            raise ValueError(
                f"Expected 0 <= min_opacity <= max_opacity <= 1, got {min_opacity}, {max_opacity}"
            )

        self.kind_colors = dict(kind_colors or DEFAULT_KIND_COLORS)
        self.text_color = text_color
        self.text_background_color = text_background_color
        self.thickness = thickness
        self.text_scale = text_scale
        self.text_thickness = text_thickness
        self.text_padding = text_padding
        self.min_opacity = min_opacity
        self.max_opacity = max_opacity

    @staticmethod
    def blank_frame(viewport: Viewport) -> np.ndarray:
        """Black BGR frame sized to the viewport."""
        return np.zeros((int(viewport.height), int(viewport.width), 3), dtype=np.uint8)

    def opacity_for(self, view: ZoneView, max_active: int) -> float:
        if max_active <= 0:
            return self.min_opacity
        share = min(view.active_count / max_active, 1.0)
        return self.min_opacity + (self.max_opacity - self.min_opacity) * share

    def draw_zone(
        self,
        frame: np.ndarray,
        view: ZoneView,
        opacity: Optional[float] = None,
        label: bool = True,
    ) -> np.ndarray:
        """
        Draw one zone: translucent fill, outline and optional usage label.

        Args:
            frame: Frame to draw on
            view: Zone snapshot
            opacity: Fill opacity (default: min_opacity)
            label: Draw "id: active/total" at the zone center

        Returns:
            Frame with the zone drawn
        """
        color = self.kind_colors[view.kind]
        rect = view.bounds.to_rect()

        frame = sv.draw_filled_rectangle(
            scene=frame,
            rect=rect,
            color=color,
            opacity=self.min_opacity if opacity is None else opacity,
        )
        frame = sv.draw_rectangle(
            scene=frame,
            rect=rect,
            color=color,
            thickness=self.thickness,
        )

        if label:
            center = view.center()
            frame = sv.draw_text(
                scene=frame,
                text=str(view),
                text_anchor=sv.Point(x=int(center.x), y=int(center.y)),
                text_color=self.text_color,
                text_scale=self.text_scale,
                text_thickness=self.text_thickness,
                text_padding=self.text_padding,
                background_color=self.text_background_color,
            )

        return frame

    def draw_layout(
        self,
        frame: np.ndarray,
        views: Iterable[ZoneView],
        labels: bool = True,
    ) -> np.ndarray:
        """
        Draw every zone, fill opacity scaled by active count.

        Centers are drawn last so they stay visible over the edge bands.
        """
        views = list(views)
        max_active = max((view.active_count for view in views), default=0)
        order = {ZoneKind.EDGE: 0, ZoneKind.TRANSITION: 1, ZoneKind.CENTER: 2}

        for view in sorted(views, key=lambda v: order[v.kind]):
            frame = self.draw_zone(
                frame,
                view,
                opacity=self.opacity_for(view, max_active),
                label=labels,
            )
        return frame
