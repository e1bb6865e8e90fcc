"""
Tests for ZoneLayoutVisualizer
"""
import numpy as np
import pytest

from lode_zone.geometry.shapes import Viewport
from lode_zone.rendering import ZoneLayoutVisualizer


@pytest.fixture
def small_manager(manager):
    manager.initialize_zones(Viewport(320, 240))
    return manager


class TestZoneLayoutVisualizer:
    """Tests for drawing layouts onto frames"""

    def test_blank_frame_matches_viewport(self):
        frame = ZoneLayoutVisualizer.blank_frame(Viewport(320, 240))
        assert frame.shape == (240, 320, 3)
        assert frame.dtype == np.uint8
        assert not frame.any()

    def test_draw_layout_paints_frame(self, small_manager):
        small_manager.record_zone_usage("center")
        visualizer = ZoneLayoutVisualizer()

        frame = visualizer.blank_frame(small_manager.viewport)
        out = visualizer.draw_layout(frame, small_manager.get_zones())

        assert out.shape == (240, 320, 3)
        assert out.any()

    def test_draw_zone_without_label(self, small_manager):
        visualizer = ZoneLayoutVisualizer()
        frame = visualizer.blank_frame(small_manager.viewport)
        out = visualizer.draw_zone(frame, small_manager.get_zone("edge-top"), label=False)
        assert out.any()

    def test_opacity_scales_with_usage(self, small_manager):
        small_manager.record_zone_usage("center")
        visualizer = ZoneLayoutVisualizer(min_opacity=0.1, max_opacity=0.5)

        assert visualizer.opacity_for(small_manager.get_zone("center"), 1) == pytest.approx(0.5)
        assert visualizer.opacity_for(small_manager.get_zone("edge-top"), 1) == pytest.approx(0.1)
        assert visualizer.opacity_for(small_manager.get_zone("center"), 0) == pytest.approx(0.1)

    def test_invalid_opacity_range(self):
        with pytest.raises(ValueError):
            ZoneLayoutVisualizer(min_opacity=0.8, max_opacity=0.2)
