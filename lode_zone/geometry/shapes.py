"""
Geometric Shapes Module
========================

Pure geometric representations - NO state, NO side effects.

Design:
- Immutable shapes (frozen dataclass pattern)
- Axis-aligned rectangles only: zones are a small fixed set, no spatial index
- Points are supervision Points, shared with the rendering layer
- Degenerate (zero-area) rectangles are legal
"""

import numpy as np
import supervision as sv
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Orientation(str, Enum):
    """Viewport orientation (reporting only; formulas do not depend on it)."""
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"


@dataclass(frozen=True)
class Viewport:
    """
    Viewport dimensions in pixels.

    Attributes:
        width: Viewport width (px)
        height: Viewport height (px)
    """

    width: int
    height: int

    def __post_init__(self):
        """Validate dimensions."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Viewport dimensions must be positive, got {self.width}x{self.height}"
            )

    @property
    def orientation(self) -> Orientation:
        """Landscape when width >= height."""
        if self.width >= self.height:
            return Orientation.LANDSCAPE
        return Orientation.PORTRAIT

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @property
    def min_dimension(self) -> int:
        return min(self.width, self.height)

    def as_tuple(self) -> Tuple[int, int]:
        """(width, height), same convention as frame_resolution_wh."""
        return (self.width, self.height)


@dataclass(frozen=True)
class ZoneBounds:
    """
    Immutable axis-aligned rectangle in viewport pixel coordinates.

    Invariants:
        - x_min <= x_max
        - y_min <= y_max

    Attributes:
        x_min, x_max: Horizontal span (px)
        y_min, y_max: Vertical span (px)
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self):
        """Validate ranges (fail fast on inverted spans)."""
        if self.x_min > self.x_max:
            raise ValueError(f"x range inverted: min={self.x_min} > max={self.x_max}")
        if self.y_min > self.y_max:
            raise ValueError(f"y range inverted: min={self.y_min} > max={self.y_max}")

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def area(self) -> float:
        """Area in square pixels; zero for degenerate bounds."""
        return self.width * self.height

    def center(self) -> sv.Point:
        """Midpoint of the rectangle."""
        return sv.Point(
            x=(self.x_min + self.x_max) / 2,
            y=(self.y_min + self.y_max) / 2,
        )

    def contains(self, x: float, y: float) -> bool:
        """Inclusive bounds test on both axes."""
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max

    def random_position(
        self,
        margin: float = 0.0,
        rng: Optional[np.random.Generator] = None,
    ) -> sv.Point:
        """
        Uniformly sample a point inside the bounds shrunk by `margin`.

        The margin is a fraction of each axis span removed from both sides.
        A margin of 0.5 or more collapses the range, so the center is returned.

        Args:
            margin: Fraction in [0.0, 1.0]
            rng: numpy Generator (default: fresh default_rng())

        Returns:
            Sampled point
        """
        if not 0.0 <= margin <= 1.0:
            raise ValueError(f"margin must be in [0.0, 1.0], got {margin}")

        if margin >= 0.5:
            return self.center()

        rng = rng if rng is not None else np.random.default_rng()

        margin_x = self.width * margin
        margin_y = self.height * margin
        x = rng.uniform(self.x_min + margin_x, self.x_max - margin_x)
        y = rng.uniform(self.y_min + margin_y, self.y_max - margin_y)

        return sv.Point(x=float(x), y=float(y))

    def to_rect(self) -> sv.Rect:
        """Convert to supervision Rect (x, y, width, height) for drawing."""
        return sv.Rect(x=self.x_min, y=self.y_min, width=self.width, height=self.height)

    def to_dict(self) -> dict:
        """Nested {x: {min, max}, y: {min, max}} form used by collaborators."""
        return {
            "x": {"min": self.x_min, "max": self.x_max},
            "y": {"min": self.y_min, "max": self.y_max},
        }
