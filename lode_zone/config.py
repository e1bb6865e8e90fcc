"""
Configuration schema for the zone distribution engine.

Defines layout geometry fractions, selection/rebalancing tunables and the
responsive (device signal) thresholds. All configs are frozen; derived
configs are produced with dataclasses.replace, never by mutation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import yaml


def _check_fraction(name: str, value: float) -> None:
    if not 0.0 < value < 1.0:
        raise ValueError(f"{name} must be in (0.0, 1.0), got {value}")


def _check_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")


@dataclass(frozen=True)
class LayoutConfig:
    """
    Zone layout configuration.

    Fractions are relative to the viewport (see ZoneLayoutBuilder for the
    exact formulas). Delays are in milliseconds.
    """

    edge_margin: float = 0.05  # fraction of min(width, height)
    center_zone_size: float = 0.4  # fraction of min(width, height)
    transition_zone_width: float = 0.15  # fraction of each axis
    max_density_ratio: float = 2.0
    orientation_change_delay: float = 300.0
    resize_debounce_time: float = 250.0
    min_zone_size: float = 40.0  # px
    small_viewport_threshold: int = 600
    large_viewport_threshold: int = 1200
    aspect_ratio_threshold: float = 0.2

    def __post_init__(self):
        """Validate layout configuration."""
        _check_fraction("edge_margin", self.edge_margin)
        _check_fraction("center_zone_size", self.center_zone_size)
        _check_fraction("transition_zone_width", self.transition_zone_width)
        _check_positive("max_density_ratio", self.max_density_ratio)
        _check_positive("min_zone_size", self.min_zone_size)

        if self.orientation_change_delay < 0 or self.resize_debounce_time < 0:
            raise ValueError(
                f"Delays must be >= 0, got orientation_change_delay="
                f"{self.orientation_change_delay}, resize_debounce_time={self.resize_debounce_time}"
            )

        if self.small_viewport_threshold >= self.large_viewport_threshold:
            raise ValueError(
                f"small_viewport_threshold ({self.small_viewport_threshold}) must be "
                f"below large_viewport_threshold ({self.large_viewport_threshold})"
            )


@dataclass(frozen=True)
class DistributionConfig:
    """Selection, history and rebalancing tunables."""

    max_history_size: int = 50
    recency_window: float = 5000.0  # ms since last use before the recency bonus applies
    recency_bonus: float = 1.5
    density_penalty: float = 0.3
    center_probability: float = 0.7
    organic_window: int = 5
    rebalance_threshold: float = 0.3
    damping_factor: float = 0.7
    weight_floor: float = 0.05
    weight_reset_delay: float = 10000.0

    def __post_init__(self):
        """Validate distribution configuration."""
        if self.max_history_size < 1:
            raise ValueError(f"max_history_size must be >= 1, got {self.max_history_size}")

        if self.organic_window < 1:
            raise ValueError(f"organic_window must be >= 1, got {self.organic_window}")

        _check_fraction("damping_factor", self.damping_factor)
        _check_fraction("density_penalty", self.density_penalty)
        _check_positive("weight_floor", self.weight_floor)
        _check_positive("recency_bonus", self.recency_bonus)

        if not 0.0 <= self.center_probability <= 1.0:
            raise ValueError(
                f"center_probability must be in [0.0, 1.0], got {self.center_probability}"
            )

        if not 0.0 <= self.rebalance_threshold <= 1.0:
            raise ValueError(
                f"rebalance_threshold must be in [0.0, 1.0], got {self.rebalance_threshold}"
            )


@dataclass(frozen=True)
class ResponsiveConfig:
    """Device-signal thresholds used by ResponsiveAdapter."""

    mobile_breakpoint: int = 768
    small_screen_threshold: int = 360
    min_touch_zone_size: float = 44.0  # px
    touch_zone_size: float = 0.15
    mobile_center_probability: float = 0.8
    mobile_center_bias: float = 1.3
    battery_level_threshold: float = 0.2
    frame_rate_threshold: float = 30.0

    def __post_init__(self):
        """Validate responsive configuration."""
        if self.small_screen_threshold > self.mobile_breakpoint:
            raise ValueError(
                f"small_screen_threshold ({self.small_screen_threshold}) must not exceed "
                f"mobile_breakpoint ({self.mobile_breakpoint})"
            )

        _check_fraction("touch_zone_size", self.touch_zone_size)
        _check_positive("mobile_center_bias", self.mobile_center_bias)
        _check_positive("frame_rate_threshold", self.frame_rate_threshold)

        if not 0.0 <= self.battery_level_threshold <= 1.0:
            raise ValueError(
                f"battery_level_threshold must be in [0.0, 1.0], got {self.battery_level_threshold}"
            )


@dataclass(frozen=True)
class EngineConfig:
    """
    Top-level configuration for a zone manager and its responsive adapter.

    Immutable after construction (frozen dataclass). Each manager owns one;
    nothing is shared at module level.
    """

    layout: LayoutConfig = field(default_factory=LayoutConfig)
    distribution: DistributionConfig = field(default_factory=DistributionConfig)
    responsive: ResponsiveConfig = field(default_factory=ResponsiveConfig)
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Build from a plain dict (sections are optional)."""
        data = data or {}
        return cls(
            layout=LayoutConfig(**data.get("layout", {})),
            distribution=DistributionConfig(**data.get("distribution", {})),
            responsive=ResponsiveConfig(**data.get("responsive", {})),
            seed=data.get("seed"),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "EngineConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            seed: 42

            layout:
              edge_margin: 0.05
              center_zone_size: 0.4
              max_density_ratio: 2.0

            distribution:
              max_history_size: 50
              damping_factor: 0.7

            responsive:
              mobile_breakpoint: 768
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data)
