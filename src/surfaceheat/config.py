"""
Simulation Configuration
========================
This module holds every construction parameter of a simulation in one place.

Why is this file needed?
------------------------
1. Single source of truth: grid size, temperatures, rates and time step are
   read by the grid, the integrator and the loop from the same object.
2. Presets: the two beam variants (focal point, sun beam) differ only in a
   handful of values, so they are exposed as named constructors.
3. Validation: misconfiguration (non-positive dimensions, non-positive time
   step, ...) is rejected once, at construction time.

Exports:
    ConfigurationError: Raised for invalid parameters or pattern names.
    SimulationConfig: The configuration dataclass.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, fields
import json
import logging
import math
import numbers
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Invalid simulation parameters."""


_NUMERIC_FIELDS = (
    "ambient_temp", "source_temp", "diffusion_rate", "cooling_rate", "time_step",
    "source_radius", "heat_threshold", "smoothing", "frame_delay",
)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass
class SimulationConfig:
    """
    Construction parameters of a beam heating simulation.

    Stability of the explicit scheme (diffusion_rate * time_step) is the
    caller's responsibility and is not checked.
    """
    grid_size: Tuple[int, int] = (50, 50)
    ambient_temp: float = 25.0          # °C
    source_temp: float = 100.0          # °C
    diffusion_rate: float = 0.1
    cooling_rate: float = 0.02
    time_step: float = 0.1              # s
    source_radius: float = 3.0          # grid cells, 0 = single point
    track_dissipation: bool = False
    heat_threshold: float = 45.0        # °C above ambient
    smoothing: float = 0.7              # weight of the newest distance sample
    frame_delay: float = 0.01           # s, animation pacing only

    def __post_init__(self) -> None:
        if not isinstance(self.grid_size, (list, tuple)):
            raise ConfigurationError(f"grid_size must be a pair of integers, got {self.grid_size!r}.")
        self.grid_size = tuple(self.grid_size)
        self.validate()

    # --- presets ---

    @classmethod
    def focal_point(cls, **overrides: Any) -> SimulationConfig:
        """Single-cell beam at 500 °C with dissipation tracking."""
        params: Dict[str, Any] = dict(source_temp=500.0, source_radius=0.0, track_dissipation=True)
        params.update(overrides)
        return cls(**params)

    @classmethod
    def sun_beam(cls, **overrides: Any) -> SimulationConfig:
        """Disk-shaped beam of radius 3 at 100 °C."""
        params: Dict[str, Any] = dict(source_temp=100.0, source_radius=3.0, track_dissipation=False)
        params.update(overrides)
        return cls(**params)

    # --- derived ---

    @property
    def rows(self) -> int:
        return int(self.grid_size[0])

    @property
    def cols(self) -> int:
        return int(self.grid_size[1])

    @property
    def is_point_source(self) -> bool:
        return self.source_radius == 0

    # --- validation ---

    def validate(self) -> None:
        """
        Reject parameters the numerical core cannot work with.

        Raises:
            ConfigurationError: On the first invalid parameter found.
        """
        if len(self.grid_size) != 2 or not all(_is_number(v) and math.isfinite(v) for v in self.grid_size):
            raise ConfigurationError(f"grid_size must be two numbers, got {self.grid_size!r}.")
        rows, cols = self.grid_size
        if int(rows) != rows or int(cols) != cols or rows <= 0 or cols <= 0:
            raise ConfigurationError(f"grid_size must be two positive integers, got {self.grid_size!r}.")

        for name in _NUMERIC_FIELDS:
            value = getattr(self, name)
            if not _is_number(value):
                raise ConfigurationError(f"{name} must be a number, got {value!r}.")

        if not isinstance(self.track_dissipation, bool):
            raise ConfigurationError(f"track_dissipation must be true or false, got {self.track_dissipation!r}.")

        if not math.isfinite(self.time_step) or self.time_step <= 0:
            raise ConfigurationError(f"time_step must be positive and finite, got {self.time_step}.")

        for name in ("ambient_temp", "source_temp", "heat_threshold"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value}.")

        for name in ("diffusion_rate", "cooling_rate", "source_radius", "frame_delay"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ConfigurationError(f"{name} must be non-negative and finite, got {value}.")

        if not 0.0 <= self.smoothing <= 1.0:
            raise ConfigurationError(f"smoothing must lie in [0, 1], got {self.smoothing}.")

    # --- serialization ---

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["grid_size"] = list(self.grid_size)
        return d

    @staticmethod
    def from_dict(data: Dict[str, Any], base: Optional[SimulationConfig] = None) -> SimulationConfig:
        """
        Build a configuration from a dictionary.

        Args:
            data: Field values; missing keys fall back to `base` (or the defaults).
            base: Configuration supplying the values not present in `data`.
        """
        known = {f.name for f in fields(SimulationConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}.")
        params = base.to_dict() if base is not None else {}
        params.update(data)
        return SimulationConfig(**params)

    @staticmethod
    def from_json(filepath: str | Path, base: Optional[SimulationConfig] = None) -> SimulationConfig:
        """
        Load a configuration from a JSON file.

        Keys missing in the file are taken from `base`, or keep their defaults.
        """
        logger.info(f"Loading configuration from: {filepath}")
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Configuration file '{filepath}' is not valid JSON: {e}")
            raise ConfigurationError(f"Invalid JSON in '{filepath}': {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file '{filepath}' must contain a JSON object.")
        return SimulationConfig.from_dict(data, base=base)
