"""Immutable lifting equipment profiles and load-chart lookup."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from liftcore.config import INTERPOLATE, STEP
from liftcore.errors import InvalidInputError
from liftcore.models.constants import EQUIPMENT_KINDS


@dataclass(frozen=True)
class ChartPoint:
    radius: float    # m
    capacity: float  # kg


@dataclass(frozen=True)
class Outriggers:
    count: int
    spread_width: float  # m between outriggers, as rigged
    min_spread: float
    max_spread: float


@dataclass(frozen=True)
class BoomEnvelope:
    base_length: float    # m
    max_extension: float  # m
    sections: int
    luffing_min: float = 0.0   # deg
    luffing_max: float = 85.0  # deg


@dataclass(frozen=True)
class EquipmentProfile:
    """A crane configuration with its load chart.

    The load chart is ordered by radius and capacity never increases as the
    radius grows. Construction rejects charts that break this.
    """

    id: str
    name: str
    kind: str
    max_capacity: float    # kg
    max_radius: float      # m
    max_height: float      # m
    length: float          # m, carrier footprint
    width: float           # m
    outriggers: Outriggers
    ground_bearing: float  # kg/cm2 exerted on the ground
    boom: BoomEnvelope
    load_chart: Tuple[ChartPoint, ...]
    description: str = ""
    wheelbase: Optional[float] = None

    def __post_init__(self) -> None:
        if self.kind not in EQUIPMENT_KINDS:
            raise InvalidInputError(f"{self.id}: unknown equipment kind {self.kind!r}")
        if not self.load_chart:
            raise InvalidInputError(f"{self.id}: load chart is empty")
        for value, label in (
            (self.max_capacity, "max capacity"),
            (self.max_radius, "max radius"),
            (self.ground_bearing, "ground bearing"),
            (self.outriggers.spread_width, "outrigger spread"),
        ):
            if not math.isfinite(value) or value <= 0:
                raise InvalidInputError(f"{self.id}: {label} must be positive, got {value}")

        radii = self.chart_radii
        capacities = self.chart_capacities
        if np.any(capacities <= 0) or not np.all(np.isfinite(capacities)):
            raise InvalidInputError(f"{self.id}: chart capacities must be positive")
        if np.any(np.diff(radii) <= 0):
            raise InvalidInputError(f"{self.id}: chart radii must be strictly increasing")
        if np.any(np.diff(capacities) > 0):
            raise InvalidInputError(f"{self.id}: chart capacity increases with radius")

    @property
    def chart_radii(self) -> np.ndarray:
        return np.array([p.radius for p in self.load_chart], dtype=float)

    @property
    def chart_capacities(self) -> np.ndarray:
        return np.array([p.capacity for p in self.load_chart], dtype=float)

    def capacity_at(self, radius: float, lookup: str = STEP) -> float:
        """Rated capacity (kg) at a working radius; 0 beyond the chart.

        ``step`` reads the first chart row whose radius is at or beyond the
        working radius. ``interpolate`` blends the bracketing rows linearly and
        holds the first row's capacity inside the smallest charted radius.
        """
        radii = self.chart_radii
        capacities = self.chart_capacities
        if radius > radii[-1]:
            return 0.0
        if lookup == INTERPOLATE:
            return float(np.interp(radius, radii, capacities))
        idx = int(np.searchsorted(radii, radius, side="left"))
        return float(capacities[idx])
