"""Training scenario definitions: site, obstructions, ground zones and the load."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from liftcore.errors import InvalidInputError
from liftcore.models.constants import DIFFICULTIES, GROUND_KINDS, HAZARD_LEVELS, OBSTRUCTION_KINDS
from liftcore.models.geometry import Point, Rect


@dataclass(frozen=True)
class SiteObstruction:
    """Something on site the crane and load must stay clear of."""

    id: str
    kind: str  # building, tree, power_line, fence, vehicle, other
    area: Rect
    hazard_level: str  # low, medium, high
    description: str
    notes: str = ""

    def __post_init__(self) -> None:
        if self.kind not in OBSTRUCTION_KINDS:
            raise InvalidInputError(f"{self.id}: unknown obstruction kind {self.kind!r}")
        if self.hazard_level not in HAZARD_LEVELS:
            raise InvalidInputError(f"{self.id}: unknown hazard level {self.hazard_level!r}")


@dataclass(frozen=True)
class GroundZone:
    """An area of uniform ground with a bearing capacity in kg/cm2."""

    id: str
    kind: str  # hard, soft, sloped, uneven, water
    area: Rect
    bearing_capacity: float
    risk_level: str
    description: str
    notes: str = ""

    def __post_init__(self) -> None:
        if self.kind not in GROUND_KINDS:
            raise InvalidInputError(f"{self.id}: unknown ground kind {self.kind!r}")
        if self.risk_level not in HAZARD_LEVELS:
            raise InvalidInputError(f"{self.id}: unknown risk level {self.risk_level!r}")
        if not math.isfinite(self.bearing_capacity) or self.bearing_capacity <= 0:
            raise InvalidInputError(
                f"{self.id}: bearing capacity must be positive, got {self.bearing_capacity}"
            )


@dataclass(frozen=True)
class LoadSpecification:
    id: str
    name: str
    weight: float  # kg
    width: float   # m
    height: float
    depth: float
    cog_offset: Point = Point(0.0, 0.0)
    fragile: bool = False
    max_tilt_angle: Optional[float] = None  # deg
    description: str = ""

    def __post_init__(self) -> None:
        if not math.isfinite(self.weight) or self.weight <= 0:
            raise InvalidInputError(f"{self.id}: load weight must be positive, got {self.weight}")


@dataclass(frozen=True)
class SuccessCriteria:
    safe_positioning: bool = True
    capacity_verified: bool = True
    radius_correct: bool = True
    ground_bearing_ok: bool = True
    obstacles_cleared: bool = True
    risk_identified: bool = True


@dataclass(frozen=True)
class TrainingScenario:
    """A published training exercise. Immutable once in a catalog."""

    id: str
    title: str
    description: str
    difficulty: str  # beginner, intermediate, advanced
    category: str
    site_width: float
    site_height: float
    obstructions: Tuple[SiteObstruction, ...]
    ground_zones: Tuple[GroundZone, ...]
    load: LoadSpecification
    load_position: Point
    eligible_equipment: Tuple[str, ...] = ()
    restricted_equipment: Tuple[str, ...] = ()
    success_criteria: SuccessCriteria = SuccessCriteria()
    site_description: str = ""
    learning_objectives: Tuple[str, ...] = ()
    common_mistakes: Tuple[str, ...] = ()
    created_by: str = ""
    created_at: str = ""
    estimated_minutes: int = 0
    metadata: Dict[str, str] = field(default_factory=dict, hash=False, compare=False)

    def __post_init__(self) -> None:
        if self.difficulty not in DIFFICULTIES:
            raise InvalidInputError(f"{self.id}: unknown difficulty {self.difficulty!r}")
        for value, label in ((self.site_width, "site width"), (self.site_height, "site height")):
            if not math.isfinite(value) or value <= 0:
                raise InvalidInputError(f"{self.id}: {label} must be positive, got {value}")

    @property
    def site(self) -> Rect:
        return Rect(0.0, 0.0, self.site_width, self.site_height)

    def obstruction(self, obstruction_id: str) -> Optional[SiteObstruction]:
        for obs in self.obstructions:
            if obs.id == obstruction_id:
                return obs
        return None


@dataclass(frozen=True)
class ScenarioSummary:
    """Listing view of a scenario for catalog browsing."""

    id: str
    title: str
    difficulty: str
    category: str
    estimated_minutes: int
    load_weight: float

    @classmethod
    def of(cls, scenario: TrainingScenario) -> ScenarioSummary:
        return cls(
            id=scenario.id,
            title=scenario.title,
            difficulty=scenario.difficulty,
            category=scenario.category,
            estimated_minutes=scenario.estimated_minutes,
            load_weight=scenario.load.weight,
        )
