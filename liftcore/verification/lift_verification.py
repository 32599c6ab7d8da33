"""Lift plan verification.

Five independent checks decide whether a crane placement can make the lift:

Capacity     - rated capacity at the working radius covers the load.
Radius       - the working radius is within the boom's reach.
Ground       - the ground under the crane bears the crane's pressure.
Obstacles    - the crane keeps minimum clearance from every obstruction.
Outriggers   - the outrigger footprint fits inside the site.

A plan that fails any check is still a normal result with ``is_valid`` False.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

from liftcore.config import DEFAULT_SETTINGS, EngineSettings
from liftcore.errors import InvalidInputError
from liftcore.logger import get_logger
from liftcore.models.constants import LIMITS
from liftcore.models.equipment import EquipmentProfile
from liftcore.models.geometry import Point, Rect, distance, distance_to_rect
from liftcore.models.scenario import GroundZone, TrainingScenario

log = get_logger("lift-training.verification")


@dataclass(frozen=True)
class CapacityCheck:
    passed: bool
    load_weight: float
    capacity_at_radius: float
    margin: float  # % above load weight, -1 when failing
    message: str


@dataclass(frozen=True)
class RadiusCheck:
    passed: bool
    required_radius: float
    max_radius: float
    message: str


@dataclass(frozen=True)
class GroundBearingCheck:
    passed: bool
    ground_bearing: float
    required_bearing: float
    ground_type: str
    zone_id: Optional[str]
    message: str


@dataclass(frozen=True)
class ObstacleCheck:
    passed: bool
    clearance: float  # m to the nearest obstruction, inf when there are none
    min_clearance: float
    obstacles_nearby: List[str]
    message: str


@dataclass(frozen=True)
class OutriggerCheck:
    passed: bool
    spread_required: float
    spread_available: float
    message: str


@dataclass(frozen=True)
class LiftVerification:
    """Outcome of verifying one lift plan."""

    capacity: CapacityCheck
    radius: RadiusCheck
    ground_bearing: GroundBearingCheck
    obstacles: ObstacleCheck
    outriggers: OutriggerCheck
    issues: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return all(
            check.passed
            for check in (self.capacity, self.radius, self.ground_bearing, self.obstacles, self.outriggers)
        )


def validate_plan_inputs(
    scenario: TrainingScenario, crane_pos: Point, load_pos: Point
) -> None:
    """Reject positions no check can meaningfully evaluate."""
    site = scenario.site
    for label, p in (("crane", crane_pos), ("load", load_pos)):
        if not p.is_finite:
            raise InvalidInputError(f"{label} position is not finite: ({p.x}, {p.y})")
        if not site.contains(p):
            raise InvalidInputError(
                f"{label} position ({p.x:.1f}, {p.y:.1f}) is outside the "
                f"{site.width:g}m x {site.height:g}m site"
            )


def verify_lift_plan(
    scenario: TrainingScenario,
    equipment: EquipmentProfile,
    crane_pos: Point,
    load_pos: Point,
    settings: EngineSettings | None = None,
) -> LiftVerification:
    """Run all five checks against a proposed crane and load position.

    Args:
        scenario: Site, obstructions, ground and load definition.
        equipment: Chosen crane profile.
        crane_pos: Crane centre of rotation on site.
        load_pos: Pick point of the load on site.
        settings: Engine settings; selects the load-chart lookup.

    Raises:
        InvalidInputError: A position is non-finite or off site.
    """
    settings = settings or DEFAULT_SETTINGS
    validate_plan_inputs(scenario, crane_pos, load_pos)

    radius = distance(crane_pos, load_pos)

    capacity = check_capacity(equipment, scenario.load.weight, radius, settings)
    reach = check_radius(equipment, radius)
    ground = check_ground_bearing(scenario.ground_zones, equipment, crane_pos)
    obstacles = check_obstacles(scenario, crane_pos)
    outriggers = check_outrigger_space(scenario, equipment, crane_pos)

    issues: List[str] = []
    warnings: List[str] = []
    recommendations: List[str] = []

    for check in (capacity, reach, ground, obstacles, outriggers):
        if not check.passed:
            issues.append(check.message)

    if capacity.margin < LIMITS.low_margin_warning:
        warnings.append("Low safety margin on capacity")
    if obstacles.clearance < LIMITS.min_clearance:
        warnings.append("Very close to obstructions")

    if capacity.margin < LIMITS.comfortable_margin:
        recommendations.append("Consider using a larger crane for better safety margin")
    if radius > equipment.max_radius * LIMITS.near_max_radius:
        recommendations.append("Crane is operating near maximum radius - consider repositioning")

    result = LiftVerification(
        capacity=capacity,
        radius=reach,
        ground_bearing=ground,
        obstacles=obstacles,
        outriggers=outriggers,
        issues=issues,
        warnings=warnings,
        recommendations=recommendations,
    )
    log.debug(
        "verified %s with %s at (%.1f, %.1f): valid=%s",
        scenario.id, equipment.id, crane_pos.x, crane_pos.y, result.is_valid,
    )
    return result


def check_capacity(
    equipment: EquipmentProfile,
    load_weight: float,
    radius: float,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> CapacityCheck:
    capacity = equipment.capacity_at(radius, settings.capacity_lookup)
    passed = capacity >= load_weight
    margin = (capacity - load_weight) / load_weight * 100.0 if passed else -1.0

    if passed:
        message = f"Capacity OK: {capacity:.0f}kg available for {load_weight:.0f}kg load"
    else:
        message = (
            f"Insufficient capacity: {capacity:.0f}kg available "
            f"but {load_weight:.0f}kg required"
        )
    return CapacityCheck(passed, load_weight, capacity, margin, message)


def check_radius(equipment: EquipmentProfile, radius: float) -> RadiusCheck:
    passed = radius <= equipment.max_radius
    if passed:
        message = f"Radius OK: {radius:.1f}m required, {equipment.max_radius:g}m available"
    else:
        message = (
            f"Radius exceeded: {radius:.1f}m required "
            f"but only {equipment.max_radius:g}m available"
        )
    return RadiusCheck(passed, radius, equipment.max_radius, message)


def find_ground_zone(zones, p: Point) -> Optional[GroundZone]:
    """First zone containing ``p``, in scenario order."""
    for zone in zones:
        if zone.area.contains(p):
            return zone
    return None


def check_ground_bearing(
    zones, equipment: EquipmentProfile, crane_pos: Point
) -> GroundBearingCheck:
    zone = find_ground_zone(zones, crane_pos)
    if zone is None:
        return GroundBearingCheck(
            passed=False,
            ground_bearing=0.0,
            required_bearing=equipment.ground_bearing,
            ground_type="unknown",
            zone_id=None,
            message="Crane position outside defined ground conditions",
        )

    passed = zone.bearing_capacity >= equipment.ground_bearing
    if passed:
        message = f"Ground bearing OK: {zone.kind} ground ({zone.bearing_capacity:g}kg/cm²)"
    else:
        message = (
            f"Ground bearing insufficient: {zone.kind} ground ({zone.bearing_capacity:g}kg/cm²) "
            f"but {equipment.ground_bearing:g}kg/cm² required"
        )
    return GroundBearingCheck(
        passed=passed,
        ground_bearing=zone.bearing_capacity,
        required_bearing=equipment.ground_bearing,
        ground_type=zone.kind,
        zone_id=zone.id,
        message=message,
    )


def check_obstacles(scenario: TrainingScenario, crane_pos: Point) -> ObstacleCheck:
    nearest = math.inf
    nearby: List[str] = []
    for obs in scenario.obstructions:
        gap = distance_to_rect(crane_pos, obs.area)
        if gap < LIMITS.min_clearance:
            nearby.append(obs.description)
        nearest = min(nearest, gap)

    passed = not nearby
    if passed:
        if math.isinf(nearest):
            message = "Obstacles clear: no obstructions on site"
        else:
            message = f"Obstacles clear: {nearest:.1f}m clearance maintained"
    else:
        message = f"Obstacles too close: {', '.join(nearby)}"
    return ObstacleCheck(passed, nearest, LIMITS.min_clearance, nearby, message)


def check_outrigger_space(
    scenario: TrainingScenario, equipment: EquipmentProfile, crane_pos: Point
) -> OutriggerCheck:
    spread = equipment.outriggers.spread_width
    footprint = Rect.centered_square(crane_pos, spread)
    passed = scenario.site.contains_rect(footprint)
    if passed:
        message = f"Outrigger space OK: {spread:g}m spread available"
    else:
        message = f"Insufficient outrigger space: {spread:g}m spread required"
    return OutriggerCheck(passed, spread, spread if passed else 0.0, message)
