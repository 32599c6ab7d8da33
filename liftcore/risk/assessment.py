"""Risk assessment for a lift plan.

Hazards are enumerated from the site, the ground, the load, the equipment
and the environment, each scored on a severity x likelihood matrix. The
total score is bucketed into a risk level, and any single critical hazard
vetoes proceeding whatever the aggregate says.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from liftcore.config import DEFAULT_SETTINGS, EngineSettings
from liftcore.logger import get_logger
from liftcore.models.constants import LIKELIHOOD_SCORE, LIMITS, RISK_BUCKETS, SEVERITY_SCORE
from liftcore.models.equipment import EquipmentProfile
from liftcore.models.geometry import Point, distance, distance_to_rect
from liftcore.models.scenario import GroundZone, SiteObstruction, TrainingScenario
from liftcore.verification.lift_verification import validate_plan_inputs

log = get_logger("lift-training.risk")


# ---------------------------------------------------------------------------
# Hazard variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hazard:
    """Common hazard fields. Use one of the origin-specific subclasses."""

    category: str  # structural, environmental, operational, equipment
    severity: str
    likelihood: str
    description: str
    consequence: str
    source: str

    def __post_init__(self) -> None:
        if type(self) is Hazard:
            raise TypeError("Hazard is abstract; construct an origin-specific hazard")

    @property
    def hazard_id(self) -> str:
        raise NotImplementedError

    @property
    def risk_level(self) -> int:
        return SEVERITY_SCORE[self.severity] * LIKELIHOOD_SCORE[self.likelihood]

    @property
    def is_critical(self) -> bool:
        return self.severity == "critical"


@dataclass(frozen=True)
class ObstructionHazard(Hazard):
    obstruction_id: str = ""
    obstruction_kind: str = ""
    clearance: float = 0.0

    @property
    def hazard_id(self) -> str:
        return f"obstruction:{self.obstruction_id}"


@dataclass(frozen=True)
class GroundHazard(Hazard):
    zone_id: str = ""
    ground_kind: str = ""

    @property
    def hazard_id(self) -> str:
        return f"ground:{self.zone_id}"


@dataclass(frozen=True)
class LoadHazard(Hazard):
    load_id: str = ""
    kind: str = ""  # fragile, overload

    @property
    def hazard_id(self) -> str:
        return f"load:{self.kind}:{self.load_id}"


@dataclass(frozen=True)
class EquipmentHazard(Hazard):
    equipment_id: str = ""

    @property
    def hazard_id(self) -> str:
        return f"equipment:undersized:{self.equipment_id}"


@dataclass(frozen=True)
class EnvironmentalHazard(Hazard):
    kind: str = ""  # power_lines
    obstruction_ids: Tuple[str, ...] = ()

    @property
    def hazard_id(self) -> str:
        return f"environment:{self.kind}"


@dataclass(frozen=True)
class MitigationStrategy:
    hazard_id: str
    strategy: str
    effectiveness: str  # low, medium, high
    implementation: str
    responsible: str


@dataclass(frozen=True)
class RiskAssessment:
    scenario_id: str
    hazards: List[Hazard] = field(default_factory=list)
    mitigations: List[MitigationStrategy] = field(default_factory=list)

    @property
    def total_risk_score(self) -> int:
        return sum(h.risk_level for h in self.hazards)

    @property
    def risk_level(self) -> str:
        return risk_bucket(self.total_risk_score)

    @property
    def critical_hazards(self) -> List[Hazard]:
        return [h for h in self.hazards if h.is_critical]

    @property
    def safe_to_proceed(self) -> bool:
        return self.risk_level != "critical" and not self.critical_hazards

    @property
    def hazard_ids(self) -> List[str]:
        return [h.hazard_id for h in self.hazards]


def risk_bucket(total: int) -> str:
    for upper, level in RISK_BUCKETS:
        if total <= upper:
            return level
    return "critical"


# ---------------------------------------------------------------------------
# Assessment
# ---------------------------------------------------------------------------


def assess_risks(
    scenario: TrainingScenario,
    equipment: EquipmentProfile,
    crane_pos: Point,
    load_pos: Point,
    settings: EngineSettings | None = None,
) -> RiskAssessment:
    """Enumerate and score every hazard of a proposed lift.

    Raises:
        InvalidInputError: A position is non-finite or off site.
    """
    settings = settings or DEFAULT_SETTINGS
    validate_plan_inputs(scenario, crane_pos, load_pos)

    hazards: List[Hazard] = []
    for obs in scenario.obstructions:
        hazard = obstruction_hazard(obs, crane_pos)
        if hazard is not None:
            hazards.append(hazard)

    # Site-wide: every soft patch is a hazard, not only the one under the crane
    for zone in scenario.ground_zones:
        hazard = ground_hazard(zone, equipment)
        if hazard is not None:
            hazards.append(hazard)

    hazards.extend(load_hazards(scenario, equipment, crane_pos, load_pos, settings))
    hazards.extend(equipment_hazards(scenario, equipment))
    hazards.extend(environmental_hazards(scenario))

    mitigations: List[MitigationStrategy] = []
    for hazard in hazards:
        mitigations.extend(mitigations_for(hazard))

    assessment = RiskAssessment(scenario.id, hazards, mitigations)
    log.debug(
        "assessed %s with %s: %d hazards, total %d (%s)",
        scenario.id, equipment.id, len(hazards),
        assessment.total_risk_score, assessment.risk_level,
    )
    return assessment


def obstruction_hazard(obs: SiteObstruction, crane_pos: Point) -> ObstructionHazard | None:
    if obs.hazard_level == "low":
        return None

    gap = distance_to_rect(crane_pos, obs.area)
    severity = "high" if obs.hazard_level == "high" else "medium"
    if gap < LIMITS.min_clearance:
        likelihood = "likely"
    elif gap < LIMITS.possible_contact_distance:
        likelihood = "possible"
    else:
        likelihood = "unlikely"

    return ObstructionHazard(
        category="structural",
        severity=severity,
        likelihood=likelihood,
        description=f"Proximity to {obs.description}",
        consequence=f"Collision with {obs.description} could cause load drop or equipment damage",
        source=obs.description,
        obstruction_id=obs.id,
        obstruction_kind=obs.kind,
        clearance=gap,
    )


def ground_hazard(zone: GroundZone, equipment: EquipmentProfile) -> GroundHazard | None:
    if zone.kind == "hard":
        return None

    severity = "high" if zone.risk_level == "high" else "medium"
    likelihood = "likely" if zone.bearing_capacity < equipment.ground_bearing else "possible"
    return GroundHazard(
        category="environmental",
        severity=severity,
        likelihood=likelihood,
        description=f"{zone.kind} ground conditions",
        consequence="Crane could sink or tip due to insufficient ground bearing",
        source=zone.description,
        zone_id=zone.id,
        ground_kind=zone.kind,
    )


def load_hazards(
    scenario: TrainingScenario,
    equipment: EquipmentProfile,
    crane_pos: Point,
    load_pos: Point,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> List[LoadHazard]:
    load = scenario.load
    hazards: List[LoadHazard] = []

    if load.fragile:
        hazards.append(
            LoadHazard(
                category="operational",
                severity="high",
                likelihood="possible",
                description="Fragile load requires careful handling",
                consequence="Load damage if tilted beyond safe angle",
                source=f"{load.name} is fragile",
                load_id=load.id,
                kind="fragile",
            )
        )

    capacity = equipment.capacity_at(distance(crane_pos, load_pos), settings.capacity_lookup)
    if capacity < load.weight:
        hazards.append(
            LoadHazard(
                category="operational",
                severity="critical",
                likelihood="almost-certain",
                description="Load exceeds crane capacity",
                consequence="Crane failure, load drop, personnel injury or death",
                source=f"Load weight ({load.weight:.0f}kg) exceeds capacity ({capacity:.0f}kg)",
                load_id=load.id,
                kind="overload",
            )
        )
    return hazards


def equipment_hazards(
    scenario: TrainingScenario, equipment: EquipmentProfile
) -> List[EquipmentHazard]:
    # Radius-independent; may co-occur with the overload hazard
    if equipment.max_capacity >= scenario.load.weight:
        return []
    return [
        EquipmentHazard(
            category="equipment",
            severity="critical",
            likelihood="almost-certain",
            description="Crane is undersized for this load",
            consequence="Crane failure and load drop",
            source=(
                f"Crane capacity ({equipment.max_capacity:.0f}kg) "
                f"less than load ({scenario.load.weight:.0f}kg)"
            ),
            equipment_id=equipment.id,
        )
    ]


def environmental_hazards(scenario: TrainingScenario) -> List[EnvironmentalHazard]:
    power_lines = tuple(o.id for o in scenario.obstructions if o.kind == "power_line")
    if not power_lines:
        return []
    return [
        EnvironmentalHazard(
            category="environmental",
            severity="critical",
            likelihood="possible",
            description="High voltage power lines present",
            consequence="Electrocution of personnel or equipment damage",
            source="Power lines on site",
            kind="power_lines",
            obstruction_ids=power_lines,
        )
    ]


# ---------------------------------------------------------------------------
# Mitigation
# ---------------------------------------------------------------------------


def mitigations_for(hazard: Hazard) -> List[MitigationStrategy]:
    """Recommended controls for a hazard, most specific first.

    Critical hazards always end with a do-not-proceed strategy.
    """
    hid = hazard.hazard_id
    strategies: List[MitigationStrategy] = []

    if isinstance(hazard, ObstructionHazard):
        strategies.append(MitigationStrategy(
            hid,
            "Maintain minimum 2m clearance from obstructions",
            "high",
            "Reposition crane or use spotters to monitor clearance",
            "Crane operator and site supervisor",
        ))
        if hazard.obstruction_kind == "power_line":
            strategies.append(_power_line_exclusion(hid))
    elif isinstance(hazard, GroundHazard):
        strategies.append(MitigationStrategy(
            hid,
            "Use ground reinforcement or matting",
            "high",
            "Place steel plates or mats under outriggers",
            "Site supervisor",
        ))
    elif isinstance(hazard, LoadHazard) and hazard.kind == "fragile":
        strategies.append(MitigationStrategy(
            hid,
            "Use specialised rigging and limit tilt angle",
            "high",
            "Use spreader bars and angle limiters",
            "Rigger and crane operator",
        ))
    elif isinstance(hazard, LoadHazard) and hazard.kind == "overload":
        strategies.append(MitigationStrategy(
            hid,
            "Reduce working radius",
            "high",
            "Move the crane closer to the load and re-check the load chart",
            "Lift planner",
        ))
    elif isinstance(hazard, EquipmentHazard):
        strategies.append(MitigationStrategy(
            hid,
            "Select a crane rated for the load",
            "high",
            "Choose equipment whose maximum capacity exceeds the load weight",
            "Lift planner",
        ))
    elif isinstance(hazard, EnvironmentalHazard) and hazard.kind == "power_lines":
        strategies.append(_power_line_exclusion(hid))

    if hazard.is_critical:
        strategies.append(MitigationStrategy(
            hid,
            "DO NOT PROCEED - Resolve critical hazard first",
            "high",
            "Modify plan or select different equipment",
            "Site supervisor and planner",
        ))
    return strategies


def _power_line_exclusion(hazard_id: str) -> MitigationStrategy:
    return MitigationStrategy(
        hazard_id,
        "Establish an exclusion zone around power lines",
        "medium",
        "Arrange isolation with the network operator or fit goal posts and a banksman",
        "Site supervisor and appointed person",
    )
