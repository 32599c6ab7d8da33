from liftcore.models.constants import LIMITS, WEIGHTS, SEVERITY_SCORE, LIKELIHOOD_SCORE
from liftcore.models.geometry import Point, Rect, distance, distance_to_rect
from liftcore.models.equipment import BoomEnvelope, ChartPoint, EquipmentProfile, Outriggers
from liftcore.models.scenario import (
    GroundZone,
    LoadSpecification,
    ScenarioSummary,
    SiteObstruction,
    SuccessCriteria,
    TrainingScenario,
)
from liftcore.models.attempt import BoomConfiguration, Placement, ScenarioAttempt

__all__ = [
    "LIMITS",
    "WEIGHTS",
    "SEVERITY_SCORE",
    "LIKELIHOOD_SCORE",
    "Point",
    "Rect",
    "distance",
    "distance_to_rect",
    "BoomEnvelope",
    "ChartPoint",
    "EquipmentProfile",
    "Outriggers",
    "GroundZone",
    "LoadSpecification",
    "ScenarioSummary",
    "SiteObstruction",
    "SuccessCriteria",
    "TrainingScenario",
    "BoomConfiguration",
    "Placement",
    "ScenarioAttempt",
]
