"""Safety limits, risk-matrix tables and scoring weights for lift evaluation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LiftLimits:
    """Fixed thresholds used by the verification and risk engines."""

    # Obstacle clearance (m)
    min_clearance: float = 2.0
    possible_contact_distance: float = 5.0

    # Capacity margin above load weight (%)
    low_margin_warning: float = 20.0
    comfortable_margin: float = 50.0

    # Fraction of max radius considered "near the limit"
    near_max_radius: float = 0.8


LIMITS = LiftLimits()


@dataclass(frozen=True)
class ScoringWeights:
    """Points awarded per scoring category (five categories of 20)."""

    category_max: int = 20

    equipment_chosen: int = 10
    equipment_capacity: int = 10

    radius_ok: int = 7
    ground_ok: int = 7
    obstacles_ok: int = 6

    hazards_found: int = 10
    no_critical_hazards: int = 10
    min_hazards_found: int = 3

    per_verification_step: int = 5

    plan_valid: int = 10
    safe_to_proceed: int = 10

    pass_mark: int = 70


WEIGHTS = ScoringWeights()


SEVERITY_SCORE = {
    "low": 1,
    "medium": 2,
    "high": 3,
    "critical": 5,
}

LIKELIHOOD_SCORE = {
    "rare": 1,
    "unlikely": 2,
    "possible": 3,
    "likely": 4,
    "almost-certain": 5,
}

# Upper bound (inclusive) of total risk score per bucket; above the last is critical
RISK_BUCKETS = (
    (5, "low"),
    (15, "medium"),
    (25, "high"),
)

HAZARD_LEVELS = ("low", "medium", "high")
DIFFICULTIES = ("beginner", "intermediate", "advanced")
OBSTRUCTION_KINDS = ("building", "tree", "power_line", "fence", "vehicle", "other")
GROUND_KINDS = ("hard", "soft", "sloped", "uneven", "water")
EQUIPMENT_KINDS = ("mobile", "tower", "crawler", "rough-terrain")

# Overall feedback bands (lower bound, grade, text)
FEEDBACK_BANDS = (
    (90, "A", "Outstanding performance! You demonstrated excellent lift planning skills and safety awareness."),
    (80, "B", "Very good work! You made sound decisions and identified most hazards. Minor improvements needed."),
    (70, "C", "Good effort! You completed the scenario successfully. Review the areas for improvement."),
    (60, "D", "Acceptable performance. You need to focus on hazard identification and verification steps."),
    (0, "F", "This lift plan has significant safety issues. Review all areas and try again."),
)
