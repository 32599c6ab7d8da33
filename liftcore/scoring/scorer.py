"""Trainee performance scoring.

Five categories of 20 points each add up to a 0-100 score:

Equipment Selection    - a crane was chosen and it is big enough for the load.
Positioning & Safety   - radius, ground and obstacle checks passed.
Hazard Identification  - the plan surfaced hazards and none are critical.
Verification Steps     - the trainee ran each of the four self-checks.
Decision Making        - the plan is valid and safe to proceed.

A plan with no crane position or no crane scores zero wherever the
verification or risk result would be needed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from liftcore.models.attempt import ScenarioAttempt
from liftcore.models.constants import FEEDBACK_BANDS, WEIGHTS
from liftcore.models.equipment import EquipmentProfile
from liftcore.models.scenario import TrainingScenario
from liftcore.risk.assessment import RiskAssessment
from liftcore.verification.lift_verification import LiftVerification

NO_POSITION = "No crane position recorded"
NO_EQUIPMENT = "No equipment selected"


@dataclass(frozen=True)
class CategoryScore:
    """Points earned in one scoring category."""

    category: str
    score: int
    feedback: str
    strengths: List[str] = field(default_factory=list)
    improvements: List[str] = field(default_factory=list)
    max_score: int = WEIGHTS.category_max

    @property
    def is_full_marks(self) -> bool:
        return self.score == self.max_score


@dataclass(frozen=True)
class ScenarioScore:
    total_score: int
    passed: bool
    categories: List[CategoryScore]
    overall_feedback: str
    key_learnings: List[str]
    next_steps: List[str]
    mistakes: List[str] = field(default_factory=list)

    @property
    def grade(self) -> str:
        return band_for(self.total_score)[1]

    def by_category(self) -> Dict[str, int]:
        return {c.category: c.score for c in self.categories}

    def feedback_text(self) -> str:
        """Overall verdict followed by one bullet per improvement."""
        lines = [self.overall_feedback]
        for cat in self.categories:
            lines.extend(f"• {cat.category}: {item}" for item in cat.improvements)
        return "\n".join(lines)


def band_for(total: int):
    for lower, grade, text in FEEDBACK_BANDS:
        if total >= lower:
            return lower, grade, text
    return FEEDBACK_BANDS[-1]


def score_attempt(
    scenario: TrainingScenario,
    attempt: ScenarioAttempt,
    verification: Optional[LiftVerification],
    risk: Optional[RiskAssessment],
    equipment: Optional[EquipmentProfile] = None,
) -> ScenarioScore:
    """Score a finished attempt.

    ``verification`` and ``risk`` are None when the attempt lacks a crane
    position or a crane choice; the dependent categories then score zero.
    """
    categories = [
        score_equipment_selection(scenario, equipment),
        score_positioning(attempt, verification),
        score_hazard_identification(risk),
        score_verification_steps(attempt),
        score_decision_making(verification, risk),
    ]

    total = sum(c.score for c in categories)
    total = max(0, min(total, 100))
    passed = total >= WEIGHTS.pass_mark

    return ScenarioScore(
        total_score=total,
        passed=passed,
        categories=categories,
        overall_feedback=band_for(total)[2],
        key_learnings=key_learnings(categories),
        next_steps=next_steps(categories, passed),
        mistakes=find_mistakes(scenario, attempt, verification, risk, equipment),
    )


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


def score_equipment_selection(
    scenario: TrainingScenario, equipment: Optional[EquipmentProfile]
) -> CategoryScore:
    strengths: List[str] = []
    improvements: List[str] = []
    score = 0

    if equipment is None:
        improvements.append(NO_EQUIPMENT)
        improvements.append("Cannot verify capacity without crane selection")
    else:
        score += WEIGHTS.equipment_chosen
        strengths.append(f"Selected {equipment.name}")
        if equipment.max_capacity >= scenario.load.weight:
            score += WEIGHTS.equipment_capacity
            strengths.append("Crane has sufficient capacity for load")
        else:
            improvements.append(
                f"{equipment.name} is rated {equipment.max_capacity:.0f}kg, "
                f"below the {scenario.load.weight:.0f}kg load"
            )

    feedback = (
        "Excellent choice!"
        if score == WEIGHTS.category_max
        else "Consider equipment specifications more carefully."
    )
    return CategoryScore("Equipment Selection", score, feedback, strengths, improvements)


def score_positioning(
    attempt: ScenarioAttempt, verification: Optional[LiftVerification]
) -> CategoryScore:
    if verification is None:
        missing = NO_POSITION if attempt.placement is None else NO_EQUIPMENT
        return CategoryScore(
            "Positioning & Safety", 0, "Positioning could not be evaluated.",
            improvements=[missing],
        )

    strengths: List[str] = []
    improvements: List[str] = []
    score = 0

    if verification.radius.passed:
        score += WEIGHTS.radius_ok
        strengths.append("Boom radius is sufficient")
    else:
        improvements.append("Boom radius is insufficient - reposition crane or select larger crane")

    if verification.ground_bearing.passed:
        score += WEIGHTS.ground_ok
        strengths.append("Ground bearing capacity is adequate")
    else:
        improvements.append("Ground bearing is insufficient - use ground reinforcement or reposition")

    if verification.obstacles.passed:
        score += WEIGHTS.obstacles_ok
        strengths.append("Maintained safe clearance from obstructions")
    else:
        improvements.append("Too close to obstructions - increase clearance")

    feedback = "Excellent positioning!" if verification.is_valid else "Positioning needs improvement."
    return CategoryScore("Positioning & Safety", score, feedback, strengths, improvements)


def score_hazard_identification(risk: Optional[RiskAssessment]) -> CategoryScore:
    if risk is None:
        return CategoryScore(
            "Hazard Identification", 0, "No risk assessment was possible.",
            improvements=["Record a crane position and equipment so hazards can be assessed"],
        )

    strengths: List[str] = []
    improvements: List[str] = []
    score = 0
    found = len(risk.hazards)
    critical = len(risk.critical_hazards)

    if found >= WEIGHTS.min_hazards_found:
        score += WEIGHTS.hazards_found
        strengths.append(f"Identified {found} hazards")
    else:
        improvements.append(f"Only identified {found} hazards - look for more")

    if critical == 0:
        score += WEIGHTS.no_critical_hazards
        strengths.append("No critical hazards present")
    else:
        improvements.append(f"{critical} critical hazards identified - must be resolved")

    verdict = "Good risk assessment!" if risk.risk_level == "low" else "Review hazard identification."
    return CategoryScore(
        "Hazard Identification", score, f"Identified {found} hazards. {verdict}",
        strengths, improvements,
    )


_STEP_LABELS = (
    ("capacity_checked", "Verified load capacity", "Did not verify load capacity"),
    ("radius_verified", "Verified boom radius", "Did not verify boom radius"),
    ("ground_bearing_checked", "Checked ground bearing", "Did not check ground bearing"),
    ("obstacles_reviewed", "Reviewed obstructions", "Did not review obstructions"),
)


def score_verification_steps(attempt: ScenarioAttempt) -> CategoryScore:
    strengths: List[str] = []
    improvements: List[str] = []
    done = 0
    checks = attempt.self_checks
    for key, did, missed in _STEP_LABELS:
        if checks[key]:
            done += 1
            strengths.append(did)
        else:
            improvements.append(missed)

    return CategoryScore(
        "Verification Steps",
        done * WEIGHTS.per_verification_step,
        f"Completed {done} of {len(_STEP_LABELS)} verification steps.",
        strengths,
        improvements,
    )


def score_decision_making(
    verification: Optional[LiftVerification], risk: Optional[RiskAssessment]
) -> CategoryScore:
    strengths: List[str] = []
    improvements: List[str] = []
    score = 0

    if verification is not None and verification.is_valid:
        score += WEIGHTS.plan_valid
        strengths.append("Made safe positioning decisions")
    elif verification is None:
        improvements.append("No lift plan to evaluate")
    else:
        improvements.append("Positioning decisions resulted in safety issues")

    if risk is not None and risk.safe_to_proceed:
        score += WEIGHTS.safe_to_proceed
        strengths.append("Risk assessment indicates safe to proceed")
    elif risk is not None:
        improvements.append("Critical hazards prevent proceeding - must resolve first")

    feedback = (
        "Excellent decisions!"
        if score == WEIGHTS.category_max
        else "Review decision-making process."
    )
    return CategoryScore("Decision Making", score, feedback, strengths, improvements)


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------


def key_learnings(categories: List[CategoryScore]) -> List[str]:
    learnings = [
        f"{c.category}: You demonstrated mastery in this area"
        for c in categories
        if c.is_full_marks
    ]
    return learnings or ["Review all performance areas to identify key learnings"]


def next_steps(categories: List[CategoryScore], passed: bool) -> List[str]:
    if passed:
        return [
            "Try a more challenging scenario",
            "Review scenarios with different site conditions",
            "Practice with different equipment types",
        ]
    weakest = min(categories, key=lambda c: c.score)
    return [
        f"Focus on improving: {weakest.category}",
        "Review the guidance for each verification step",
        "Try this scenario again to improve your score",
    ]


def find_mistakes(
    scenario: TrainingScenario,
    attempt: ScenarioAttempt,
    verification: Optional[LiftVerification],
    risk: Optional[RiskAssessment],
    equipment: Optional[EquipmentProfile],
) -> List[str]:
    """Concrete errors in the plan, phrased for the trainee."""
    mistakes: List[str] = []

    if attempt.placement is None:
        mistakes.append(NO_POSITION)
    if equipment is None:
        mistakes.append(NO_EQUIPMENT)
    else:
        if equipment.id in scenario.restricted_equipment:
            mistakes.append(f"Selected restricted equipment: {equipment.name}")
        elif scenario.eligible_equipment and equipment.id not in scenario.eligible_equipment:
            mistakes.append(f"{equipment.name} is not available for this scenario")

    if verification is not None:
        mistakes.extend(verification.issues)

    if risk is not None:
        for hazard in risk.critical_hazards:
            mistakes.append(f"Critical hazard unresolved: {hazard.description}")
        identified = set(attempt.risks_identified)
        for hazard in risk.hazards:
            if hazard.hazard_id not in identified:
                mistakes.append(f"Missed hazard: {hazard.description}")

    return mistakes
