"""Attempt lifecycle: start, update, complete.

An attempt is open from ``start`` until ``complete`` stamps it. Updates are
only accepted while it is open. Completion evaluates the final plan with
the verification and risk engines and stores the score on the attempt.
Each attempt has its own lock so an update never interleaves with the
read-evaluate-write of a completion; different attempts never contend.
"""

from __future__ import annotations

import threading
import uuid
import weakref
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from liftcore.catalogs.equipment import EquipmentCatalog
from liftcore.catalogs.scenarios import ScenarioCatalog
from liftcore.config import DEFAULT_SETTINGS, EngineSettings
from liftcore.errors import AttemptClosedError, InvalidInputError, NotFound
from liftcore.logger import get_logger
from liftcore.models.attempt import UPDATABLE_FIELDS, Placement, ScenarioAttempt
from liftcore.models.constants import DIFFICULTIES
from liftcore.models.equipment import EquipmentProfile
from liftcore.models.geometry import Point
from liftcore.models.scenario import TrainingScenario
from liftcore.risk.assessment import RiskAssessment, assess_risks
from liftcore.scoring.scorer import ScenarioScore, score_attempt
from liftcore.sessions.repository import AttemptRepository, InMemoryAttemptRepository
from liftcore.verification.lift_verification import LiftVerification, verify_lift_plan

log = get_logger("lift-training.sessions")

_FLAG_FIELDS = ("capacity_checked", "radius_verified", "ground_bearing_checked", "obstacles_reviewed")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Evaluation:
    """Everything computed when an attempt is completed."""

    verification: Optional[LiftVerification]
    risk: Optional[RiskAssessment]
    score: ScenarioScore


@dataclass(frozen=True)
class ProgressSummary:
    trainee_id: str
    total_attempts: int
    completed_attempts: int
    passed_attempts: int
    average_score: float
    best_score: int
    by_difficulty: Dict[str, int] = field(default_factory=dict)
    recent: Tuple[ScenarioAttempt, ...] = ()


class SessionManager:
    """Owns attempts and their history for every trainee."""

    def __init__(
        self,
        scenarios: ScenarioCatalog,
        equipment: EquipmentCatalog,
        repository: AttemptRepository | None = None,
        settings: EngineSettings | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.scenarios = scenarios
        self.equipment = equipment
        self.repository = repository or InMemoryAttemptRepository()
        self.settings = settings or DEFAULT_SETTINGS
        self._clock = clock or _utcnow
        # Entries vanish once no caller holds the lock
        self._locks = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    def _lock_for(self, attempt_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(attempt_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[attempt_id] = lock
            return lock

    def _find(
        self, attempt_id: str, trainee_id: str
    ) -> Union[ScenarioAttempt, NotFound]:
        if not self.repository.has_trainee(trainee_id):
            return NotFound("trainee", trainee_id)
        attempt = self.repository.get_by_id(attempt_id)
        if attempt is None or attempt.trainee_id != trainee_id:
            return NotFound("attempt", attempt_id)
        return attempt

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, scenario_id: str, trainee_id: str) -> Union[ScenarioAttempt, NotFound]:
        scenario = self.scenarios.get(scenario_id)
        if isinstance(scenario, NotFound):
            return scenario

        attempt = ScenarioAttempt(
            id=f"attempt-{uuid.uuid4().hex[:12]}",
            scenario_id=scenario_id,
            trainee_id=trainee_id,
            started_at=self._clock(),
        )
        self.repository.append_for_trainee(attempt)
        log.info("trainee %s started %s on %s", trainee_id, attempt.id, scenario_id)
        return attempt

    def update(
        self, attempt_id: str, trainee_id: str, **fields: Any
    ) -> Union[ScenarioAttempt, NotFound]:
        """Merge trainee decisions into an open attempt.

        Accepted fields: equipment_id, placement (a Placement or a Point),
        the four self-check flags (real booleans) and risks_identified (a
        list of hazard ids).

        Raises:
            AttemptClosedError: The attempt is already completed.
            InvalidInputError: Unknown field, wrongly typed value or a
                placement off site.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise InvalidInputError(f"cannot update attempt fields: {', '.join(sorted(unknown))}")
        checks = _coerce_checks(fields)

        found = self._find(attempt_id, trainee_id)
        if isinstance(found, NotFound):
            return found

        with self._lock_for(attempt_id):
            attempt = self._find(attempt_id, trainee_id)
            if isinstance(attempt, NotFound):
                return attempt
            if attempt.is_completed:
                log.warning("rejected update to completed attempt %s", attempt_id)
                raise AttemptClosedError(f"attempt {attempt_id} is already completed")

            scenario = self.scenarios.get(attempt.scenario_id)
            if isinstance(scenario, NotFound):
                return scenario

            # Validate everything before touching the record
            changes: Dict[str, Any] = dict(checks)
            if fields.get("equipment_id") is not None:
                profile = self.equipment.get(fields["equipment_id"])
                if isinstance(profile, NotFound):
                    return profile
                changes["equipment_id"] = profile.id
            elif "equipment_id" in fields:
                changes["equipment_id"] = None
            if "placement" in fields:
                changes["placement"] = _coerce_placement(fields["placement"], scenario)

            for name, value in changes.items():
                setattr(attempt, name, value)
            self.repository.save(attempt)

        log.info("attempt %s updated: %s", attempt_id, ", ".join(sorted(fields)) or "no fields")
        return attempt

    def complete(self, attempt_id: str, trainee_id: str) -> Union[ScenarioAttempt, NotFound]:
        """Stamp, evaluate and score an attempt.

        Completing twice re-scores the same plan and keeps the first
        completion time.
        """
        found = self._find(attempt_id, trainee_id)
        if isinstance(found, NotFound):
            return found

        with self._lock_for(attempt_id):
            attempt = self._find(attempt_id, trainee_id)
            if isinstance(attempt, NotFound):
                return attempt
            scenario = self.scenarios.get(attempt.scenario_id)
            if isinstance(scenario, NotFound):
                return scenario

            if attempt.completed_at is None:
                attempt.completed_at = max(self._clock(), attempt.started_at)

            result = self.evaluate(scenario, attempt)
            score = result.score
            attempt.score = score.total_score
            attempt.passed = score.passed
            attempt.feedback = score.feedback_text()
            attempt.mistakes = list(score.mistakes)
            attempt.category_scores = score.by_category()
            attempt.next_steps = list(score.next_steps)
            self.repository.save(attempt)

        log.info(
            "attempt %s completed by %s: score %d (%s)",
            attempt_id, trainee_id, attempt.score, "pass" if attempt.passed else "fail",
        )
        return attempt

    def evaluate(self, scenario: TrainingScenario, attempt: ScenarioAttempt) -> Evaluation:
        """Run verification, risk and scoring against an attempt's current plan.

        Checks that need a crane position and a crane are skipped when either
        is missing; the scorer treats them as zero.
        """
        profile: Optional[EquipmentProfile] = None
        if attempt.equipment_id is not None:
            found = self.equipment.get(attempt.equipment_id)
            if not isinstance(found, NotFound):
                profile = found

        verification = None
        risk = None
        if attempt.placement is not None and profile is not None:
            crane_pos = attempt.placement.position
            verification = verify_lift_plan(
                scenario, profile, crane_pos, scenario.load_position, self.settings
            )
            risk = assess_risks(scenario, profile, crane_pos, scenario.load_position, self.settings)

        score = score_attempt(scenario, attempt, verification, risk, profile)
        return Evaluation(verification, risk, score)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def get(self, attempt_id: str, trainee_id: str) -> Union[ScenarioAttempt, NotFound]:
        return self._find(attempt_id, trainee_id)

    def history(self, trainee_id: str) -> List[ScenarioAttempt]:
        return self.repository.list_for_trainee(trainee_id)

    def scenario_progress(self, trainee_id: str, scenario_id: str) -> List[ScenarioAttempt]:
        return [a for a in self.history(trainee_id) if a.scenario_id == scenario_id]

    def progress_summary(self, trainee_id: str, recent: int = 5) -> ProgressSummary:
        attempts = self.history(trainee_id)
        completed = [a for a in attempts if a.is_completed]
        scores = np.array([a.score for a in completed], dtype=float)

        by_difficulty = {d: 0 for d in DIFFICULTIES}
        for a in completed:
            scenario = self.scenarios.get(a.scenario_id)
            if not isinstance(scenario, NotFound):
                by_difficulty[scenario.difficulty] += 1

        latest = sorted(completed, key=lambda a: a.completed_at, reverse=True)[:recent]
        return ProgressSummary(
            trainee_id=trainee_id,
            total_attempts=len(attempts),
            completed_attempts=len(completed),
            passed_attempts=sum(1 for a in completed if a.passed),
            average_score=round(float(scores.mean()), 1) if scores.size else 0.0,
            best_score=int(scores.max()) if scores.size else 0,
            by_difficulty=by_difficulty,
            recent=tuple(latest),
        )


def _coerce_placement(value: Any, scenario: TrainingScenario) -> Optional[Placement]:
    if value is None:
        return None
    if isinstance(value, Point):
        value = Placement(position=value)
    if not isinstance(value, Placement):
        raise InvalidInputError(f"placement must be a Placement or Point, got {type(value).__name__}")

    p = value.position
    if not p.is_finite:
        raise InvalidInputError(f"crane position is not finite: ({p.x}, {p.y})")
    if not scenario.site.contains(p):
        raise InvalidInputError(
            f"crane position ({p.x:.1f}, {p.y:.1f}) is outside the "
            f"{scenario.site_width:g}m x {scenario.site_height:g}m site"
        )
    return value


def _coerce_checks(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Self-check flags and identified hazards, type-checked."""
    checks: Dict[str, Any] = {}
    for flag in _FLAG_FIELDS:
        if flag in fields:
            if not isinstance(fields[flag], bool):
                raise InvalidInputError(
                    f"{flag} must be True or False, got {fields[flag]!r}"
                )
            checks[flag] = fields[flag]

    if "risks_identified" in fields:
        hazards = fields["risks_identified"]
        if not isinstance(hazards, (list, tuple)):
            raise InvalidInputError(
                f"risks_identified must be a list of hazard ids, got {type(hazards).__name__}"
            )
        if not all(isinstance(h, str) for h in hazards):
            raise InvalidInputError("risks_identified must contain hazard id strings")
        checks["risks_identified"] = list(hazards)
    return checks
