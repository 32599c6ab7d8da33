"""Entry points for the serving layer.

``LiftTrainingService`` wires one equipment catalog, one scenario catalog and
one session manager together. Construct one per process (or per test) and
hand it to whatever transport serves it; nothing here is global.
"""

from __future__ import annotations

from typing import Any, List, Optional, Union

from liftcore.catalogs.equipment import EquipmentCatalog
from liftcore.catalogs.scenarios import ScenarioCatalog
from liftcore.config import EngineSettings
from liftcore.errors import NotFound
from liftcore.logger import configure_logging, get_logger
from liftcore.models.attempt import ScenarioAttempt
from liftcore.models.equipment import EquipmentProfile
from liftcore.models.geometry import Point
from liftcore.models.scenario import ScenarioSummary, TrainingScenario
from liftcore.risk.assessment import RiskAssessment, assess_risks
from liftcore.sessions.manager import ProgressSummary, SessionManager
from liftcore.sessions.repository import AttemptRepository
from liftcore.verification.lift_verification import LiftVerification, verify_lift_plan

log = get_logger("lift-training")


class LiftTrainingService:
    def __init__(
        self,
        scenarios: ScenarioCatalog | None = None,
        equipment: EquipmentCatalog | None = None,
        repository: AttemptRepository | None = None,
        settings: EngineSettings | None = None,
    ):
        self.settings = settings or EngineSettings.from_env()
        configure_logging(self.settings)
        self.scenarios = scenarios if scenarios is not None else ScenarioCatalog()
        self.equipment = equipment if equipment is not None else EquipmentCatalog(settings=self.settings)
        self.sessions = SessionManager(self.scenarios, self.equipment, repository, self.settings)
        log.info(
            "lift training service ready: %d scenarios, %d cranes, %s capacity lookup",
            len(self.scenarios), len(self.equipment), self.settings.capacity_lookup,
        )

    # Catalog ---------------------------------------------------------------

    def list_scenarios(
        self, difficulty: Optional[str] = None, category: Optional[str] = None
    ) -> List[ScenarioSummary]:
        return self.scenarios.summaries(difficulty, category)

    def get_scenario(self, scenario_id: str) -> Union[TrainingScenario, NotFound]:
        return self.scenarios.get(scenario_id)

    def list_equipment(self) -> List[EquipmentProfile]:
        return list(self.equipment.list())

    def get_equipment(self, equipment_id: str) -> Union[EquipmentProfile, NotFound]:
        return self.equipment.get(equipment_id)

    def equipment_for_load(self, weight: float, radius: float) -> List[EquipmentProfile]:
        return self.equipment.for_load(weight, radius)

    # Attempts --------------------------------------------------------------

    def start_attempt(self, scenario_id: str, trainee_id: str) -> Union[ScenarioAttempt, NotFound]:
        return self.sessions.start(scenario_id, trainee_id)

    def update_attempt(
        self, attempt_id: str, trainee_id: str, **fields: Any
    ) -> Union[ScenarioAttempt, NotFound]:
        return self.sessions.update(attempt_id, trainee_id, **fields)

    def complete_attempt(self, attempt_id: str, trainee_id: str) -> Union[ScenarioAttempt, NotFound]:
        return self.sessions.complete(attempt_id, trainee_id)

    def attempt_history(self, trainee_id: str) -> List[ScenarioAttempt]:
        return self.sessions.history(trainee_id)

    def trainee_progress(self, trainee_id: str) -> ProgressSummary:
        return self.sessions.progress_summary(trainee_id)

    # Standalone what-if evaluation ----------------------------------------

    def verify_lift_plan(
        self,
        scenario: TrainingScenario,
        equipment: EquipmentProfile,
        crane_pos: Point,
        load_pos: Point,
    ) -> LiftVerification:
        return verify_lift_plan(scenario, equipment, crane_pos, load_pos, self.settings)

    def assess_risks(
        self,
        scenario: TrainingScenario,
        equipment: EquipmentProfile,
        crane_pos: Point,
        load_pos: Point,
    ) -> RiskAssessment:
        return assess_risks(scenario, equipment, crane_pos, load_pos, self.settings)
