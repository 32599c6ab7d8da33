"""Scenario catalog with authoring-time validation."""

from __future__ import annotations

from itertools import combinations
from typing import Iterable, List, Optional, Tuple, Union

from liftcore.catalogs.base import Catalog, log
from liftcore.catalogs.equipment import EquipmentCatalog
from liftcore.errors import CatalogError, NotFound
from liftcore.models.equipment import EquipmentProfile
from liftcore.models.scenario import ScenarioSummary, TrainingScenario


def authoring_problems(scenario: TrainingScenario) -> List[str]:
    """Everything that stops a scenario from being published."""
    problems: List[str] = []
    site = scenario.site

    for a, b in combinations(scenario.ground_zones, 2):
        if a.area.overlap_area(b.area) > 0:
            problems.append(f"ground zones {a.id} and {b.id} overlap")

    for zone in scenario.ground_zones:
        if not site.contains_rect(zone.area):
            problems.append(f"ground zone {zone.id} extends beyond the site")

    for obs in scenario.obstructions:
        if not site.contains_rect(obs.area):
            problems.append(f"obstruction {obs.id} extends beyond the site")

    if not scenario.load_position.is_finite or not site.contains(scenario.load_position):
        problems.append("load position is outside the site")

    overlap = set(scenario.eligible_equipment) & set(scenario.restricted_equipment)
    if overlap:
        problems.append(f"equipment both eligible and restricted: {', '.join(sorted(overlap))}")

    return problems


class ScenarioCatalog(Catalog[TrainingScenario]):
    """Registry of published training scenarios."""

    def __init__(self, records: Optional[Iterable[TrainingScenario]] = None):
        if records is None:
            from liftcore.catalogs.library import SCENARIO_LIBRARY

            records = SCENARIO_LIBRARY
        super().__init__(records)

    @property
    def kind(self) -> str:
        return "scenario"

    def validate(self, record: TrainingScenario) -> None:
        problems = authoring_problems(record)
        if problems:
            log.warning("rejected scenario %s: %s", record.id, "; ".join(problems))
            raise CatalogError(f"scenario {record.id}: " + "; ".join(problems))

    def publish(self, scenario: TrainingScenario) -> TrainingScenario:
        return self._put(scenario)

    def list(
        self, difficulty: Optional[str] = None, category: Optional[str] = None
    ) -> Tuple[TrainingScenario, ...]:
        scenarios = super().list()
        if difficulty:
            scenarios = tuple(s for s in scenarios if s.difficulty == difficulty)
        if category:
            scenarios = tuple(s for s in scenarios if s.category == category)
        return scenarios

    def summaries(
        self, difficulty: Optional[str] = None, category: Optional[str] = None
    ) -> List[ScenarioSummary]:
        return [ScenarioSummary.of(s) for s in self.list(difficulty, category)]

    def eligible_equipment(
        self, scenario_id: str, equipment: EquipmentCatalog
    ) -> Union[List[EquipmentProfile], NotFound]:
        scenario = self.get(scenario_id)
        if isinstance(scenario, NotFound):
            return scenario
        profiles = []
        for equipment_id in scenario.eligible_equipment:
            profile = equipment.get(equipment_id)
            if not isinstance(profile, NotFound):
                profiles.append(profile)
        return profiles
