"""Tests for the equipment and scenario catalogs."""

from dataclasses import replace

import pytest

from liftcore.catalogs import EquipmentCatalog, ScenarioCatalog, authoring_problems
from liftcore.catalogs.library import EQUIPMENT_LIBRARY, SCENARIO_LIBRARY
from liftcore.errors import CatalogError, NotFound
from liftcore.models import GroundZone, Point, Rect, SiteObstruction
from liftcore.models.constants import DIFFICULTIES


# ---------------------------------------------------------------------------
# Built-in library
# ---------------------------------------------------------------------------


class TestLibrary:
    def test_default_catalogs_load_library(self):
        assert len(EquipmentCatalog()) == len(EQUIPMENT_LIBRARY)
        assert len(ScenarioCatalog()) == len(SCENARIO_LIBRARY)

    @pytest.mark.parametrize("scenario", SCENARIO_LIBRARY, ids=lambda s: s.id)
    def test_library_scenarios_are_publishable(self, scenario):
        assert authoring_problems(scenario) == []

    @pytest.mark.parametrize("scenario", SCENARIO_LIBRARY, ids=lambda s: s.id)
    def test_eligible_equipment_exists(self, scenario):
        ids = {p.id for p in EQUIPMENT_LIBRARY}
        assert set(scenario.eligible_equipment) <= ids
        assert set(scenario.restricted_equipment) <= ids

    def test_one_scenario_per_difficulty(self):
        assert sorted(s.difficulty for s in SCENARIO_LIBRARY) == sorted(DIFFICULTIES)

    def test_loads_grow_with_difficulty(self):
        ordered = sorted(SCENARIO_LIBRARY, key=lambda s: DIFFICULTIES.index(s.difficulty))
        weights = [s.load.weight for s in ordered]
        assert weights == sorted(weights)


# ---------------------------------------------------------------------------
# Equipment catalog
# ---------------------------------------------------------------------------


class TestEquipmentCatalog:
    def test_get_known(self):
        catalog = EquipmentCatalog()
        assert catalog.get("crane-mobile-25t").max_capacity == 25000

    def test_get_unknown_is_not_found(self):
        result = EquipmentCatalog().get("crane-mobile-999t")
        assert isinstance(result, NotFound)
        assert not result
        assert result.kind == "equipment"
        assert result.key == "crane-mobile-999t"

    def test_for_load_filters_on_chart(self):
        ids = [p.id for p in EquipmentCatalog().for_load(10000, 25)]
        assert ids == ["crane-mobile-35t", "crane-mobile-50t", "crane-mobile-100t"]

    def test_for_load_respects_reach(self):
        ids = [p.id for p in EquipmentCatalog().for_load(3000, 40)]
        assert "crane-mobile-25t" not in ids
        assert "crane-mobile-35t" in ids

    def test_register(self, equipment):
        catalog = EquipmentCatalog([])
        catalog.register(equipment)
        assert "crane-test-25t" in catalog
        assert list(catalog) == [equipment]


# ---------------------------------------------------------------------------
# Scenario catalog
# ---------------------------------------------------------------------------


class TestScenarioCatalog:
    def test_list_by_difficulty(self):
        catalog = ScenarioCatalog()
        assert [s.id for s in catalog.list(difficulty="advanced")] == ["scenario-riverbank-001"]

    def test_list_by_category(self):
        catalog = ScenarioCatalog()
        assert [s.id for s in catalog.list(category="Urban")] == ["scenario-urban-001"]
        assert catalog.list(category="Marine") == ()

    def test_summaries(self):
        (summary,) = ScenarioCatalog().summaries(difficulty="intermediate")
        assert summary.id == "scenario-industrial-001"
        assert summary.load_weight == 5000

    def test_unknown_scenario(self):
        result = ScenarioCatalog().get("scenario-missing")
        assert isinstance(result, NotFound)
        assert "scenario-missing" in result.message

    def test_publish(self, scenario):
        catalog = ScenarioCatalog([])
        catalog.publish(scenario)
        assert catalog.get("scenario-test") == scenario

    def test_publish_rejects_overlapping_zones(self, make_scenario):
        zones = (
            GroundZone("a", "hard", Rect(0, 0, 60, 100), 50.0, "low", "Concrete"),
            GroundZone("b", "soft", Rect(50, 0, 50, 100), 20.0, "high", "Backfill"),
        )
        catalog = ScenarioCatalog([])
        with pytest.raises(CatalogError, match="ground zones a and b overlap"):
            catalog.publish(make_scenario(ground_zones=zones))
        assert len(catalog) == 0

    def test_zones_sharing_an_edge_are_accepted(self, make_scenario):
        zones = (
            GroundZone("a", "hard", Rect(0, 0, 50, 100), 50.0, "low", "Concrete"),
            GroundZone("b", "soft", Rect(50, 0, 50, 100), 20.0, "high", "Backfill"),
        )
        assert authoring_problems(make_scenario(ground_zones=zones)) == []

    def test_obstruction_beyond_site(self, make_scenario):
        wall = SiteObstruction("wall", "other", Rect(95, 0, 10, 5), "medium", "Boundary wall")
        problems = authoring_problems(make_scenario(obstructions=(wall,)))
        assert problems == ["obstruction wall extends beyond the site"]

    def test_load_position_off_site(self, make_scenario):
        problems = authoring_problems(make_scenario(load_position=Point(120.0, 10.0)))
        assert problems == ["load position is outside the site"]

    def test_equipment_both_eligible_and_restricted(self, make_scenario):
        scenario = make_scenario(restricted_equipment=("crane-test-25t",))
        with pytest.raises(CatalogError, match="both eligible and restricted"):
            ScenarioCatalog([scenario])

    def test_republish_replaces(self, scenario):
        catalog = ScenarioCatalog([scenario])
        catalog.publish(replace(scenario, title="Renamed Yard"))
        assert catalog.get("scenario-test").title == "Renamed Yard"
        assert len(catalog) == 1

    def test_eligible_equipment(self):
        profiles = ScenarioCatalog().eligible_equipment("scenario-industrial-001", EquipmentCatalog())
        assert [p.id for p in profiles] == ["crane-mobile-35t", "crane-mobile-50t"]

    def test_eligible_equipment_unknown_scenario(self):
        result = ScenarioCatalog().eligible_equipment("nope", EquipmentCatalog())
        assert isinstance(result, NotFound)
