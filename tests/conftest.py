"""Shared fixtures.

The reference site is a 100m x 100m yard of hard ground with a single
high-hazard building east of the crane spot at (50, 50). A load 25m east
of the crane sits on the 25m row of the reference 25t load chart.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from liftcore.catalogs import EquipmentCatalog, ScenarioCatalog
from liftcore.models import (
    BoomEnvelope,
    ChartPoint,
    EquipmentProfile,
    GroundZone,
    LoadSpecification,
    Outriggers,
    Point,
    Rect,
    SiteObstruction,
    TrainingScenario,
)
from liftcore.sessions import InMemoryAttemptRepository, SessionManager

CRANE_SPOT = Point(50.0, 50.0)
LOAD_SPOT = Point(75.0, 50.0)

REFERENCE_CHART = (
    (5, 25000), (10, 20000), (15, 15000), (20, 10000),
    (25, 7000), (30, 4000), (35, 2000),
)


def _equipment(**overrides) -> EquipmentProfile:
    chart = overrides.pop("chart", REFERENCE_CHART)
    base = dict(
        id="crane-test-25t",
        name="Test Crane 25T",
        kind="mobile",
        max_capacity=25000.0,
        max_radius=35.0,
        max_height=40.0,
        length=10.0,
        width=2.5,
        outriggers=Outriggers(count=4, spread_width=6.0, min_spread=4.0, max_spread=8.0),
        ground_bearing=35.0,
        boom=BoomEnvelope(base_length=15.0, max_extension=35.0, sections=3),
        load_chart=tuple(ChartPoint(r, c) for r, c in chart),
    )
    base.update(overrides)
    return EquipmentProfile(**base)


def _scenario(**overrides) -> TrainingScenario:
    load_overrides = overrides.pop("load", {})
    load = LoadSpecification(
        **{
            "id": "load-test",
            "name": "Test Skid",
            "weight": 2000.0,
            "width": 2.0,
            "height": 1.5,
            "depth": 1.5,
            **load_overrides,
        }
    )
    base = dict(
        id="scenario-test",
        title="Test Yard",
        description="Open yard used by the unit tests",
        difficulty="beginner",
        category="Test",
        site_width=100.0,
        site_height=100.0,
        obstructions=(
            SiteObstruction(
                id="building-east",
                kind="building",
                area=Rect(53.0, 45.0, 7.0, 10.0),
                hazard_level="high",
                description="Plant room",
            ),
        ),
        ground_zones=(
            GroundZone(
                id="yard",
                kind="hard",
                area=Rect(0.0, 0.0, 100.0, 100.0),
                bearing_capacity=50.0,
                risk_level="low",
                description="Concrete yard",
            ),
        ),
        load=load,
        load_position=LOAD_SPOT,
        eligible_equipment=("crane-test-25t",),
    )
    base.update(overrides)
    return TrainingScenario(**base)


@pytest.fixture
def make_equipment():
    return _equipment


@pytest.fixture
def make_scenario():
    return _scenario


@pytest.fixture
def equipment() -> EquipmentProfile:
    return _equipment()


@pytest.fixture
def scenario() -> TrainingScenario:
    return _scenario()


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def manager(scenario, equipment) -> SessionManager:
    small = _equipment(
        id="crane-test-small",
        name="Test Crane 3.5T",
        max_capacity=3500.0,
        max_radius=10.0,
        chart=((3, 3500), (6, 2500), (10, 1200)),
    )
    hard_only = replace(scenario, id="scenario-test-2", difficulty="intermediate")
    return SessionManager(
        ScenarioCatalog([scenario, hard_only]),
        EquipmentCatalog([equipment, small]),
        InMemoryAttemptRepository(),
        clock=StepClock(),
    )
