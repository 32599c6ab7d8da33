"""Built-in cranes and training scenarios with progressive difficulty."""

from __future__ import annotations

from liftcore.models.equipment import BoomEnvelope, ChartPoint, EquipmentProfile, Outriggers
from liftcore.models.geometry import Point, Rect
from liftcore.models.scenario import (
    GroundZone,
    LoadSpecification,
    SiteObstruction,
    TrainingScenario,
)


def _chart(*rows):
    return tuple(ChartPoint(radius=r, capacity=c) for r, c in rows)


EQUIPMENT_LIBRARY = [
    EquipmentProfile(
        id="crane-mobile-25t",
        name="Mobile Crane 25T",
        kind="mobile",
        max_capacity=25000,
        max_radius=35,
        max_height=40,
        length=10,
        width=2.5,
        wheelbase=6,
        outriggers=Outriggers(count=4, spread_width=6, min_spread=4, max_spread=8),
        ground_bearing=35,
        boom=BoomEnvelope(base_length=15, max_extension=35, sections=3),
        load_chart=_chart(
            (5, 25000), (10, 20000), (15, 15000), (20, 10000),
            (25, 7000), (30, 4000), (35, 2000),
        ),
        description="Compact mobile crane suitable for urban sites and confined spaces",
    ),
    EquipmentProfile(
        id="crane-mobile-35t",
        name="Mobile Crane 35T",
        kind="mobile",
        max_capacity=35000,
        max_radius=45,
        max_height=50,
        length=12,
        width=2.8,
        wheelbase=7,
        outriggers=Outriggers(count=4, spread_width=7, min_spread=5, max_spread=9),
        ground_bearing=40,
        boom=BoomEnvelope(base_length=18, max_extension=45, sections=4),
        load_chart=_chart(
            (5, 35000), (10, 28000), (15, 22000), (20, 16000), (25, 12000),
            (30, 8000), (35, 5000), (40, 3000), (45, 1500),
        ),
        description="Mid-range mobile crane for general industrial lifting",
    ),
    EquipmentProfile(
        id="crane-mobile-50t",
        name="Mobile Crane 50T",
        kind="mobile",
        max_capacity=50000,
        max_radius=55,
        max_height=60,
        length=14,
        width=3,
        wheelbase=8,
        outriggers=Outriggers(count=4, spread_width=8, min_spread=6, max_spread=10),
        ground_bearing=45,
        boom=BoomEnvelope(base_length=20, max_extension=55, sections=5),
        load_chart=_chart(
            (5, 50000), (10, 40000), (15, 32000), (20, 24000), (25, 18000),
            (30, 13000), (35, 9000), (40, 6000), (45, 4000), (50, 2500), (55, 1500),
        ),
        description="Heavy-duty mobile crane for major industrial projects",
    ),
    EquipmentProfile(
        id="crane-mobile-100t",
        name="Mobile Crane 100T",
        kind="mobile",
        max_capacity=100000,
        max_radius=60,
        max_height=70,
        length=15.5,
        width=3,
        wheelbase=9,
        outriggers=Outriggers(count=4, spread_width=10, min_spread=7, max_spread=12),
        ground_bearing=60,
        boom=BoomEnvelope(base_length=22, max_extension=60, sections=6),
        load_chart=_chart(
            (5, 100000), (10, 72000), (15, 55000), (20, 42000), (25, 32000),
            (30, 24000), (40, 14000), (50, 8000), (60, 4500),
        ),
        description="Large all-terrain crane; needs generous set-up space and firm ground",
    ),
]


SCENARIO_LIBRARY = [
    TrainingScenario(
        id="scenario-urban-001",
        title="Urban Building Lift - Narrow Street",
        description=(
            "Lift a 2-tonne load to the roof of a 3-storey building in a narrow urban "
            "street. Limited space, power lines overhead, soft ground on one side."
        ),
        difficulty="beginner",
        category="Urban",
        site_width=30,
        site_height=40,
        site_description="Narrow urban street with 3-storey building on one side, parked vehicles, power lines",
        obstructions=(
            SiteObstruction(
                id="building-1",
                kind="building",
                area=Rect(20, 5, 8, 12),
                hazard_level="high",
                description="3-storey residential building",
                notes="Load must be lifted to roof (12m height)",
            ),
            SiteObstruction(
                id="power-line-1",
                kind="power_line",
                area=Rect(0, 8, 30, 0.5),
                hazard_level="high",
                description="High voltage power lines",
                notes="Minimum 5m clearance required",
            ),
            SiteObstruction(
                id="vehicle-1",
                kind="vehicle",
                area=Rect(5, 15, 2, 4),
                hazard_level="medium",
                description="Parked car",
                notes="Can be moved if needed",
            ),
        ),
        ground_zones=(
            GroundZone(
                id="ground-hard",
                kind="hard",
                area=Rect(0, 0, 20, 40),
                bearing_capacity=50,
                risk_level="low",
                description="Tarmac road - hard surface",
            ),
            GroundZone(
                id="ground-soft",
                kind="soft",
                area=Rect(20, 0, 10, 40),
                bearing_capacity=15,
                risk_level="high",
                description="Grass verge - soft ground",
                notes="Cannot support heavy crane outriggers",
            ),
        ),
        load=LoadSpecification(
            id="load-1",
            name="HVAC Unit",
            weight=2000,
            width=2,
            height=1.5,
            depth=1.5,
            fragile=False,
            max_tilt_angle=45,
            description="Heating/cooling unit for building roof",
        ),
        load_position=Point(24, 11),
        eligible_equipment=("crane-mobile-25t", "crane-mobile-35t", "crane-mobile-50t"),
        restricted_equipment=("crane-mobile-100t",),
        learning_objectives=(
            "Assess site constraints and obstructions",
            "Select appropriate crane size for load and space",
            "Position crane to avoid power lines",
            "Check ground bearing capacity",
            "Verify boom radius is sufficient",
            "Identify all hazards before lift",
        ),
        common_mistakes=(
            "Selecting crane too small for load",
            "Positioning crane under power lines",
            "Placing outriggers on soft ground",
            "Not checking boom radius to building",
            "Ignoring parked vehicle as obstruction",
        ),
        created_by="trainer-001",
        created_at="2024-01-15T10:00:00Z",
        estimated_minutes=20,
    ),
    TrainingScenario(
        id="scenario-industrial-001",
        title="Industrial Equipment Lift - Confined Space",
        description=(
            "Lift a 5-tonne industrial motor into a confined factory space. Multiple "
            "obstructions, limited crane positioning options."
        ),
        difficulty="intermediate",
        category="Industrial",
        site_width=50,
        site_height=60,
        site_description="Industrial factory floor with machinery, limited access points",
        obstructions=(
            SiteObstruction(
                id="machinery-1",
                kind="other",
                area=Rect(10, 10, 8, 6),
                hazard_level="high",
                description="Existing machinery - cannot be moved",
            ),
            SiteObstruction(
                id="machinery-2",
                kind="other",
                area=Rect(35, 15, 10, 8),
                hazard_level="high",
                description="Production line equipment",
            ),
            SiteObstruction(
                id="fence-1",
                kind="fence",
                area=Rect(0, 0, 50, 1),
                hazard_level="medium",
                description="Safety fence around work area",
            ),
        ),
        ground_zones=(
            GroundZone(
                id="ground-concrete",
                kind="hard",
                area=Rect(0, 0, 50, 60),
                bearing_capacity=60,
                risk_level="low",
                description="Concrete factory floor",
            ),
        ),
        load=LoadSpecification(
            id="load-2",
            name="Industrial Motor",
            weight=5000,
            width=2.5,
            height=2,
            depth=2,
            fragile=True,
            max_tilt_angle=15,
            description="Heavy industrial electric motor",
        ),
        load_position=Point(28, 35),
        eligible_equipment=("crane-mobile-35t", "crane-mobile-50t"),
        learning_objectives=(
            "Work in confined spaces with multiple obstructions",
            "Calculate safe working radius around machinery",
            "Position crane to avoid existing equipment",
            "Handle sensitive/fragile loads",
            "Plan approach and retreat paths",
        ),
        common_mistakes=(
            "Crane positioned too close to machinery",
            "Insufficient boom radius to reach target",
            "Not accounting for load swing",
            "Ignoring fragile load requirements",
        ),
        created_by="trainer-001",
        created_at="2024-01-15T11:00:00Z",
        estimated_minutes=30,
    ),
    TrainingScenario(
        id="scenario-riverbank-001",
        title="Footbridge Beam - Riverbank Set-up",
        description=(
            "Place a 12-tonne precast footbridge beam across a river channel. The "
            "bank slopes away to water and a distribution line crosses the far end."
        ),
        difficulty="advanced",
        category="Civil",
        site_width=60,
        site_height=50,
        site_description="Riverside compound with a graded bank and open water",
        obstructions=(
            SiteObstruction(
                id="tree-1",
                kind="tree",
                area=Rect(20, 30, 4, 4),
                hazard_level="medium",
                description="Mature oak with protected root zone",
            ),
            SiteObstruction(
                id="power-line-2",
                kind="power_line",
                area=Rect(0, 45, 60, 0.5),
                hazard_level="high",
                description="11kV distribution line",
            ),
            SiteObstruction(
                id="cabin-1",
                kind="building",
                area=Rect(2, 2, 6, 3),
                hazard_level="low",
                description="Site welfare cabin",
            ),
        ),
        ground_zones=(
            GroundZone(
                id="ground-compound",
                kind="hard",
                area=Rect(0, 0, 30, 50),
                bearing_capacity=55,
                risk_level="low",
                description="Compacted stone compound",
            ),
            GroundZone(
                id="ground-bank",
                kind="sloped",
                area=Rect(30, 0, 15, 50),
                bearing_capacity=30,
                risk_level="medium",
                description="Graded riverbank",
            ),
            GroundZone(
                id="ground-river",
                kind="water",
                area=Rect(45, 0, 15, 50),
                bearing_capacity=5,
                risk_level="high",
                description="River channel",
            ),
        ),
        load=LoadSpecification(
            id="load-3",
            name="Precast Footbridge Beam",
            weight=12000,
            width=14,
            height=1.2,
            depth=1.0,
            cog_offset=Point(0.4, 0),
            fragile=True,
            max_tilt_angle=5,
            description="Prestressed concrete beam, lifted at marked points only",
        ),
        load_position=Point(50, 25),
        eligible_equipment=("crane-mobile-35t", "crane-mobile-50t", "crane-mobile-100t"),
        restricted_equipment=("crane-mobile-25t",),
        learning_objectives=(
            "Read a load chart at long radius",
            "Keep outriggers off the bank and out of the water",
            "Control a fragile long load",
            "Plan around overhead lines",
        ),
        common_mistakes=(
            "Setting up on the sloped bank",
            "Underestimating radius to the far abutment",
            "Ignoring the distribution line",
        ),
        created_by="trainer-002",
        created_at="2024-03-02T09:00:00Z",
        estimated_minutes=45,
    ),
]
