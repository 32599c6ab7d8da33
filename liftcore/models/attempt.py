"""A trainee's recorded pass through one scenario."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, List, Optional

from liftcore.models.geometry import Point


@dataclass(frozen=True)
class BoomConfiguration:
    angle: float      # deg
    extension: float  # m


@dataclass(frozen=True)
class Placement:
    """Where and how the trainee set the crane up."""

    position: Point
    rotation: float = 0.0  # deg
    boom: Optional[BoomConfiguration] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> Placement:
        boom = d.get("boom")
        return cls(
            position=Point.from_dict(d["position"]),
            rotation=float(d.get("rotation", 0.0)),
            boom=BoomConfiguration(**boom) if boom else None,
        )


# Fields a trainee may change while the attempt is open
UPDATABLE_FIELDS = frozenset(
    {
        "equipment_id",
        "placement",
        "capacity_checked",
        "radius_verified",
        "ground_bearing_checked",
        "obstacles_reviewed",
        "risks_identified",
    }
)


@dataclass
class ScenarioAttempt:
    """Mutable attempt record. Append-only once ``completed_at`` is set."""

    id: str
    scenario_id: str
    trainee_id: str
    started_at: datetime
    completed_at: Optional[datetime] = None

    equipment_id: Optional[str] = None
    placement: Optional[Placement] = None

    capacity_checked: bool = False
    radius_verified: bool = False
    ground_bearing_checked: bool = False
    obstacles_reviewed: bool = False
    risks_identified: List[str] = field(default_factory=list)

    passed: bool = False
    score: int = 0
    feedback: str = ""
    mistakes: List[str] = field(default_factory=list)
    category_scores: Dict[str, int] = field(default_factory=dict)
    next_steps: List[str] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    @property
    def self_checks(self) -> Dict[str, bool]:
        return {
            "capacity_checked": self.capacity_checked,
            "radius_verified": self.radius_verified,
            "ground_bearing_checked": self.ground_bearing_checked,
            "obstacles_reviewed": self.obstacles_reviewed,
        }

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["started_at"] = self.started_at.isoformat()
        d["completed_at"] = self.completed_at.isoformat() if self.completed_at else None
        d["placement"] = self.placement.to_dict() if self.placement else None
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> ScenarioAttempt:
        valid_keys = {f.name for f in fields(cls)}
        data = {k: v for k, v in d.items() if k in valid_keys}
        data["started_at"] = datetime.fromisoformat(d["started_at"])
        if d.get("completed_at"):
            data["completed_at"] = datetime.fromisoformat(d["completed_at"])
        if d.get("placement"):
            data["placement"] = Placement.from_dict(d["placement"])
        return cls(**data)
