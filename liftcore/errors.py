"""Error taxonomy for the evaluation engine.

Lookups of unknown scenarios, equipment, attempts or trainees return a
``NotFound`` record rather than raising. Malformed input raises
``InvalidInputError`` before any check runs. An infeasible lift is not an
error at all: it is an ordinary verification or risk result.
"""

from __future__ import annotations

from dataclasses import dataclass


class LiftEngineError(Exception):
    """Base class for all engine errors."""


class InvalidInputError(LiftEngineError, ValueError):
    """Coordinates, weights or capacities that cannot be evaluated."""


class CatalogError(LiftEngineError, ValueError):
    """A catalog record violates an authoring invariant."""


class AttemptClosedError(LiftEngineError, RuntimeError):
    """A completed attempt was modified."""


@dataclass(frozen=True)
class NotFound:
    """Tagged lookup miss. Falsy, so ``if not result`` reads naturally."""

    kind: str  # "scenario", "equipment", "attempt", "trainee"
    key: str

    def __bool__(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return f"{self.kind} '{self.key}' not found"
