"""Runtime settings for the evaluation engine, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

STEP = "step"
INTERPOLATE = "interpolate"
CAPACITY_LOOKUPS = (STEP, INTERPOLATE)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class EngineSettings:
    """Tunable engine behaviour.

    capacity_lookup selects how a load chart is read between samples:
    ``step`` takes the first sample at or beyond the working radius (the
    conservative load-chart reading), ``interpolate`` linearly blends the two
    bracketing samples. log_level is the level every engine logger runs at.
    """

    capacity_lookup: str = STEP
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.capacity_lookup not in CAPACITY_LOOKUPS:
            raise ValueError(
                f"capacity_lookup must be one of {CAPACITY_LOOKUPS}, got {self.capacity_lookup!r}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {self.log_level!r}")

    @classmethod
    def from_env(cls) -> EngineSettings:
        return cls(
            capacity_lookup=os.getenv("LIFTCORE_CAPACITY_LOOKUP", STEP).lower(),
            log_level=os.getenv("LIFTCORE_LOG_LEVEL", "INFO").upper(),
        )


DEFAULT_SETTINGS = EngineSettings()
