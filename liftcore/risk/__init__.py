from liftcore.risk.assessment import (
    EnvironmentalHazard,
    EquipmentHazard,
    GroundHazard,
    Hazard,
    LoadHazard,
    MitigationStrategy,
    ObstructionHazard,
    RiskAssessment,
    assess_risks,
    mitigations_for,
    risk_bucket,
)

__all__ = [
    "EnvironmentalHazard",
    "EquipmentHazard",
    "GroundHazard",
    "Hazard",
    "LoadHazard",
    "MitigationStrategy",
    "ObstructionHazard",
    "RiskAssessment",
    "assess_risks",
    "mitigations_for",
    "risk_bucket",
]
