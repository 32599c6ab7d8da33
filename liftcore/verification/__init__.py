from liftcore.verification.lift_verification import (
    CapacityCheck,
    GroundBearingCheck,
    LiftVerification,
    ObstacleCheck,
    OutriggerCheck,
    RadiusCheck,
    find_ground_zone,
    validate_plan_inputs,
    verify_lift_plan,
)

__all__ = [
    "CapacityCheck",
    "GroundBearingCheck",
    "LiftVerification",
    "ObstacleCheck",
    "OutriggerCheck",
    "RadiusCheck",
    "find_ground_zone",
    "validate_plan_inputs",
    "verify_lift_plan",
]
