from liftcore.sessions.manager import Evaluation, ProgressSummary, SessionManager
from liftcore.sessions.repository import (
    AttemptRepository,
    InMemoryAttemptRepository,
    JsonAttemptRepository,
)

__all__ = [
    "Evaluation",
    "ProgressSummary",
    "SessionManager",
    "AttemptRepository",
    "InMemoryAttemptRepository",
    "JsonAttemptRepository",
]
