from liftcore.scoring.scorer import CategoryScore, ScenarioScore, score_attempt

__all__ = ["CategoryScore", "ScenarioScore", "score_attempt"]
