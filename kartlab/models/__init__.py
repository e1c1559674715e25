"""Telemetry data model and score combiner."""

from .scoring import FrustrationScoring, ScoreWeights
from .telemetry import Difficulty, Session, SessionScore, TelemetryRecord

__all__ = [
    "Difficulty",
    "TelemetryRecord",
    "Session",
    "SessionScore",
    "FrustrationScoring",
    "ScoreWeights",
]
