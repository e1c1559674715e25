"""
Frustration score combiner.

frustration = w_off_ground * off_ground_ratio
            + w_speed_drop * speed_drop_count
            + w_steer_change * steer_change_count

The signals are on different scales (a 0-100 percentage next to unbounded
counts) and are deliberately combined without normalisation, so scores stay
comparable with previously published analyses. Treat large counts dominating
the score as a known modelling limitation.
"""

from dataclasses import dataclass

from kartlab.models.telemetry import Session, SessionScore


@dataclass(frozen=True)
class ScoreWeights:
    """Weights of the three signals."""

    off_ground: float = 0.4
    speed_drop: float = 0.4
    steer_change: float = 0.2


class FrustrationScoring:
    """Weighted sum of session signals."""

    def __init__(self, weights: ScoreWeights | None = None):
        self.weights = weights or ScoreWeights()

    def combine(
        self, off_ground_ratio: float, speed_drop_count: int, steer_change_count: int
    ) -> float:
        w = self.weights
        return (
            w.off_ground * off_ground_ratio
            + w.speed_drop * speed_drop_count
            + w.steer_change * steer_change_count
        )

    def score_session(self, session: Session, signals: dict) -> SessionScore:
        """Build the immutable score row for a session from its extracted signals."""
        return SessionScore(
            session_id=session.session_id,
            track=session.track,
            difficulty=session.difficulty,
            off_ground_ratio=signals["off_ground_ratio"],
            speed_drop_count=signals["speed_drop_count"],
            steer_change_count=signals["steer_change_count"],
            frustration_score=self.combine(
                signals["off_ground_ratio"],
                signals["speed_drop_count"],
                signals["steer_change_count"],
            ),
            kart_type=session.kart_type,
            frame_count=len(session),
        )
