"""Behavioral signals extracted from one session's ordered telemetry."""

import logging
from typing import Dict

import numpy as np

from kartlab.models.telemetry import Session

logger = logging.getLogger(__name__)

DEFAULT_SPEED_DROP_THRESHOLD = -5.0


def off_ground_ratio(on_ground) -> float:
    """Percentage of frames where the kart is not touching the track."""
    on_ground = np.asarray(on_ground, dtype=bool)
    if on_ground.size == 0:
        raise ValueError("off_ground_ratio is undefined for an empty session")
    airborne = int((~on_ground).sum())
    return 100 * airborne / on_ground.size


def speed_drop_count(speed, threshold: float = DEFAULT_SPEED_DROP_THRESHOLD) -> int:
    """Frame-to-frame speed differences strictly below ``threshold``."""
    speed = np.asarray(speed, dtype=float)
    if speed.size < 2:
        return 0
    return int((np.diff(speed) < threshold).sum())


def steer_change_count(steer) -> int:
    """Frame-to-frame changes of steering sign, with sign(0) = 0."""
    steer = np.asarray(steer, dtype=float)
    if steer.size < 2:
        return 0
    signs = np.sign(steer)
    return int((signs[1:] != signs[:-1]).sum())


class SessionSignalExtractor:
    """Extract all frustration signals from one session."""

    def __init__(self, speed_drop_threshold: float = DEFAULT_SPEED_DROP_THRESHOLD) -> None:
        self.speed_drop_threshold = speed_drop_threshold

    def extract_off_ground_ratio(self, session: Session) -> float:
        return off_ground_ratio([r.on_ground for r in session.records])

    def extract_speed_drops(self, session: Session) -> int:
        return speed_drop_count([r.speed for r in session.records], self.speed_drop_threshold)

    def extract_steer_changes(self, session: Session) -> int:
        return steer_change_count([r.steer for r in session.records])

    def extract_signals(self, session: Session) -> Dict[str, float]:
        """
        Extract all signals from a session.
        Returns dict of signal_name -> value.
        """
        signals = {
            "off_ground_ratio": self.extract_off_ground_ratio(session),
            "speed_drop_count": self.extract_speed_drops(session),
            "steer_change_count": self.extract_steer_changes(session),
        }
        logger.debug(f"Session {session.session_id} signals: {signals}")
        return signals
