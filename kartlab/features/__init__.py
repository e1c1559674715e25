"""Session signal extraction."""

from .signals import SessionSignalExtractor, off_ground_ratio, speed_drop_count, steer_change_count

__all__ = [
    "SessionSignalExtractor",
    "off_ground_ratio",
    "speed_drop_count",
    "steer_change_count",
]
