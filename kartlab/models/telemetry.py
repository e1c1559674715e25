"""
Telemetry data model.

One TelemetryRecord per sampled frame, one Session per race attempt, one
SessionScore per scored session.
"""

from dataclasses import dataclass, field
from enum import Enum


class Difficulty(str, Enum):
    """Race difficulty settings, in the game's own order."""

    NOVICE = "Novice"
    INTERMEDIATE = "Intermediate"
    EXPERT = "Expert"
    SUPERTUX = "SuperTux"

    @classmethod
    def parse(cls, value: str) -> "Difficulty":
        """Accept a difficulty name (any case) or its numeric game code 0-3."""
        text = value.strip()
        if text.isdigit():
            members = list(cls)
            index = int(text)
            if index < len(members):
                return members[index]
            raise ValueError(f"unknown difficulty code {text!r}")

        for member in cls:
            if member.value.lower() == text.lower():
                return member
        raise ValueError(f"unknown difficulty {text!r}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TelemetryRecord:
    """A single frame sample."""

    session_id: int
    timestamp_ms: float
    track: str
    difficulty: Difficulty
    kart_type: str
    steer: float
    accel: float
    speed: float
    brake: bool
    on_ground: bool
    position: tuple[float, float, float]
    energy: float


@dataclass(frozen=True)
class Session:
    """Time-ordered records of one race attempt."""

    session_id: int
    records: tuple[TelemetryRecord, ...]
    track: str
    difficulty: Difficulty
    kart_type: str

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class SessionScore:
    """Signals and combined frustration score for one session."""

    session_id: int
    track: str
    difficulty: Difficulty
    off_ground_ratio: float
    speed_drop_count: int
    steer_change_count: int
    frustration_score: float
    kart_type: str = ""
    frame_count: int = field(default=0, compare=False)
