"""
Shared test fixtures and configuration.
"""

import pytest

from kartlab.loaders.records import INPUT_COLUMNS
from kartlab.models.telemetry import Difficulty, TelemetryRecord

HEADER = ",".join(INPUT_COLUMNS)


def make_record(
    session_id=1,
    timestamp_ms=0,
    speed=10.0,
    steer=0.0,
    on_ground=True,
    track="lighthouse",
    difficulty=Difficulty.NOVICE,
    kart_type="tux",
):
    return TelemetryRecord(
        session_id=session_id,
        timestamp_ms=timestamp_ms,
        track=track,
        difficulty=difficulty,
        kart_type=kart_type,
        steer=steer,
        accel=1.0,
        speed=speed,
        brake=False,
        on_ground=on_ground,
        position=(0.0, 0.0, 0.0),
        energy=0.0,
    )


def make_row(
    game_id=1,
    time=0,
    track="lighthouse",
    difficulty="Novice",
    kart_type="tux",
    steer=0.0,
    speed=10.0,
    brake=0,
    on_ground=1,
):
    return f"{game_id},{time},{track},{difficulty},{kart_type},{steer},1.0,{speed},{brake},{on_ground},1.0,2.0,3.0,0.0"


@pytest.fixture
def record_factory():
    """Build TelemetryRecord objects with sensible defaults."""
    return make_record


@pytest.fixture
def two_session_log(tmp_path):
    """
    Session 7: grounded, steady, straight -> score 0.0.
    Session 9: airborne, one hard drop, two steering flips -> score 40.8.
    Rows are interleaved and out of time order.
    """
    rows = [
        HEADER,
        make_row(game_id=9, time=200, track="volcano", difficulty="Expert", speed=5, steer=1, on_ground=0),
        make_row(game_id=7, time=0, speed=10, steer=0),
        make_row(game_id=9, time=0, track="volcano", difficulty="Expert", speed=20, steer=1, on_ground=0),
        make_row(game_id=7, time=100, speed=10, steer=0),
        make_row(game_id=9, time=100, track="volcano", difficulty="Expert", speed=5, steer=-1, on_ground=0),
        make_row(game_id=7, time=200, speed=10, steer=0),
    ]
    path = tmp_path / "telemetry.csv"
    path.write_text("\n".join(rows) + "\n")
    return path


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config and return its path."""

    def _write(text):
        path = tmp_path / "config.yaml"
        path.write_text(text)
        return path

    return _write
