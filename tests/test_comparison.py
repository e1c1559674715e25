"""Tests for track and difficulty comparison."""

import pytest

from kartlab.models.telemetry import Difficulty, SessionScore
from kartlab.persistence.score_table import read_scores, write_scores
from kartlab.pipelines.comparison import compare_groups


def _score(session_id, track, difficulty, frustration, kart_type="tux"):
    return SessionScore(
        session_id=session_id,
        track=track,
        difficulty=difficulty,
        off_ground_ratio=frustration,
        speed_drop_count=1,
        steer_change_count=2,
        frustration_score=frustration,
        kart_type=kart_type,
        frame_count=100,
    )


@pytest.fixture
def scores():
    return [
        _score(1, "lighthouse", Difficulty.NOVICE, 2.0),
        _score(2, "lighthouse", Difficulty.NOVICE, 4.0),
        _score(3, "volcano", Difficulty.EXPERT, 30.0, kart_type="gnu"),
        _score(4, "lighthouse", Difficulty.EXPERT, 10.0),
    ]


def test_groups_by_track_and_difficulty(scores):
    summary = compare_groups(scores)

    assert list(summary.columns[:3]) == ["track", "difficulty", "sessions"]
    assert list(summary["track"]) == ["volcano", "lighthouse", "lighthouse"]
    novice = summary[(summary["track"] == "lighthouse") & (summary["difficulty"] == "Novice")].iloc[0]
    assert novice["sessions"] == 2
    assert novice["mean_frustration_score"] == pytest.approx(3.0)


def test_group_by_kart(scores):
    summary = compare_groups(scores, by=["kart_type"])
    assert dict(zip(summary["kart_type"], summary["sessions"])) == {"gnu": 1, "tux": 3}


def test_accepts_loaded_score_table(tmp_path, scores):
    table = read_scores(write_scores(scores, tmp_path / "scores.csv"))

    summary = compare_groups(table, by=["difficulty"])

    assert list(summary["difficulty"]) == ["Expert", "Novice"]
    assert summary.iloc[0]["mean_frustration_score"] == pytest.approx(20.0)


def test_unknown_group_column(tmp_path, scores):
    table = read_scores(write_scores(scores, tmp_path / "scores.csv"))
    with pytest.raises(ValueError, match="kart_type"):
        compare_groups(table, by=["kart_type"])
