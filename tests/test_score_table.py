"""Tests for the session score table."""

import pytest

from kartlab.models.telemetry import Difficulty, SessionScore
from kartlab.persistence.score_table import (
    OUTPUT_COLUMNS,
    read_scores,
    render_scores,
    scores_to_frame,
    write_scores,
)


def _score(session_id, track="lighthouse", difficulty=Difficulty.NOVICE, frustration=1.0):
    return SessionScore(
        session_id=session_id,
        track=track,
        difficulty=difficulty,
        off_ground_ratio=25.0,
        speed_drop_count=2,
        steer_change_count=3,
        frustration_score=frustration,
    )


@pytest.fixture
def scores():
    return [
        _score(30, track="volcano", frustration=5.5),
        _score(10, track="lighthouse", difficulty=Difficulty.EXPERT, frustration=2.0),
        _score(20, track="cocoa", frustration=9.25),
    ]


def test_header_and_column_order(scores):
    lines = render_scores(scores).splitlines()

    assert lines[0] == ",".join(OUTPUT_COLUMNS)
    assert lines[1] == "30,volcano,Novice,25.0,2,3,5.5"
    assert lines[2] == "10,lighthouse,Expert,25.0,2,3,2.0"


def test_keeps_input_order_by_default(scores):
    assert list(scores_to_frame(scores)["game_id"]) == [30, 10, 20]


def test_explicit_sort(scores):
    df = scores_to_frame(scores, sort_by=["track"])
    assert list(df["track"]) == ["cocoa", "lighthouse", "volcano"]


def test_sort_is_stable_for_ties():
    tied = [_score(3, track="b"), _score(1, track="a"), _score(2, track="b")]
    assert list(scores_to_frame(tied, sort_by=["track"])["game_id"]) == [1, 3, 2]


def test_sort_by_unknown_column(scores):
    with pytest.raises(ValueError, match="unknown columns"):
        scores_to_frame(scores, sort_by=["kart"])


def test_write_is_idempotent(tmp_path, scores):
    path = tmp_path / "out" / "scores.csv"

    write_scores(scores, path)
    first = path.read_bytes()
    write_scores(scores, path)

    assert path.read_bytes() == first


def test_empty_scores_write_header_only(tmp_path):
    path = write_scores([], tmp_path / "scores.csv")
    assert path.read_text() == ",".join(OUTPUT_COLUMNS) + "\n"


def test_write_with_backup_keeps_previous_table(tmp_path, scores):
    path = tmp_path / "scores.csv"
    write_scores(scores[:1], path)
    previous = path.read_text()

    write_scores(scores, path, create_backup=True)

    assert (tmp_path / "scores.csv.backup").read_text() == previous


def test_read_scores_round_trip(tmp_path, scores):
    path = write_scores(scores, tmp_path / "scores.csv")

    df = read_scores(path)

    assert list(df.columns) == OUTPUT_COLUMNS
    assert list(df["frustration_score"]) == [5.5, 2.0, 9.25]


def test_read_scores_rejects_other_tables(tmp_path):
    path = tmp_path / "other.csv"
    path.write_text("a,b\n1,2\n")
    with pytest.raises(ValueError, match="not a score table"):
        read_scores(path)
