"""Compare frustration across tracks, difficulty settings and karts."""

from typing import Sequence

import pandas as pd

from kartlab.models.telemetry import SessionScore

SIGNAL_COLUMNS = ["off_ground_ratio", "speed_drop_count", "steer_change_count", "frustration_score"]
GROUP_COLUMNS = ["track", "difficulty", "kart_type"]


def scores_frame(scores: Sequence[SessionScore]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "game_id": s.session_id,
                "track": s.track,
                "difficulty": str(s.difficulty),
                "kart_type": s.kart_type,
                "frames": s.frame_count,
                "off_ground_ratio": s.off_ground_ratio,
                "speed_drop_count": s.speed_drop_count,
                "steer_change_count": s.steer_change_count,
                "frustration_score": s.frustration_score,
            }
            for s in scores
        ],
        columns=["game_id", *GROUP_COLUMNS, "frames", *SIGNAL_COLUMNS],
    )


def compare_groups(
    scores: Sequence[SessionScore] | pd.DataFrame,
    by: Sequence[str] = ("track", "difficulty"),
) -> pd.DataFrame:
    """
    Mean of each signal per group, plus the number of sessions.

    Accepts SessionScore objects or a table loaded with read_scores. Groups
    are ordered by descending mean frustration.
    """
    df = scores if isinstance(scores, pd.DataFrame) else scores_frame(scores)
    by = list(by)
    unknown = [column for column in by if column not in df.columns]
    if unknown:
        raise ValueError(f"Cannot group by {unknown}; available columns are {list(df.columns)}")

    summary = df.groupby(by, sort=True).agg(
        sessions=("game_id", "count"),
        **{f"mean_{column}": (column, "mean") for column in SIGNAL_COLUMNS},
    )
    return summary.sort_values("mean_frustration_score", ascending=False, kind="stable").reset_index()
