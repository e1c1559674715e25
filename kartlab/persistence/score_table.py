"""
Session score table.

One row per session with the fixed column order:

    game_id,track,difficulty,off_ground_ratio,speed_drop_count,steer_change_count,frustration_score
"""

import logging
from pathlib import Path
from typing import Sequence

import pandas as pd

from kartlab.models.telemetry import SessionScore
from kartlab.utils.file_operations import atomic_text_write

logger = logging.getLogger(__name__)

OUTPUT_COLUMNS = [
    "game_id",
    "track",
    "difficulty",
    "off_ground_ratio",
    "speed_drop_count",
    "steer_change_count",
    "frustration_score",
]


def scores_to_frame(
    scores: Sequence[SessionScore], sort_by: Sequence[str] | None = None
) -> pd.DataFrame:
    """
    Build the output table.

    Rows keep the order of ``scores`` unless ``sort_by`` names output columns,
    in which case rows are stably sorted by them.
    """
    rows = [
        {
            "game_id": s.session_id,
            "track": s.track,
            "difficulty": str(s.difficulty),
            "off_ground_ratio": float(s.off_ground_ratio),
            "speed_drop_count": int(s.speed_drop_count),
            "steer_change_count": int(s.steer_change_count),
            "frustration_score": float(s.frustration_score),
        }
        for s in scores
    ]
    df = pd.DataFrame(rows, columns=OUTPUT_COLUMNS)

    if sort_by:
        unknown = [column for column in sort_by if column not in OUTPUT_COLUMNS]
        if unknown:
            raise ValueError(f"Cannot sort by unknown columns {unknown}. Use {OUTPUT_COLUMNS}")
        df = df.sort_values(by=list(sort_by), kind="stable").reset_index(drop=True)

    return df


def render_scores(scores: Sequence[SessionScore], sort_by: Sequence[str] | None = None) -> str:
    """Serialize scores to delimited text."""
    return scores_to_frame(scores, sort_by).to_csv(index=False, lineterminator="\n")


def write_scores(
    scores: Sequence[SessionScore],
    path: str | Path,
    sort_by: Sequence[str] | None = None,
    create_backup: bool = False,
) -> Path:
    """Write the score table atomically. Same input and ordering give identical bytes."""
    path = Path(path)
    atomic_text_write(path, render_scores(scores, sort_by), create_backup=create_backup)
    logger.info(f"Wrote {len(scores)} session scores to {path}")
    return path


def read_scores(path: str | Path) -> pd.DataFrame:
    """Load a previously written score table."""
    df = pd.read_csv(path)
    missing = [column for column in OUTPUT_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"{path} is not a score table, missing columns {missing}")
    return df[OUTPUT_COLUMNS]
