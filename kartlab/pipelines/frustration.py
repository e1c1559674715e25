"""
Frustration scoring pipeline.

Read log -> group sessions -> extract signals -> combine -> write table, in a
single batch pass over a closed telemetry log.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from tqdm import tqdm

from kartlab.features.signals import SessionSignalExtractor
from kartlab.loaders.records import TelemetryLogReader
from kartlab.loaders.sessions import group_sessions
from kartlab.models.scoring import FrustrationScoring
from kartlab.models.telemetry import Session, SessionScore
from kartlab.persistence.score_table import write_scores
from kartlab.utils.config_loader import Config, load_config

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Outcome of one scoring run."""

    scores: list[SessionScore]
    record_count: int = 0
    skipped_rows: list[int] = field(default_factory=list)
    anomalies: list[UserWarning] = field(default_factory=list)
    output_path: Path | None = None

    @property
    def session_count(self) -> int:
        return len(self.scores)

    def summary_rows(self) -> list[tuple[str, object]]:
        """Key figures for display."""
        return [
            ("records", self.record_count),
            ("sessions", self.session_count),
            ("skipped rows", len(self.skipped_rows)),
            ("anomalies", len(self.anomalies)),
        ]


def score_sessions(
    sessions: Iterable[Session],
    extractor: SessionSignalExtractor | None = None,
    scoring: FrustrationScoring | None = None,
    progress: bool = False,
) -> list[SessionScore]:
    """Score each session independently, keeping the input order."""
    extractor = extractor or SessionSignalExtractor()
    scoring = scoring or FrustrationScoring()

    scores = []
    for session in tqdm(sessions, desc="Scoring sessions", colour="green", disable=not progress):
        signals = extractor.extract_signals(session)
        scores.append(scoring.score_session(session, signals))
    return scores


def run_pipeline(
    input_path: str | Path,
    output_path: str | Path,
    config: Config | None = None,
    sort_by: Sequence[str] | None = None,
    on_malformed: str | None = None,
    progress: bool = False,
) -> PipelineResult:
    """
    Score every session in ``input_path`` and write the table to ``output_path``.

    ``sort_by`` and ``on_malformed`` override the configured values when given.
    Raises MalformedRecordError when the log is malformed and the policy is
    "raise"; nothing is written in that case.
    """
    config = config or load_config()
    on_malformed = on_malformed or config.get("reader.on_malformed", "raise")
    sort_by = sort_by if sort_by is not None else config.get("output.sort_by")

    reader = TelemetryLogReader(on_malformed=on_malformed)
    records = reader.read(input_path)

    anomalies: list[UserWarning] = []
    sessions = group_sessions(records, anomalies=anomalies)

    extractor = SessionSignalExtractor(
        speed_drop_threshold=config.get("scoring.speed_drop_threshold", -5.0)
    )
    scoring = FrustrationScoring(config.score_weights())
    scores = score_sessions(sessions.values(), extractor, scoring, progress=progress)

    written = write_scores(
        scores, output_path, sort_by=sort_by, create_backup=config.get("output.backup", False)
    )

    if anomalies or reader.skipped_rows:
        logger.warning(
            f"Completed with {len(anomalies)} data-quality anomalies "
            f"and {len(reader.skipped_rows)} skipped rows"
        )
    else:
        logger.info(f"Scored {len(scores)} sessions with no anomalies")

    return PipelineResult(
        scores=scores,
        record_count=len(records),
        skipped_rows=list(reader.skipped_rows),
        anomalies=anomalies,
        output_path=written,
    )
