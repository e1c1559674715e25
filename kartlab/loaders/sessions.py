"""
Session grouping.

Partitions telemetry records by session id and orders each partition by time.
"""

import logging
from typing import Iterable

from kartlab.errors import EmptySessionWarning, InconsistentMetadataWarning
from kartlab.models.telemetry import Session, TelemetryRecord

logger = logging.getLogger(__name__)

METADATA_FIELDS = ("track", "difficulty", "kart_type")


def check_metadata(session_id: int, records: list[TelemetryRecord]) -> list[InconsistentMetadataWarning]:
    """Report every metadata field whose value changes within a session."""
    anomalies = []
    first = records[0]
    for field in METADATA_FIELDS:
        observed = []
        for record in records:
            value = getattr(record, field)
            if value not in observed:
                observed.append(value)
        if len(observed) > 1:
            anomalies.append(
                InconsistentMetadataWarning(
                    session_id,
                    field,
                    kept=str(getattr(first, field)),
                    observed=[str(v) for v in observed],
                )
            )
    return anomalies


def group_sessions(
    records: Iterable[TelemetryRecord],
    anomalies: list[UserWarning] | None = None,
) -> dict[int, Session]:
    """
    Group records into sessions keyed by session id.

    Keys keep the order in which each id first appears in ``records``. Within
    a session, records are sorted by timestamp; equal timestamps keep their
    input order. Non-fatal data-quality findings are logged and appended to
    ``anomalies`` when a list is given.
    """
    partitions: dict[int, list[TelemetryRecord]] = {}
    for record in records:
        partitions.setdefault(record.session_id, []).append(record)

    sessions = {}
    for session_id, session_records in partitions.items():
        if not session_records:
            warning = EmptySessionWarning(session_id)
            logger.warning(str(warning))
            if anomalies is not None:
                anomalies.append(warning)
            continue

        # sorted() is stable, so ties keep input order
        ordered = sorted(session_records, key=lambda r: r.timestamp_ms)

        for warning in check_metadata(session_id, ordered):
            logger.warning(str(warning))
            if anomalies is not None:
                anomalies.append(warning)

        first = ordered[0]
        sessions[session_id] = Session(
            session_id=session_id,
            records=tuple(ordered),
            track=first.track,
            difficulty=first.difficulty,
            kart_type=first.kart_type,
        )

    logger.info(f"Grouped records into {len(sessions)} sessions")
    return sessions
