"""
Telemetry log reader and append-only writer.

The log is a delimited table with one row per sampled frame:

    game_id,time,track,difficulty,kart_type,steer,accel,speed,brake,on_ground,x,y,z,energy

Booleans are written as 0/1.
"""

import csv
import logging
import math
from pathlib import Path
from typing import IO, Iterable, Literal

from kartlab.errors import MalformedRecordError
from kartlab.models.telemetry import Difficulty, TelemetryRecord

logger = logging.getLogger(__name__)

INPUT_COLUMNS = [
    "game_id",
    "time",
    "track",
    "difficulty",
    "kart_type",
    "steer",
    "accel",
    "speed",
    "brake",
    "on_ground",
    "x",
    "y",
    "z",
    "energy",
]

_TRUE_VALUES = {"1", "true"}
_FALSE_VALUES = {"0", "false"}


def _parse_float(row: dict, column: str, line_number: int) -> float:
    raw = row[column]
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise MalformedRecordError(
            f"column '{column}' expected a number, got {raw!r}", line_number, column
        ) from None
    if not math.isfinite(value):
        raise MalformedRecordError(
            f"column '{column}' must be finite, got {raw!r}", line_number, column
        )
    return value


def _parse_bool(row: dict, column: str, line_number: int) -> bool:
    raw = row[column].strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise MalformedRecordError(
        f"column '{column}' expected 0 or 1, got {row[column]!r}", line_number, column
    )


def parse_row(row: dict, line_number: int) -> TelemetryRecord:
    """Convert one csv.DictReader row into a TelemetryRecord."""
    # DictReader stores surplus fields under the None key and pads short rows with None
    if None in row or any(row[column] is None for column in INPUT_COLUMNS):
        found = sum(1 for key, value in row.items() if key is not None and value is not None)
        found += len(row.get(None) or [])
        raise MalformedRecordError(
            f"expected {len(INPUT_COLUMNS)} fields, found {found}", line_number
        )

    for column in INPUT_COLUMNS:
        try:
            row[column].encode("utf-8")
        except UnicodeEncodeError:
            raise MalformedRecordError(
                f"column '{column}' is not valid UTF-8: {row[column]!r}", line_number, column
            ) from None

    try:
        session_id = int(row["game_id"])
    except ValueError:
        raise MalformedRecordError(
            f"column 'game_id' expected an integer, got {row['game_id']!r}",
            line_number,
            "game_id",
        ) from None

    try:
        difficulty = Difficulty.parse(row["difficulty"])
    except ValueError as e:
        raise MalformedRecordError(str(e), line_number, "difficulty") from None

    return TelemetryRecord(
        session_id=session_id,
        timestamp_ms=_parse_float(row, "time", line_number),
        track=row["track"],
        difficulty=difficulty,
        kart_type=row["kart_type"],
        steer=_parse_float(row, "steer", line_number),
        accel=_parse_float(row, "accel", line_number),
        speed=_parse_float(row, "speed", line_number),
        brake=_parse_bool(row, "brake", line_number),
        on_ground=_parse_bool(row, "on_ground", line_number),
        position=(
            _parse_float(row, "x", line_number),
            _parse_float(row, "y", line_number),
            _parse_float(row, "z", line_number),
        ),
        energy=_parse_float(row, "energy", line_number),
    )


class TelemetryLogReader:
    """
    Parse a telemetry log into records, in original row order.

    on_malformed="raise" rejects the whole input on the first bad row.
    on_malformed="skip" drops bad rows and keeps their line numbers in
    ``skipped_rows`` so the caller can report them.
    """

    def __init__(self, on_malformed: Literal["raise", "skip"] = "raise"):
        if on_malformed not in ("raise", "skip"):
            raise ValueError(f"on_malformed must be 'raise' or 'skip', got {on_malformed!r}")
        self.on_malformed = on_malformed
        self.skipped_rows: list[int] = []

    def read(self, source: str | Path | IO[str]) -> list[TelemetryRecord]:
        """Read every record from a path or an open text stream."""
        self.skipped_rows = []

        if isinstance(source, (str, Path)):
            # undecodable bytes survive as surrogates and are rejected per row
            with open(source, newline="", encoding="utf-8", errors="surrogateescape") as f:
                records = self._read_stream(f)
            logger.info(f"Read {len(records)} telemetry records from {source}")
        else:
            records = self._read_stream(source)
            logger.debug(f"Read {len(records)} telemetry records from stream")

        if self.skipped_rows:
            logger.warning(
                f"Skipped {len(self.skipped_rows)} malformed rows (lines {self.skipped_rows})"
            )
        return records

    def _read_stream(self, stream: IO[str]) -> list[TelemetryRecord]:
        reader = csv.DictReader(stream)
        header = reader.fieldnames or []
        missing = [column for column in INPUT_COLUMNS if column not in header]
        if missing:
            raise MalformedRecordError(f"header is missing columns {missing}", 1)

        extra = [column for column in header if column not in INPUT_COLUMNS]
        if extra:
            logger.debug(f"Ignoring extra input columns: {extra}")

        records = []
        for row in reader:
            line_number = reader.line_num
            try:
                records.append(parse_row(row, line_number))
            except MalformedRecordError as e:
                if self.on_malformed == "raise":
                    raise
                logger.warning(f"Skipping malformed row: {e}")
                self.skipped_rows.append(line_number)
        return records


def read_records(
    source: str | Path | IO[str], on_malformed: Literal["raise", "skip"] = "raise"
) -> list[TelemetryRecord]:
    """Read a telemetry log; see TelemetryLogReader for the malformed-row policy."""
    return TelemetryLogReader(on_malformed=on_malformed).read(source)


def _format_bool(value: bool) -> str:
    return "1" if value else "0"


class TelemetryLogWriter:
    """Append-only sink producing the telemetry log format."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, records: Iterable[TelemetryRecord]) -> int:
        """Append records, writing the header first if the log is new. Returns rows written."""
        write_header = not self.path.exists() or self.path.stat().st_size == 0
        count = 0
        with open(self.path, "a", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            if write_header:
                writer.writerow(INPUT_COLUMNS)
            for record in records:
                x, y, z = record.position
                writer.writerow(
                    [
                        record.session_id,
                        record.timestamp_ms,
                        record.track,
                        record.difficulty.value,
                        record.kart_type,
                        record.steer,
                        record.accel,
                        record.speed,
                        _format_bool(record.brake),
                        _format_bool(record.on_ground),
                        x,
                        y,
                        z,
                        record.energy,
                    ]
                )
                count += 1
        logger.debug(f"Appended {count} records to {self.path}")
        return count
