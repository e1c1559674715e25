"""Error and anomaly types raised or collected by the scoring pipeline."""


class MalformedRecordError(ValueError):
    """A telemetry row does not match the input table contract."""

    def __init__(self, message: str, line_number: int | None = None, column: str | None = None):
        self.line_number = line_number
        self.column = column
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class EmptySessionWarning(UserWarning):
    """A session id ended up with no records after grouping."""

    def __init__(self, session_id: int):
        self.session_id = session_id
        super().__init__(f"Session {session_id} has no records and was dropped")


class InconsistentMetadataWarning(UserWarning):
    """A session's track, difficulty or kart type varies across its records."""

    def __init__(self, session_id: int, field: str, kept, observed: list):
        self.session_id = session_id
        self.field = field
        self.kept = kept
        self.observed = observed
        super().__init__(
            f"Session {session_id} has inconsistent {field} values {observed}; "
            f"keeping first value {kept!r}"
        )
