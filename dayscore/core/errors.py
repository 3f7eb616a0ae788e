from datetime import date


class DayScoreError(Exception):
    """Base class for errors raised by the scoring engine."""


class ValidationError(DayScoreError):
    """An availability record breaks its type/field consistency rules."""

    def __init__(self, user_id: str, record_date: date, reason: str) -> None:
        self.user_id = user_id
        self.date = record_date
        self.reason = reason
        super().__init__(f"Invalid availability for user {user_id} on {record_date.isoformat()}: {reason}")


class ConfigurationError(DayScoreError):
    pass


class InputLimitError(DayScoreError):
    pass


class InternalConsistencyError(DayScoreError):
    """Sweep-line event stream is unbalanced; the result cannot be trusted."""
