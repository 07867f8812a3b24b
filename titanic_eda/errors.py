"""
errors.py: Exceptions raised by the dataset and analysis modules.

All of them derive from ValueError so callers that already guard
dataset loading with `except ValueError` keep working.
"""


class TitanicEDAError(ValueError):
    """Base class for every error raised by titanic_eda."""


class EmptyDatasetError(TitanicEDAError):
    """Raised when there are no rows to analyse."""


class UnknownFieldError(TitanicEDAError):
    """Raised when a statistic is requested on a field outside the fixed schema."""

    def __init__(self, field, reason=None):
        self.field = field
        self.reason = reason or "not part of the Titanic schema"
        super().__init__(f"Unknown field '{field}': {self.reason}.")


class MalformedRecordError(TitanicEDAError):
    """
    A single input record could not be turned into a row.
    The record is skipped; the error is kept on the dataset so the
    caller can report which row index was rejected and why.
    """

    def __init__(self, index: int, field: str, reason: str):
        self.index = index
        self.field = field
        self.reason = reason
        super().__init__(f"Record {index} rejected ({field}): {reason}")

    def to_dict(self) -> dict:
        return {"index": self.index, "field": self.field, "reason": self.reason}
