from __future__ import annotations


class PrevoyanceError(Exception):
    """Base class for errors raised by the calculation core."""


class BracketTableError(PrevoyanceError, ValueError):
    """A bracket table cannot define a continuous piecewise-linear function."""


class RecordValidationError(PrevoyanceError, ValueError):
    """A financial record payload is missing data or carries an invalid value."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
