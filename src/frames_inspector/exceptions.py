"""
Inspector Exceptions

The reconciliation engine never raises for missing data; these errors are
only raised at the input boundary (trace files, CLI).
"""

from typing import Optional


class InspectorError(Exception):
    """Base class for frames inspector errors."""


class TraceFormatError(InspectorError):
    """A trace file line could not be parsed into a panel envelope."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
