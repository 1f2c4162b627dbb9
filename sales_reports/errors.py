"""
Error taxonomy for the reporting runner.

Library code raises these and lets them propagate; only the CLI turns them
into log lines and exit codes.
"""

from typing import Any, Iterable, Optional


class ReportingError(Exception):
    """Base class for every error raised by sales_reports."""


class ConfigurationError(ReportingError, ValueError):
    pass


class MissingColumns(ReportingError, ValueError):
    def __init__(self, missing: Iterable[str]):
        self.missing = sorted(missing)
        super().__init__(f"Source is missing required columns: {', '.join(self.missing)}")


class MalformedRecord(ReportingError, ValueError):
    """
    A source row that cannot become a SalesRecord.

    row_index is the 0-based position of the data row in the source
    (the header line is not counted).
    """

    def __init__(self, row_index: int, field: str, reason: str, value: Optional[Any] = None):
        self.row_index = row_index
        self.field = field
        self.reason = reason
        self.value = value
        message = f"Malformed record at row {row_index}, field '{field}': {reason}"
        if value is not None:
            message = f"{message} ({value!r})"
        super().__init__(message)


class UnknownReport(ReportingError, KeyError):
    def __init__(self, name: str, known: Iterable[str]):
        self.name = name
        self.known = list(known)
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown report '{self.name}'. Available reports: {', '.join(self.known)}"


class ReportValidationError(ReportingError):
    def __init__(self, report: str, details: str):
        self.report = report
        self.details = details
        super().__init__(f"Report '{report}' failed output validation:\n{details}")
