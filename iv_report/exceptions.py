"""Error types raised by the I-V Curve Report toolkit."""


class IVReportError(Exception):
    """Base class for all toolkit errors."""


class MalformedRow(IVReportError):
    """A data row is blank or has too few fields.

    Recovered inside the parser: the row is skipped and the error is
    kept as a diagnostic on the parse result.
    """

    def __init__(self, line_no: int, reason: str):
        self.line_no = line_no
        self.reason = reason
        super().__init__(f"line {line_no}: {reason}")


class MalformedNumber(IVReportError):
    """A numeric cell could not be parsed.

    Recovered inside the parser: the cell degrades to 0 (or to the
    measured value for the corrected columns).
    """

    def __init__(self, line_no: int, column: str, value: str):
        self.line_no = line_no
        self.column = column
        self.value = value
        super().__init__(f"line {line_no}: {column}={value!r} is not a number")


class FileUnreadableError(IVReportError):
    """The bytes of a measurement file could not be acquired or decoded."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Cannot read {name}: {reason}")


class UnknownCurveError(IVReportError, KeyError):
    """A curve key is not present in the session."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"No curve named {self.key!r} in session"


class IncompleteReportError(IVReportError):
    """Report inputs are missing required plant data or curves."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__("Incomplete report inputs: " + ", ".join(self.missing))
