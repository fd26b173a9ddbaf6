"""
Exceptions raised while decoding CODA lines and loading layouts.
"""


class DecodeError(Exception):
    """
    Raised when a CODA line cannot be decoded.

    Carries the context needed to locate the problem:
    - The record kind that was attempted
    - The name of the field that failed
    - The raw slice found at that field's position
    - The line number, when the caller knows it
    """

    def __init__(self, reason: str, record_kind=None, field_name: str = None, raw: str = None, line_no: int = None):
        self.reason = reason
        self.record_kind = record_kind
        self.field_name = field_name
        self.raw = raw
        self.line_no = line_no
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        details = []
        if self.line_no is not None:
            details.append(f"line {self.line_no}")
        if self.record_kind is not None:
            details.append(f"record {getattr(self.record_kind, 'name', self.record_kind)}")
        if self.field_name:
            details.append(f"field {self.field_name}")
        if self.raw is not None:
            details.append(f"raw {self.raw!r}")
        return f"{self.reason} ({', '.join(details)})" if details else self.reason

    def with_context(self, record_kind=None, field_name: str = None, line_no: int = None) -> "DecodeError":
        """Fill in missing context and return self, for re-raising."""
        if self.record_kind is None:
            self.record_kind = record_kind
        if self.field_name is None:
            self.field_name = field_name
        if self.line_no is None:
            self.line_no = line_no
        self.args = (self._build_message(),)
        return self


class LayoutError(DecodeError):
    """The line does not have the length its record layout requires."""


class FieldFormatError(DecodeError):
    """A numeric, flag or enumerated field holds something else."""


class DateFormatError(DecodeError):
    """A date field is not a valid ddmmyy calendar date."""


class LayoutConfigError(Exception):
    """
    Raised when a layout configuration file is missing or inconsistent.
    """

    def __init__(self, message: str, filename: str = None):
        self.filename = filename
        super().__init__(f"{message}\nFile: {filename}" if filename else message)
