"""
Field Codec

Slices fixed-width fields out of a CODA line and coerces them into typed values.
All functions are pure; errors carry the offending raw slice and are enriched
with record/field context by the record decoders.
"""
import re
from datetime import date
from typing import Optional

from .config.layout import FieldDef, FieldKind
from .exceptions import DateFormatError, FieldFormatError, LayoutError

_DIGITS = re.compile(r"[0-9]+")
_DATE = re.compile(r"([0-9]{2})([0-9]{2})([0-9]{2})")


def slice_field(line: str, start: int, width: int) -> str:
    """Returns line[start:start + width], or raises LayoutError if the line is too short."""
    end = start + width
    if len(line) < end:
        raise LayoutError(f"Line has {len(line)} characters, field needs {end}", raw=line[start:])
    return line[start:end]


def as_trimmed_string(raw: str) -> str:
    return raw.strip()


def as_optional_integer(raw: str) -> Optional[int]:
    """
    Parses a non-negative base-10 integer.
    A slice of spaces means the value is absent and yields None, never 0.
    Only ASCII spaces count as padding.
    """
    value = raw.strip(" ")
    if not value:
        return None
    if not _DIGITS.fullmatch(value):
        raise FieldFormatError("Expected digits", raw=raw)
    return int(value)


def as_mandatory_integer(raw: str) -> int:
    value = as_optional_integer(raw)
    if value is None:
        raise FieldFormatError("Mandatory number is blank", raw=raw)
    return value


def as_date(raw: str) -> date:
    """
    Parses a ddmmyy date; the two-digit year is taken in the 2000s.
    "000000" is not a date: callers for which it means "absent" must check it first.
    """
    m = _DATE.fullmatch(raw)
    if not m:
        raise DateFormatError("Expected a ddmmyy date", raw=raw)
    day, month, year = (int(g) for g in m.groups())
    try:
        return date(2000 + year, month, day)
    except ValueError as e:
        raise DateFormatError(f"Invalid calendar date: {e}", raw=raw) from e


def as_flag(raw: str, true_char: str) -> bool:
    return raw == true_char


def as_optional_flag(raw: str, true_char: str) -> Optional[bool]:
    if not raw.strip(" "):
        return None
    return as_flag(raw, true_char)


def coerce(field_def: FieldDef, raw: str):
    """Applies the FieldKind of field_def to a raw slice."""
    if field_def.sentinel is not None and raw == field_def.sentinel:
        return None

    kind = field_def.kind
    if kind is FieldKind.FIXED_STRING:
        value = raw
    elif kind is FieldKind.TRIMMED_STRING:
        value = as_trimmed_string(raw)
    elif kind is FieldKind.OPTIONAL_INTEGER:
        value = as_optional_integer(raw)
    elif kind is FieldKind.MANDATORY_INTEGER:
        value = as_mandatory_integer(raw)
    elif kind is FieldKind.DATE:
        value = as_date(raw)
    elif kind is FieldKind.FLAG:
        value = as_flag(raw, field_def.true_char)
    elif kind is FieldKind.OPTIONAL_FLAG:
        value = as_optional_flag(raw, field_def.true_char)
    elif kind is FieldKind.FILLER:
        value = None
    else:
        raise ValueError(f"Unknown field kind: {kind}")

    if field_def.choices is not None and value is not None and value not in field_def.choices:
        raise FieldFormatError(
            f"Value {value} not in {', '.join(str(c) for c in field_def.choices)}", raw=raw
        )
    return value


def extract(line: str, field_def: FieldDef):
    """Slices and coerces one field of a line."""
    return coerce(field_def, slice_field(line, field_def.start, field_def.width))
