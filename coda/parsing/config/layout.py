"""
Record Layout Configuration

Defines dataclasses describing the fixed-width layout of each CODA record kind.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from coda.common.models import RecordKind
from ..exceptions import LayoutConfigError


class FieldKind(Enum):
    """How the raw slice of a field is turned into a value."""
    FIXED_STRING = "fixed_string"
    TRIMMED_STRING = "trimmed_string"
    OPTIONAL_INTEGER = "optional_integer"
    MANDATORY_INTEGER = "mandatory_integer"
    DATE = "date"
    FLAG = "flag"
    OPTIONAL_FLAG = "optional_flag"
    FILLER = "filler"


@dataclass(frozen=True)
class FieldDef:
    """
    Defines where a field sits in a line and how to coerce it.

    Attributes:
        name: Field name on the decoded record (ignored for fillers)
        start: 0-based offset of the first character
        width: Number of characters
        kind: FieldKind used for coercion
        true_char: Character meaning True for flag fields
        sentinel: Raw value meaning "absent" (e.g. the zero date "000000")
        choices: Allowed values for integer fields
    """
    name: str
    start: int
    width: int
    kind: FieldKind
    true_char: Optional[str] = None
    sentinel: Optional[str] = None
    choices: Optional[Tuple[int, ...]] = None

    @property
    def end(self) -> int:
        return self.start + self.width


@dataclass(frozen=True)
class RecordLayout:
    """
    Layout of one CODA record kind.

    Attributes:
        name: Human-readable layout name (e.g. "Old Balance")
        kind: RecordKind decoded with this layout
        record_length: Fixed length of the line (128 in CODA 2)
        fields: Ordered FieldDefs tiling the whole line
    """
    name: str
    kind: RecordKind
    record_length: int
    fields: Tuple[FieldDef, ...] = field(default_factory=tuple)

    @property
    def prefix(self) -> str:
        return self.kind.value

    def value_fields(self) -> List[FieldDef]:
        """Fields that produce a value on the decoded record."""
        return [f for f in self.fields if f.kind is not FieldKind.FILLER]

    def validate(self) -> None:
        """
        Checks that the fields tile [0, record_length) in order,
        and that flag fields declare a single true character.
        """
        position = 0
        names = set()
        for f in self.fields:
            if f.width <= 0:
                raise LayoutConfigError(f"{self.name}: field '{f.name}' has width {f.width}")
            if f.start != position:
                raise LayoutConfigError(
                    f"{self.name}: field '{f.name}' starts at {f.start}, expected {position}"
                )
            if f.kind in (FieldKind.FLAG, FieldKind.OPTIONAL_FLAG):
                if not f.true_char or len(f.true_char) != f.width:
                    raise LayoutConfigError(f"{self.name}: flag '{f.name}' needs a true_char of width {f.width}")
            if f.kind is not FieldKind.FILLER:
                if f.name in names:
                    raise LayoutConfigError(f"{self.name}: duplicate field '{f.name}'")
                names.add(f.name)
            position = f.end
        if position != self.record_length:
            raise LayoutConfigError(
                f"{self.name}: fields cover {position} characters, record length is {self.record_length}"
            )
