"""
Base Class for Record Decoders

A decoder is bound to the RecordLayout of its record kind and turns one
CODA line into the matching immutable record.
"""
import dataclasses
from abc import ABC
from typing import ClassVar, Type

from coda.common.models import DecodedRecord, RecordKind
from . import codec
from .config.layout import RecordLayout
from .config.registry import LayoutRegistry
from .exceptions import DecodeError, LayoutConfigError, LayoutError

LINE_TERMINATORS = "\r\n"


class BaseRecordDecoder(ABC):
    """
    Abstract Base Class for all record decoders.

    Subclasses declare the record kind they handle and the record class
    they build. Decoding walks the layout in field order and stops at the
    first failing field.
    """

    record_kind: ClassVar[RecordKind]
    record_class: ClassVar[Type]

    def __init__(self, layout: RecordLayout):
        if layout.kind is not self.record_kind:
            raise ValueError(f"{self.__class__.__name__} cannot use layout for {layout.kind.name}")
        self._check_field_names(layout)
        self.layout = layout

    def _check_field_names(self, layout: RecordLayout):
        """Layout value fields and record attributes must name the same set."""
        layout_names = {f.name for f in layout.value_fields()}
        record_names = {f.name for f in dataclasses.fields(self.record_class)}
        if layout_names != record_names:
            details = []
            unknown = sorted(layout_names - record_names)
            missing = sorted(record_names - layout_names)
            if unknown:
                details.append(f"unknown fields {unknown}")
            if missing:
                details.append(f"missing fields {missing}")
            raise LayoutConfigError(
                f"Layout '{layout.name}' does not match {self.record_class.__name__}: {', '.join(details)}"
            )

    @classmethod
    def from_registry(cls, registry: LayoutRegistry) -> "BaseRecordDecoder":
        return cls(registry.get(cls.record_kind))

    def decode(self, line: str) -> DecodedRecord:
        """
        Decodes one line.

        Raises:
            LayoutError: the line is shorter than the record length, or has
                non-blank characters beyond it
            FieldFormatError, DateFormatError: a field cannot be coerced
        """
        line = self._check_length(line.rstrip(LINE_TERMINATORS))

        values = {}
        for field_def in self.layout.value_fields():
            try:
                values[field_def.name] = codec.extract(line, field_def)
            except DecodeError as e:
                raise e.with_context(record_kind=self.record_kind, field_name=field_def.name)

        return self.build(values)

    def build(self, values: dict) -> DecodedRecord:
        """Creates the record from the coerced field values."""
        return self.record_class(**values)

    def _check_length(self, line: str) -> str:
        length = self.layout.record_length
        if len(line) < length:
            raise LayoutError(
                f"Line has {len(line)} characters, {self.layout.name} record needs {length}",
                record_kind=self.record_kind,
                raw=line,
            )
        if line[length:].strip():
            raise LayoutError(
                f"Unexpected characters after position {length}",
                record_kind=self.record_kind,
                raw=line[length:],
            )
        return line[:length]
