"""
Record Dispatcher

Routes a CODA line to the decoder of its record kind.
"""
from typing import Dict, Optional

from coda.common.models import DecodedRecord, RecordKind
from .base import BaseRecordDecoder
from .config.registry import LayoutRegistry
from .records import DECODERS


class RecordDispatcher:
    """
    Selects a decoder from the leading marker of a line.

    "21" and "22" are checked before the one-character markers "0" and "1";
    any other marker is not an error, the line is simply not a record.
    """

    def __init__(self, registry: LayoutRegistry = None):
        self.registry = registry or LayoutRegistry()
        self.registry.check_complete()
        self.decoders: Dict[RecordKind, BaseRecordDecoder] = {
            kind: decoder_cls.from_registry(self.registry)
            for kind, decoder_cls in DECODERS.items()
        }
        unhandled = set(RecordKind) - set(self.decoders) - {RecordKind.UNRECOGNIZED}
        if unhandled:
            raise ValueError(f"No decoder for {', '.join(sorted(k.name for k in unhandled))}")

    def detect_kind(self, line: str) -> RecordKind:
        layout = self.registry.detect(line)
        return layout.kind if layout else RecordKind.UNRECOGNIZED

    def decode_line(self, line: str) -> Optional[DecodedRecord]:
        """
        Decodes a line, or returns None when its marker is not recognized.
        Decoder errors are propagated unchanged.
        """
        kind = self.detect_kind(line)
        if kind is RecordKind.UNRECOGNIZED:
            return None
        return self.decoders[kind].decode(line)


_default_dispatcher: Optional[RecordDispatcher] = None


def get_default_dispatcher() -> RecordDispatcher:
    """Dispatcher over the bundled layouts, built on first use."""
    global _default_dispatcher
    if _default_dispatcher is None:
        _default_dispatcher = RecordDispatcher()
    return _default_dispatcher


def detect_kind(line: str) -> RecordKind:
    return get_default_dispatcher().detect_kind(line)


def decode_line(line: str) -> Optional[DecodedRecord]:
    return get_default_dispatcher().decode_line(line)
