"""
CODA Parsing Module

- Field codec (slicing and coercion of fixed-width fields)
- Record layouts and their registry
- One decoder per record kind
- Dispatcher routing a line to its decoder
- Statement reader producing records or a DataFrame
"""

# Exceptions
from .exceptions import DecodeError, LayoutError, FieldFormatError, DateFormatError, LayoutConfigError

# Configuration
from .config.layout import FieldDef, FieldKind, RecordLayout
from .config.registry import LayoutRegistry

# Decoders
from .base import BaseRecordDecoder
from .records import (
    DECODERS,
    InitialRecordDecoder,
    OldBalanceRecordDecoder,
    TransactionRecordDecoder,
    TransactionPurposeRecordDecoder,
)

# Dispatch & Facade
from .dispatcher import RecordDispatcher, decode_line, detect_kind
from .facade import CodaParser, ParseResult

__all__ = [
    # Exceptions
    'DecodeError',
    'LayoutError',
    'FieldFormatError',
    'DateFormatError',
    'LayoutConfigError',
    # Config
    'FieldDef',
    'FieldKind',
    'RecordLayout',
    'LayoutRegistry',
    # Decoders
    'BaseRecordDecoder',
    'DECODERS',
    'InitialRecordDecoder',
    'OldBalanceRecordDecoder',
    'TransactionRecordDecoder',
    'TransactionPurposeRecordDecoder',
    # Dispatch
    'RecordDispatcher',
    'decode_line',
    'detect_kind',
    'CodaParser',
    'ParseResult',
]
