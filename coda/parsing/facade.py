"""
CODA Statement Reader

Feeds the lines of a CODA file to the dispatcher and assembles the results,
either as decoded records or as a transactions DataFrame with metadata.
"""
import io
import os
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import pandas as pd

from coda.common.logging_config import get_logger
from coda.common.models import (
    DecodedRecord,
    InitialRecord,
    OldBalanceRecord,
    TransactionPurposeRecord,
    TransactionRecord,
)
from .dispatcher import RecordDispatcher, get_default_dispatcher
from .exceptions import DecodeError

logger = get_logger(__name__)

DEFAULT_ENCODING = "cp1252"
ENCODING_ENV = "CODA_ENCODING"

# CODA amounts carry three decimals
AMOUNT_SCALE = 1000

TRANSACTION_COLUMNS = [
    'date', 'value_date', 'amount', 'description', 'source',
    'serial_number', 'detail_number', 'bank_reference_number', 'transaction_code',
    'client_reference', 'counterparty_bic', 'purpose_category', 'purpose',
]


@dataclass
class ParseResult:
    """Outcome of decoding a whole file."""
    records: List[DecodedRecord] = field(default_factory=list)
    errors: List[DecodeError] = field(default_factory=list)
    skipped: int = 0

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def of_type(self, record_class) -> list:
        return [r for r in self.records if isinstance(r, record_class)]


def signed_amount(amount: Optional[int], is_debit: bool) -> Optional[float]:
    """Converts a CODA amount in minor units to a signed float (debits negative)."""
    if amount is None:
        return None
    value = amount / AMOUNT_SCALE
    return -value if is_debit else value


class CodaParser:
    """
    Parser for CODA statement files.

    Accepts a path, raw bytes, or a binary/text file object.
    """

    def __init__(self, dispatcher: RecordDispatcher = None, encoding: str = None):
        self.dispatcher = dispatcher or get_default_dispatcher()
        self.encoding = encoding or os.getenv(ENCODING_ENV) or DEFAULT_ENCODING

    def iter_lines(self, file_path_or_buffer) -> Iterator[Tuple[int, str]]:
        """Yields (line_no, line) pairs, 1-based, without line terminators."""
        if isinstance(file_path_or_buffer, (str, os.PathLike)):
            with open(file_path_or_buffer, 'rb') as f:
                content = f.read().decode(self.encoding, errors="replace")
        elif isinstance(file_path_or_buffer, bytes):
            content = file_path_or_buffer.decode(self.encoding, errors="replace")
        else:
            raw = file_path_or_buffer.read()
            content = raw.decode(self.encoding, errors="replace") if isinstance(raw, bytes) else raw

        for line_no, line in enumerate(io.StringIO(content, newline=None), start=1):
            yield line_no, line.rstrip("\r\n")

    def parse_records(self, file_path_or_buffer, strict: bool = True) -> ParseResult:
        """
        Decodes every line of a CODA file.

        Args:
            file_path_or_buffer: Path, bytes or file object
            strict: Re-raise the first DecodeError (with its line number).
                When False, errors are collected and decoding continues.
        """
        result = ParseResult()
        for line_no, line in self.iter_lines(file_path_or_buffer):
            try:
                record = self.dispatcher.decode_line(line)
            except DecodeError as e:
                e.with_context(line_no=line_no)
                if strict:
                    logger.error(f"Decode failed: {e}", line_no=line_no, field=e.field_name)
                    raise
                logger.warning(f"Skipping faulty line: {e}", line_no=line_no, field=e.field_name)
                result.errors.append(e)
                continue

            if record is None:
                logger.debug("Unrecognized record marker, line skipped.", line_no=line_no, marker=line[:2])
                result.skipped += 1
                continue
            result.records.append(record)

        logger.info(
            "CODA file decoded.",
            record_count=len(result.records),
            error_count=len(result.errors),
            skipped=result.skipped,
        )
        return result

    def parse(self, file_path_or_buffer) -> tuple[pd.DataFrame, dict]:
        """
        Parses a CODA file into a DataFrame of transactions and a metadata dict.
        Purpose records (22) are joined onto their movement (21) by serial and detail number.
        """
        result = self.parse_records(file_path_or_buffer)
        return self.to_dataframe(result.records), self.metadata(result.records)

    def to_dataframe(self, records: List[DecodedRecord]) -> pd.DataFrame:
        purposes = {
            (r.serial_number, r.detail_number): r
            for r in records if isinstance(r, TransactionPurposeRecord)
        }

        rows = []
        for r in records:
            if not isinstance(r, TransactionRecord):
                continue
            purpose = purposes.get((r.serial_number, r.detail_number))
            description = r.free_reference
            if purpose and purpose.bank_statement_text:
                description = f"{description} {purpose.bank_statement_text}".strip()
            rows.append({
                'date': r.booking_date,
                'value_date': r.balance_date,
                'amount': signed_amount(r.balance_amount, r.balance_sign),
                'description': description,
                'source': 'Bank',
                'serial_number': r.serial_number,
                'detail_number': r.detail_number,
                'bank_reference_number': r.bank_reference_number,
                'transaction_code': r.transaction_code,
                'client_reference': purpose.client_reference if purpose else None,
                'counterparty_bic': purpose.bic if purpose else None,
                'purpose_category': purpose.purpose_category if purpose else None,
                'purpose': purpose.purpose if purpose else None,
            })

        return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)

    def metadata(self, records: List[DecodedRecord]) -> dict:
        metadata = {
            'bank_identification_number': None,
            'creation_date': None,
            'addressee': None,
            'account': None,
            'account_holder': None,
            'balance_start': None,
            'balance_date': None,
            'start_date': None,
            'end_date': None,
            'record_counts': dict(Counter(r.kind.name for r in records)),
        }

        initial = next((r for r in records if isinstance(r, InitialRecord)), None)
        if initial:
            metadata['bank_identification_number'] = initial.bank_identification_number
            metadata['creation_date'] = initial.creation_date
            metadata['addressee'] = initial.addressee

        old_balance = next((r for r in records if isinstance(r, OldBalanceRecord)), None)
        if old_balance:
            metadata['account'] = old_balance.account_number
            metadata['account_holder'] = old_balance.account_holder_name
            metadata['balance_start'] = signed_amount(old_balance.old_balance, old_balance.balance_sign)
            metadata['balance_date'] = old_balance.balance_date

        dates = [r.booking_date for r in records if isinstance(r, TransactionRecord)]
        if dates:
            metadata['start_date'] = min(dates)
            metadata['end_date'] = max(dates)

        return metadata
