from dataclasses import dataclass, asdict
from datetime import date
from enum import Enum
from typing import ClassVar, Optional, Union


class RecordKind(Enum):
    """
    Kind of a CODA line, identified by its leading marker.
    """
    INITIAL = "0"
    OLD_BALANCE = "1"
    TRANSACTION = "21"
    TRANSACTION_PURPOSE = "22"
    UNRECOGNIZED = ""


class _Record:
    kind: ClassVar[RecordKind]

    def to_dict(self):
        data = asdict(self)
        data['kind'] = self.kind.name
        return data


@dataclass(frozen=True)
class InitialRecord(_Record):
    """
    Header line (record 0) of a CODA file.
    """
    kind: ClassVar[RecordKind] = RecordKind.INITIAL

    creation_date: date
    bank_identification_number: Optional[int]
    is_duplicate: bool
    reference: str
    addressee: str
    bic: str
    account_holder_reference: Optional[int]
    free: str
    transaction_reference: str
    related_reference: str
    version_code: Optional[int]


@dataclass(frozen=True)
class OldBalanceRecord(_Record):
    """
    Opening balance of the statement (record 1).
    Amounts are in minor units (three decimals in CODA).
    """
    kind: ClassVar[RecordKind] = RecordKind.OLD_BALANCE

    account_structure: Optional[int]
    serial_number: Optional[int]
    account_number: str
    balance_sign: bool  # True means debit / False credit
    old_balance: Optional[int]
    balance_date: date
    account_holder_name: str
    account_description: str
    bank_statement_serial_number: Optional[int]


@dataclass(frozen=True)
class TransactionRecord(_Record):
    """
    Movement line (record 21).
    balance_date is None when the bank sends the all-zero date.
    """
    kind: ClassVar[RecordKind] = RecordKind.TRANSACTION

    serial_number: int
    detail_number: int
    bank_reference_number: str
    balance_sign: bool  # True means debit / False credit
    balance_amount: int
    balance_date: Optional[date]
    transaction_code: str
    reference_type: Optional[int]
    free_reference: str
    booking_date: date
    bank_statement_serial_number: Optional[int]
    globalisation_code: Optional[int]
    transaction_sequence: bool
    information_sequence: bool


@dataclass(frozen=True)
class TransactionPurposeRecord(_Record):
    """
    Continuation of a movement (record 22): counterparty and purpose codes.
    """
    kind: ClassVar[RecordKind] = RecordKind.TRANSACTION_PURPOSE

    serial_number: int
    detail_number: int
    bank_statement_text: str
    client_reference: str
    bic: str
    transaction_type: Optional[int]
    reason_return_code: str
    purpose_category: str
    purpose: str
    transaction_sequence: bool
    information_sequence: bool


DecodedRecord = Union[InitialRecord, OldBalanceRecord, TransactionRecord, TransactionPurposeRecord]
