from coda.common.models import RecordKind
from .initial import InitialRecordDecoder
from .old_balance import OldBalanceRecordDecoder
from .transaction import TransactionRecordDecoder
from .transaction_purpose import TransactionPurposeRecordDecoder

DECODERS = {
    RecordKind.INITIAL: InitialRecordDecoder,
    RecordKind.OLD_BALANCE: OldBalanceRecordDecoder,
    RecordKind.TRANSACTION: TransactionRecordDecoder,
    RecordKind.TRANSACTION_PURPOSE: TransactionPurposeRecordDecoder,
}

__all__ = [
    'DECODERS',
    'InitialRecordDecoder',
    'OldBalanceRecordDecoder',
    'TransactionRecordDecoder',
    'TransactionPurposeRecordDecoder',
]
