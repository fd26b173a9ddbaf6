from coda.common.models import OldBalanceRecord, RecordKind
from ..base import BaseRecordDecoder


class OldBalanceRecordDecoder(BaseRecordDecoder):
    """
    Record 1, the opening balance.

    balance_sign is True only for "1" (debit); a blank sign is a credit.
    """
    record_kind = RecordKind.OLD_BALANCE
    record_class = OldBalanceRecord
