from coda.common.models import RecordKind, TransactionPurposeRecord
from ..base import BaseRecordDecoder


class TransactionPurposeRecordDecoder(BaseRecordDecoder):
    """
    Record 22, continuation of a movement.

    transaction_type is blank or one of 1-5.
    """
    record_kind = RecordKind.TRANSACTION_PURPOSE
    record_class = TransactionPurposeRecord
