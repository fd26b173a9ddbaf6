from coda.common.models import RecordKind, TransactionRecord
from ..base import BaseRecordDecoder


class TransactionRecordDecoder(BaseRecordDecoder):
    """
    Record 21, one movement.

    A balance date of "000000" is decoded as None; any other value must be
    a valid ddmmyy date.
    """
    record_kind = RecordKind.TRANSACTION
    record_class = TransactionRecord
