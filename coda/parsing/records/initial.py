from coda.common.models import InitialRecord, RecordKind
from ..base import BaseRecordDecoder


class InitialRecordDecoder(BaseRecordDecoder):
    """
    Record 0, the header of a CODA file.

    The account holder reference is preceded by a literal "0" that the
    layout consumes as a filler, so only the ten digits after it are parsed.
    The duplicate flag is set when position 17 holds "D".
    """
    record_kind = RecordKind.INITIAL
    record_class = InitialRecord
