import pytest
from datetime import date

from tests.helpers import put
from coda.common.models import RecordKind, TransactionRecord
from coda.parsing.config.registry import LayoutRegistry
from coda.parsing.exceptions import DateFormatError, FieldFormatError, LayoutError
from coda.parsing.records import TransactionRecordDecoder


@pytest.fixture
def decoder():
    return TransactionRecordDecoder.from_registry(LayoutRegistry())


class TestTransactionRecordDecoder:

    def test_sample_line(self, decoder, transaction_line):
        r = decoder.decode(transaction_line)

        assert isinstance(r, TransactionRecord)
        assert r.serial_number == 3966
        assert r.detail_number == 0
        assert r.bank_reference_number == ""
        assert r.balance_sign is False
        assert r.balance_amount == 160483785
        assert r.balance_date == date(2000, 11, 5)
        assert r.transaction_code == "00000000"
        assert r.reference_type == 0
        assert r.free_reference == ""
        assert r.booking_date == date(2016, 3, 21)
        assert r.bank_statement_serial_number == 0
        assert r.globalisation_code == 0
        assert r.transaction_sequence is False
        assert r.information_sequence is False

    def test_zero_balance_date_is_absent(self, decoder, transaction_line):
        r = decoder.decode(put(transaction_line, 47, "000000"))
        assert r.balance_date is None

    def test_invalid_balance_date_fails(self, decoder, transaction_line):
        with pytest.raises(DateFormatError) as exc:
            decoder.decode(put(transaction_line, 47, "310211"))
        assert exc.value.field_name == "balance_date"
        assert exc.value.record_kind is RecordKind.TRANSACTION

    def test_zero_booking_date_fails(self, decoder, transaction_line):
        with pytest.raises(DateFormatError) as exc:
            decoder.decode(put(transaction_line, 115, "000000"))
        assert exc.value.field_name == "booking_date"

    def test_debit_and_sequence_flags(self, decoder, transaction_line):
        line = put(transaction_line, 31, "1")
        line = put(line, 125, "1 1")
        r = decoder.decode(line)
        assert r.balance_sign is True
        assert r.transaction_sequence is True
        assert r.information_sequence is True

    def test_transaction_code_is_not_trimmed(self, decoder, transaction_line):
        r = decoder.decode(put(transaction_line, 53, "10150000"))
        assert r.transaction_code == "10150000"

    def test_blank_serial_number_fails(self, decoder, transaction_line):
        with pytest.raises(FieldFormatError) as exc:
            decoder.decode(put(transaction_line, 2, "    "))
        assert exc.value.field_name == "serial_number"

    def test_first_failing_field_is_reported(self, decoder, transaction_line):
        line = put(transaction_line, 32, "ABC000000000000")
        line = put(line, 115, "999999")
        with pytest.raises(FieldFormatError) as exc:
            decoder.decode(line)
        assert exc.value.field_name == "balance_amount"

    @pytest.mark.parametrize("length", [0, 2, 50, 127])
    def test_short_lines(self, decoder, transaction_line, length):
        with pytest.raises(LayoutError) as exc:
            decoder.decode(transaction_line[:length])
        assert exc.value.record_kind is RecordKind.TRANSACTION
