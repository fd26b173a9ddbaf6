"""
Tests for CodaParser (file reading, error collection, DataFrame output)
"""
import io
import pytest
from datetime import date

from tests.helpers import INITIAL_LINE, TRANSACTION_LINE, put
from coda.common.models import OldBalanceRecord, TransactionRecord
from coda.parsing.exceptions import DecodeError, FieldFormatError
from coda.parsing.facade import CodaParser, signed_amount


@pytest.fixture
def parser():
    return CodaParser()


@pytest.fixture
def coda_bytes(coda_file_lines):
    return ("\r\n".join(coda_file_lines) + "\r\n").encode("cp1252")


class TestIterLines:

    def test_path(self, parser, tmp_path, coda_bytes):
        path = tmp_path / "statement.cod"
        path.write_bytes(coda_bytes)
        lines = list(parser.iter_lines(str(path)))
        assert len(lines) == 5
        assert lines[0] == (1, INITIAL_LINE)

    def test_bytes_and_buffers(self, parser, coda_bytes):
        from_bytes = list(parser.iter_lines(coda_bytes))
        from_binary = list(parser.iter_lines(io.BytesIO(coda_bytes)))
        from_text = list(parser.iter_lines(io.StringIO(coda_bytes.decode("cp1252"))))
        assert from_bytes == from_binary == from_text

    def test_cp1252_text_keeps_offsets(self, parser):
        line = put(INITIAL_LINE, 34, "Société Générale")
        (_, decoded), = parser.iter_lines(line.encode("cp1252"))
        assert len(decoded) == 128
        assert decoded == line


class TestParseRecords:

    def test_skips_trailer(self, parser, coda_bytes):
        result = parser.parse_records(coda_bytes)
        assert len(result.records) == 4
        assert result.skipped == 1
        assert result.is_valid

    def test_of_type(self, parser, coda_bytes):
        result = parser.parse_records(coda_bytes)
        assert len(result.of_type(TransactionRecord)) == 1
        assert len(result.of_type(OldBalanceRecord)) == 1

    def test_strict_raises_with_line_number(self, parser, coda_file_lines):
        coda_file_lines[2] = put(coda_file_lines[2], 32, "00000000001250X")
        with pytest.raises(FieldFormatError) as exc:
            parser.parse_records("\n".join(coda_file_lines).encode())
        assert exc.value.line_no == 3
        assert exc.value.field_name == "balance_amount"
        assert "line 3" in str(exc.value)

    def test_keep_going_collects_errors(self, parser, coda_file_lines):
        coda_file_lines[2] = coda_file_lines[2][:60]
        result = parser.parse_records("\n".join(coda_file_lines).encode(), strict=False)
        assert len(result.errors) == 1
        assert isinstance(result.errors[0], DecodeError)
        assert result.errors[0].line_no == 3
        assert len(result.records) == 3
        assert not result.is_valid


class TestParse:

    def test_dataframe(self, parser, coda_bytes):
        df, metadata = parser.parse(coda_bytes)

        assert len(df) == 1
        row = df.iloc[0]
        assert row['date'] == date(2016, 3, 21)
        assert row['value_date'] == date(2000, 11, 5)
        assert row['amount'] == pytest.approx(-12.5)
        assert row['description'] == "Invoice 2016-042 ACME SUPPLIES"
        assert row['client_reference'] == "CLIENT-REF-7"
        assert row['counterparty_bic'] == "GEBABEBB"
        assert row['purpose_category'] == "SUPP"
        assert row['source'] == 'Bank'

    def test_metadata(self, parser, coda_bytes):
        _, metadata = parser.parse(coda_bytes)

        assert metadata['bank_identification_number'] == 126
        assert metadata['creation_date'] == date(2009, 2, 13)
        assert metadata['addressee'] == "Michael Campbell"
        assert metadata['balance_start'] == pytest.approx(550584.847)
        assert metadata['balance_date'] == date(2014, 11, 24)
        assert metadata['start_date'] == metadata['end_date'] == date(2016, 3, 21)
        assert metadata['record_counts'] == {
            'INITIAL': 1, 'OLD_BALANCE': 1, 'TRANSACTION': 1, 'TRANSACTION_PURPOSE': 1,
        }

    def test_transaction_without_purpose(self, parser):
        df, _ = parser.parse(TRANSACTION_LINE.encode())
        assert len(df) == 1
        assert df.iloc[0]['client_reference'] is None
        assert df.iloc[0]['amount'] == pytest.approx(160483.785)

    def test_empty_file(self, parser):
        df, metadata = parser.parse(b"")
        assert df.empty
        assert list(df.columns)[:3] == ['date', 'value_date', 'amount']
        assert metadata['record_counts'] == {}


class TestSignedAmount:

    def test_credit(self):
        assert signed_amount(12500, False) == pytest.approx(12.5)

    def test_debit(self):
        assert signed_amount(12500, True) == pytest.approx(-12.5)

    def test_absent(self):
        assert signed_amount(None, True) is None
