"""
Fixtures built from the shared CODA sample lines.
"""
import pytest

from tests.helpers import (
    INITIAL_LINE,
    OLD_BALANCE_LINE,
    PURPOSE_LINE,
    TRAILER_LINE,
    TRANSACTION_LINE,
    put,
)


@pytest.fixture
def initial_line():
    return INITIAL_LINE


@pytest.fixture
def old_balance_line():
    return OLD_BALANCE_LINE


@pytest.fixture
def transaction_line():
    return TRANSACTION_LINE


@pytest.fixture
def purpose_line():
    return PURPOSE_LINE


@pytest.fixture
def coda_file_lines():
    """A small statement: header, old balance, one debit movement with its purpose, trailer."""
    transaction = put(TRANSACTION_LINE, 2, "0001")
    transaction = put(transaction, 31, "1")
    transaction = put(transaction, 32, "000000000012500")
    transaction = put(transaction, 62, "Invoice 2016-042")
    purpose = put(PURPOSE_LINE, 2, "0001")
    purpose = put(purpose, 10, "ACME SUPPLIES")
    purpose = put(purpose, 63, "CLIENT-REF-7")
    purpose = put(purpose, 98, "GEBABEBB")
    purpose = put(purpose, 117, "SUPP")
    return [INITIAL_LINE, OLD_BALANCE_LINE, transaction, purpose, TRAILER_LINE]
