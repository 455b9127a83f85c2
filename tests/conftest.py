import pytest

from app.ledger import LedgerWriter
from fakes import FakeSheetsBackend


@pytest.fixture
def backend():
    return FakeSheetsBackend()


@pytest.fixture
def writer(backend):
    return LedgerWriter(backend)
