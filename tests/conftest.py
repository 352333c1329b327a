import os
import sys
import uuid

import pytest
from fastapi.testclient import TestClient

# Ensure the project root is on sys.path so tests can import price_registry
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from price_registry.app import create_app  # noqa: E402
from price_registry.store import PriceTable  # noqa: E402

KNOWN_ID = uuid.UUID("6f1c2b9e-3d4a-4c57-9a8e-0b1d2c3e4f50")


class SequentialIds:
    """Deterministic id factory: hands out uuid(int=1), uuid(int=2), ..."""

    def __init__(self):
        self.issued = []

    def __call__(self):
        value = uuid.UUID(int=len(self.issued) + 1)
        self.issued.append(value)
        return value


@pytest.fixture
def known_id():
    return KNOWN_ID


@pytest.fixture
def table():
    # one record priced 355, like a freshly seeded registry
    return PriceTable({KNOWN_ID: 355})


@pytest.fixture
def client(table):
    with TestClient(create_app(table)) as c:
        yield c


@pytest.fixture
def empty_client():
    with TestClient(create_app()) as c:
        yield c


@pytest.fixture
def ids():
    return SequentialIds()
