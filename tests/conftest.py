import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from mongomock_motor import AsyncMongoMockClient


@pytest.fixture
def trips_collection():
    client = AsyncMongoMockClient()
    return client["test_db"]["trips"]
