"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add the api/ source root to the Python path
api_root = Path(__file__).parent.parent / "api"
sys.path.insert(0, str(api_root))

from tests.fakes import FakeSchemaDb, RecordingDb  # noqa: E402


@pytest.fixture
def schema_db():
    return FakeSchemaDb()


@pytest.fixture
def recording_db():
    return RecordingDb()
