import os

# Must be set before anything under ballotbox is imported.
os.environ["DATABASE_URL"] = "sqlite:///./test_ballotbox.db"
os.environ["ELECTION_AUTHORITY"] = "authority@example.org"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest

from ballotbox.domain.clock import FixedClock


@pytest.fixture
def clock():
    return FixedClock(1_700_000_000)
