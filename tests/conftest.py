import pytest

from sha256crypt import Sha256Definition


@pytest.fixture
def cheap_definition() -> Sha256Definition:
    """Definition with the lowest allowed cost, to keep tests fast."""
    return Sha256Definition(rounds=1000)
