import pytest

from scalargrad.core.tape import use_tape


@pytest.fixture(autouse=True)
def tape():
    """Every test records onto its own tape."""
    with use_tape() as t:
        yield t
