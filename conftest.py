import pytest

from scalar_aad.core.tape import use_tape


@pytest.fixture(autouse=True)
def tape():
    """Every test builds its graph on a fresh tape."""
    with use_tape() as t:
        yield t
