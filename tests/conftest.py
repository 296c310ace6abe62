import random

import pytest

from tests.helpers import FIXED_NOW


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def rng():
    return random.Random(1234)
