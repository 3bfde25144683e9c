import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")

EXAMPLE_INPUT = """\
[.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}
[...#.] (0,2,3,4) (2,3) (0,4) (0,1,2) (1,2,3,4) {7,5,12,7,2}
[.###.#] (0,1,2,3,4) (0,3,4) (0,1,2,4,5) (1,2) {10,11,11,5,10,5}
"""


@pytest.fixture
def fx_rng():
    return np.random.default_rng(20251210)


@pytest.fixture
def example_input():
    return EXAMPLE_INPUT
