import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from fixedcov.numeric import Tensor


@pytest.fixture
def rng():
    return np.random.default_rng(20240601)


@pytest.fixture
def returns_frame(rng):
    dates = pd.date_range("2024-01-01", periods=8, freq="B")
    return pd.DataFrame(rng.uniform(-1.0, 1.0, size=(8, 3)),
                        index=dates, columns=["AAA", "BBB", "CCC"])


@pytest.fixture
def small_block():
    # Exactly representable in Q16.16
    return Tensor.from_unscaled((3, 2), [1, 2, 3, 6, 5, 7])
