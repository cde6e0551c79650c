import numpy as np
import pytest

from fixedcov.exceptions import DimensionMismatchError, FixedPointZeroDivisionError, ShapeError
from fixedcov.numeric import Tensor
from fixedcov.risk.covariance import weighted_covariance, weighted_mean
from fixedcov.risk.weights import exponential_weights


def ones(n: int) -> Tensor:
    return Tensor.from_unscaled((n,), [1] * n)


def reference_numpy(block: np.ndarray, w: np.ndarray) -> np.ndarray:
    n = block.shape[1]
    total = w.sum()
    mean = w @ block / total
    flat = (np.diag(w) @ block).ravel()
    centered = np.array([[flat[col] - mean[row] for col in range(n)] for row in range(n)])
    return centered.T @ centered / (total - 1)


def column_numpy(block: np.ndarray, w: np.ndarray) -> np.ndarray:
    mean = w @ block / w.sum()
    centered = block - mean
    return centered.T @ np.diag(w) @ centered / (w.sum() - 1)


def test_weighted_mean(small_block):
    mean, total = weighted_mean(small_block, ones(3))
    assert total == 3
    assert mean.to_numpy().tolist() == [3.0, 5.0]


def test_equal_weights_column_centering_is_sample_covariance(small_block):
    cov = weighted_covariance(small_block, ones(3), centering="column")
    assert cov == Tensor.from_unscaled((2, 2), [4, 5, 5, 7])
    np.testing.assert_allclose(cov.to_numpy(), np.cov(small_block.to_numpy(), rowvar=False))


def test_reference_centering_exact_values(small_block):
    cov = weighted_covariance(small_block, ones(3))
    assert cov == Tensor.from_unscaled((2, 2), [10, 7, 7, 5])


@pytest.mark.parametrize("centering, oracle", [
    ("reference", reference_numpy),
    ("column", column_numpy),
])
def test_matches_float_oracle(rng, centering, oracle):
    values = rng.uniform(-1.0, 1.0, size=(10, 3))
    block = Tensor.from_numpy(values)
    weights = exponential_weights(94, 10)

    cov = weighted_covariance(block, weights, centering=centering)

    assert cov.shape == (3, 3)
    expected = oracle(block.to_numpy(), weights.to_numpy())
    np.testing.assert_allclose(cov.to_numpy(), expected, atol=1e-2)


def test_column_centering_is_nearly_symmetric(rng):
    block = Tensor.from_numpy(rng.uniform(-1.0, 1.0, size=(6, 4)))
    cov = weighted_covariance(block, exponential_weights(90, 6), centering="column").to_numpy()
    np.testing.assert_allclose(cov, cov.T, atol=1e-3)


def test_identical_inputs_give_identical_outputs(rng):
    block = Tensor.from_numpy(rng.uniform(-1.0, 1.0, size=(5, 2)))
    weights = exponential_weights(94, 5)
    before = block.raw_values()

    first = weighted_covariance(block, weights)
    second = weighted_covariance(block, weights)

    assert first == second
    assert first.raw_values() == second.raw_values()
    assert block.raw_values() == before


def test_length_mismatch(small_block):
    with pytest.raises(DimensionMismatchError, match="Data/weight length mismatch"):
        weighted_covariance(small_block, ones(2))


def test_rank_checks(small_block):
    with pytest.raises(ShapeError):
        weighted_covariance(small_block.reshape((6,)), ones(6))
    with pytest.raises(ShapeError):
        weighted_covariance(small_block, ones(3).reshape((3, 1)))
    with pytest.raises(ShapeError):
        weighted_covariance(Tensor.zeros((0, 2)), Tensor.zeros((0,)))


def test_unit_total_weight_has_zero_denominator():
    block = Tensor.from_unscaled((2, 1), [1, 2])
    weights = Tensor.from_unscaled((2,), [1, 0])
    with pytest.raises(FixedPointZeroDivisionError):
        weighted_covariance(block, weights)


def test_unknown_centering(small_block):
    with pytest.raises(ValueError):
        weighted_covariance(small_block, ones(3), centering="row")
