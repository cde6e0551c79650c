import logging

import pytest

import fixedcov.risk.rolling as rolling
from fixedcov.exceptions import EmptyOrInvalidWindowError, InvalidWindowError, ShapeError
from fixedcov.numeric import Tensor
from fixedcov.risk.covariance import weighted_covariance
from fixedcov.risk.rolling import rolling_covariance, window_slices
from fixedcov.risk.weights import exponential_weights


@pytest.fixture
def data(rng):
    return Tensor.from_numpy(rng.uniform(-1.0, 1.0, size=(5, 2)))


def test_window_count_and_shapes(data):
    covariances = rolling_covariance(data, 94, 3)
    assert len(covariances) == 3
    assert all(cov.shape == (2, 2) for cov in covariances)


def test_windows_in_start_order(data):
    weights = exponential_weights(94, 3)
    covariances = rolling_covariance(data, 94, 3, centering="column")
    for start, cov in enumerate(covariances):
        rows = data.to_numpy()[start:start + 3]
        block = Tensor.from_numpy(rows)
        assert cov == weighted_covariance(block, weights, centering="column")


def test_window_slices_copy_rows(data):
    slices = list(window_slices(data, 4))
    assert [start for start, _ in slices] == [0, 1]
    start, block = slices[1]
    assert block.shape == (4, 2)
    assert block.data == data.data[2:10]


def test_full_width_window(data):
    assert len(rolling_covariance(data, 94, 5)) == 1


@pytest.mark.parametrize("window", [6, 0, -1])
def test_invalid_window(data, window):
    with pytest.raises(InvalidWindowError):
        rolling_covariance(data, 94, window)


def test_error_alias():
    assert EmptyOrInvalidWindowError is InvalidWindowError


def test_data_must_be_2d():
    with pytest.raises(ShapeError):
        rolling_covariance(Tensor.zeros((4,)), 94, 2)


def test_weights_built_once(data, monkeypatch):
    calls = []
    real_weights = rolling.exponential_weights

    def counting(*args, **kwargs):
        calls.append(args)
        return real_weights(*args, **kwargs)

    monkeypatch.setattr(rolling, "exponential_weights", counting)
    rolling_covariance(data, 94, 2)
    assert len(calls) == 1


def test_observer_sees_each_window(data):
    seen = []
    covariances = rolling_covariance(data, 94, 3, observer=lambda start, cov: seen.append((start, cov)))
    assert [start for start, _ in seen] == [0, 1, 2]
    assert [cov for _, cov in seen] == covariances


def test_logs_window_count(data, caplog):
    with caplog.at_level(logging.DEBUG, logger="fixedcov.risk.rolling"):
        rolling_covariance(data, 94, 3)
    assert "Computed 3 covariance matrices" in caplog.text
