import pandas as pd
import pytest

import fixedcov.pipeline as pipeline
from fixedcov.exceptions import ConfigError
from fixedcov.utils.config import Config


@pytest.fixture
def no_logging_setup(monkeypatch):
    calls = []
    monkeypatch.setattr(pipeline, "setup_logging", lambda **kwargs: calls.append(kwargs))
    return calls


def test_run_pipeline(tmp_path, returns_frame, no_logging_setup):
    returns_frame.to_csv(tmp_path / "returns.csv")
    config = Config.from_dict({
        "ewma": {"lambda_percent": 94, "window": 4},
        "data": {"root_path": str(tmp_path), "returns": "returns.csv"},
        "output": {"covariances": "cov.csv"},
        "logging": {"level": "DEBUG"},
    })

    estimator = pipeline.run_pipeline(config)

    assert len(estimator.covariances_) == 5
    saved = pd.read_csv(tmp_path / "cov.csv")
    assert len(saved) == 5 * 9
    assert no_logging_setup == [{"level": 10, "log_file": None}]


def test_run_pipeline_requires_returns_file(tmp_path, no_logging_setup):
    config = Config.from_dict({"data": {"root_path": str(tmp_path)}})
    with pytest.raises(ConfigError, match="returns"):
        pipeline.run_pipeline(config)
