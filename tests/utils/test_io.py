import pandas as pd

from fixedcov.utils.io import DataLoader


def test_returns_round_trip(tmp_path, returns_frame):
    loader = DataLoader(base_path=str(tmp_path))
    loader.save_csv(returns_frame, "panel/returns.csv")
    loaded = loader.load_returns("panel/returns.csv")
    pd.testing.assert_frame_equal(loaded, returns_frame, check_freq=False)


def test_save_covariance_series(tmp_path):
    loader = DataLoader(base_path=str(tmp_path))
    cov = pd.DataFrame([[1.0, 0.5], [0.5, 2.0]], index=["a", "b"], columns=["a", "b"])
    series = {"2024-01-03": cov, "2024-01-04": cov * 2}

    table = loader.save_covariance_series(series, "out/cov.csv")

    assert list(table.columns) == ["date", "asset_i", "asset_j", "covariance"]
    assert len(table) == 8
    saved = pd.read_csv(tmp_path / "out" / "cov.csv")
    assert saved["covariance"].tolist() == [1.0, 0.5, 0.5, 2.0, 2.0, 1.0, 1.0, 4.0]


def test_pickle(tmp_path):
    loader = DataLoader(base_path=str(tmp_path))
    loader.save_pickle({"window": 3}, "state.pkl")
    assert loader.load_pickle("state.pkl") == {"window": 3}
