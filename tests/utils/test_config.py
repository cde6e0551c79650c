import logging

import pytest

from fixedcov.exceptions import ConfigError
from fixedcov.numeric import FixedFormat
from fixedcov.utils.config import Config


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "ewma:\n"
        "  lambda_percent: 97\n"
        "  window: ${FIXEDCOV_WINDOW}\n"
        "data:\n"
        "  root_path: /srv/data\n"
        "  returns: returns.csv\n"
        "logging:\n"
        "  level: debug\n"
    )
    return path


def test_load_with_env_substitution(config_file, monkeypatch):
    monkeypatch.setenv("FIXEDCOV_WINDOW", "60")
    config = Config(str(config_file))
    assert config.get("ewma.lambda_percent") == 97
    assert config.get_int("ewma.window") == 60
    assert config.get_data_path("returns").endswith("returns.csv")
    assert config.log_level == logging.DEBUG


def test_defaults_and_missing_keys(config_file):
    config = Config(str(config_file))
    assert config.get("ewma.centering") == "reference"
    assert config.get("fixed_point.fractional_bits") == 16
    assert config.get("output.covariances") is None
    assert config.get("nope.nothing", "fallback") == "fallback"
    with pytest.raises(ConfigError):
        config.get_data_path("prices")


def test_unresolved_env_var_is_invalid_int(config_file, monkeypatch):
    monkeypatch.delenv("FIXEDCOV_WINDOW", raising=False)
    config = Config(str(config_file))
    with pytest.raises(ConfigError):
        config.get_int("ewma.window")


def test_finds_config_in_working_directory(config_file, monkeypatch):
    monkeypatch.chdir(config_file.parent)
    assert Config().get("ewma.lambda_percent") == 97


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config(str(tmp_path / "absent.yaml"))


def test_fixed_format():
    config = Config.from_dict({"fixed_point": {"integer_bits": 24, "fractional_bits": 8}})
    assert config.fixed_format == FixedFormat(24, 8)
    with pytest.raises(ConfigError):
        Config.from_dict({"fixed_point": {"integer_bits": 0}}).fixed_format
    with pytest.raises(ConfigError):
        Config.from_dict({"fixed_point": {"integer_bits": 1.5}}).fixed_format


def test_log_level():
    assert Config.from_dict({"logging": {"level": "WARNING"}}).log_level == logging.WARNING
    assert Config.from_dict({"logging": {"level": 10}}).log_level == 10
    with pytest.raises(ConfigError):
        Config.from_dict({"logging": {"level": "chatty"}}).log_level
