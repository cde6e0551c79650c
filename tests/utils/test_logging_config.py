import logging

import pytest

from fixedcov.utils.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_writes_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "run.log"
    setup_logging(level=logging.INFO, log_file=str(log_file))

    logging.getLogger("fixedcov.test").info("hello from the test")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert restore_root_logger.level == logging.INFO
    assert "[INFO] fixedcov.test: hello from the test" in log_file.read_text()
