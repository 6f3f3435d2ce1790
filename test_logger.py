"""
Tests for the package logging setup.
"""

import logging

from boilerpipe.logger import get_module_logger, setup_logger


def test_module_loggers_are_package_children():
    log = get_module_logger("content_handler")

    assert log.name == "boilerpipe.content_handler"
    assert log.parent is logging.getLogger("boilerpipe")


def test_setup_is_idempotent_and_updates_level():
    package_logger = logging.getLogger("boilerpipe")
    handlers_before = list(package_logger.handlers)

    try:
        setup_logger(level=logging.DEBUG)

        assert package_logger.handlers == handlers_before
        assert package_logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in package_logger.handlers)
    finally:
        setup_logger(level=logging.INFO)


def test_log_file_receives_records(tmp_path):
    log_file = tmp_path / "segmenter.log"
    log = setup_logger("boilerpipe_test_file", level=logging.INFO, log_file=str(log_file))

    try:
        log.info("segmented 3 blocks")
        for handler in log.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "boilerpipe_test_file - INFO - segmented 3 blocks" in content
    finally:
        for handler in list(log.handlers):
            handler.close()
            log.removeHandler(handler)
