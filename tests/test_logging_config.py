import logging

from time_dilation_clock.logging_config import PACKAGE_LOGGER, setup_logging


def test_repeated_setup_does_not_stack_handlers():
    setup_logging()
    logger = setup_logging(level=logging.DEBUG)

    assert logger.name == PACKAGE_LOGGER
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_log_file_receives_package_records(tmp_path):
    path = tmp_path / "clock.log"
    logger = setup_logging(log_file=str(path))
    logging.getLogger("time_dilation_clock.driver").info("Run ended after 3 frames (quit)")
    for handler in logger.handlers:
        handler.flush()

    assert len(logger.handlers) == 2
    text = path.read_text(encoding="utf-8")
    assert "time_dilation_clock.driver - INFO - Run ended after 3 frames (quit)" in text

    setup_logging()
