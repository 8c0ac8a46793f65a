import logging

from boundarylesson.logging_config import setup_logging


def test_repeated_setup_keeps_one_console_handler():
    setup_logging(logging.INFO)
    logger = setup_logging(logging.WARNING)
    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.WARNING
    assert logger.level == logging.WARNING


def test_log_file_records_debug(tmp_path):
    path = tmp_path / "lesson.log"
    logger = setup_logging(logging.INFO, log_file=str(path))
    logging.getLogger("boundarylesson.controller.lesson").debug("dataset swapped")

    for handler in logger.handlers:
        handler.flush()
    assert "dataset swapped" in path.read_text(encoding="utf-8")

    # Console stays at the requested level
    console = [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]
    assert console[0].level == logging.INFO

    setup_logging(logging.INFO)
