import logging
from unittest.mock import patch

from student_registration.core import logger as logger_module


def test_get_logger_attaches_single_stdout_handler():
    log = logger_module.get_logger('tests.single_handler')
    again = logger_module.get_logger('tests.single_handler')

    assert log is again
    assert len(log.handlers) == 1
    assert log.handlers[0].formatter._fmt == logger_module.LOG_FORMAT
    assert log.propagate is False


def test_level_comes_from_environment():
    with patch.dict('os.environ', {'LOG_LEVEL': 'warning'}):
        log = logger_module.get_logger('tests.level_from_env')
    assert log.level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    with patch.dict('os.environ', {'LOG_LEVEL': 'chatty'}):
        log = logger_module.get_logger('tests.level_unknown')
    assert log.level == logging.INFO
