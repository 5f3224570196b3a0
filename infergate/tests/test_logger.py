import logging
from logging.handlers import RotatingFileHandler

from infergate.util.logger import _file_handler, _resolve_level, logger


def test_resolve_level_accepts_names_case_insensitively():
    assert _resolve_level("debug") == logging.DEBUG
    assert _resolve_level(" Warning ") == logging.WARNING
    assert _resolve_level("") == logging.INFO


def test_resolve_level_falls_back_to_info_for_unknown_names():
    assert _resolve_level("chatty") == logging.INFO


def test_file_handler_disabled_for_empty_path():
    formatter = logging.Formatter("%(message)s")
    assert _file_handler("", logging.INFO, formatter) is None
    assert _file_handler("   ", logging.INFO, formatter) is None


def test_file_handler_rotates_under_given_path(tmp_path):
    target = tmp_path / "nested" / "gateway.log"
    handler = _file_handler(str(target), logging.DEBUG, logging.Formatter("%(message)s"))
    try:
        assert isinstance(handler, RotatingFileHandler)
        assert handler.level == logging.DEBUG
        assert target.parent.is_dir()
    finally:
        handler.close()


def test_project_logger_does_not_propagate():
    assert logger.name == "infergate"
    assert logger.propagate is False
    assert logger.handlers
