"""
test_logging_utils.py
---------------------
Unit tests for logging_utils.py: console and rotating file handlers.
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from geomdiagrams import circle, configure_logging
from geomdiagrams.backends import TraceBackend
from geomdiagrams.logging_utils import ColorFormatter


@pytest.fixture
def clean_logger():
  name = "geomdiagrams.test_logging"
  logger = logging.getLogger(name)
  yield name
  for h in list(logger.handlers):
    logger.removeHandler(h)
    h.close()
  logger.setLevel(logging.NOTSET)


def test_console_only_returns_none(clean_logger):
  assert configure_logging(logging.DEBUG, name=clean_logger) is None
  handlers = logging.getLogger(clean_logger).handlers
  assert len(handlers) == 1
  assert isinstance(handlers[0].formatter, ColorFormatter)


def test_repeated_calls_do_not_duplicate_handlers(clean_logger):
  configure_logging(name=clean_logger)
  configure_logging(name=clean_logger)
  assert len(logging.getLogger(clean_logger).handlers) == 1


def test_file_handler_writes_log(clean_logger, tmp_path):
  path = configure_logging(logging.DEBUG, log_dir=tmp_path / "logs", name=clean_logger, run_prefix="unit")
  assert path is not None
  assert path.parent == tmp_path / "logs"
  assert path.name.startswith("unit_PID")
  logger = logging.getLogger(clean_logger)
  assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
  logger.warning("written to file")
  for h in logger.handlers:
    h.flush()
  text = path.read_text()
  assert "written to file" in text
  assert "Logging initialized" in text


def test_color_formatter_includes_name_and_message():
  record = logging.LogRecord("geomdiagrams.diagram", logging.INFO, __file__, 1, "hello %s", ("there",), None)
  out = ColorFormatter(datefmt="%H:%M:%S").format(record)
  assert "geomdiagrams.diagram: hello there" in out
  assert "INFO" in out


def test_library_debug_trace_is_logged(caplog):
  a = circle(TraceBackend, 1.0)
  with caplog.at_level(logging.DEBUG, logger="geomdiagrams"):
    a.beside((1.0, 0.0), circle(TraceBackend, 1.0))
  assert "beside" in caplog.text
