"""Tests for CLI logging setup."""

import logging

from nomad_export.utils.logging_utils import PACKAGE_LOGGER, level_for_flags, setup_logging


def test_level_for_flags():
    assert level_for_flags(verbose=False, silent=False) == logging.INFO
    assert level_for_flags(verbose=True, silent=False) == logging.DEBUG
    assert level_for_flags(verbose=False, silent=True) is None


def test_setup_logging_writes_to_stderr(capsys):
    setup_logging(logging.INFO)
    logging.getLogger("nomad_export.exporter").info("hello from exporter")

    captured = capsys.readouterr()
    assert "hello from exporter" in captured.err
    assert "nomad_export.exporter - INFO" in captured.err
    assert captured.out == ""


def test_debug_filtered_at_info(capsys):
    setup_logging(logging.INFO)
    logging.getLogger("nomad_export.client").debug("GET /v1/jobs")
    assert "GET /v1/jobs" not in capsys.readouterr().err


def test_silent_suppresses_errors(capsys):
    setup_logging(None)
    logging.getLogger("nomad_export.cli").error("error exporting data")
    assert capsys.readouterr().err == ""


def test_repeated_setup_does_not_stack_handlers():
    setup_logging(logging.INFO)
    setup_logging(logging.DEBUG)
    logger = logging.getLogger(PACKAGE_LOGGER)
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
