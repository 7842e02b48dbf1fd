"""Tests for gramcat.logging."""

from __future__ import annotations

import logging

from gramcat.logging import Verbosity, WrappingFormatter, configure_logging, get_logger


def _emit(verbosity: Verbosity, capsys) -> set[str]:  # type: ignore[no-untyped-def]
    configure_logging(verbosity=verbosity)
    logger = get_logger("test")
    logger.debug("debug message")
    logger.warning("warning message")
    logger.error("error message")
    return {line for line in capsys.readouterr().err.splitlines() if line}


def test_verbosity_levels_are_nested(capsys) -> None:  # type: ignore[no-untyped-def]
    debug = _emit(Verbosity.DEBUG, capsys)
    warning = _emit(Verbosity.WARNING, capsys)
    error = _emit(Verbosity.ERROR, capsys)
    silent = _emit(Verbosity.SILENT, capsys)

    assert debug > warning > error > silent
    assert silent == set()
    assert error == {"ERROR: error message"}
    assert "DEBUG: debug message" in debug


def test_configure_logging_does_not_duplicate_handlers(capsys) -> None:  # type: ignore[no-untyped-def]
    configure_logging(verbosity=Verbosity.WARNING)
    logger = configure_logging(verbosity=Verbosity.WARNING)
    assert len(logger.handlers) == 1
    get_logger("test").warning("once")
    assert capsys.readouterr().err.count("WARNING: once") == 1


def test_wrapping_formatter_folds_long_messages() -> None:
    formatter = WrappingFormatter(width=30)
    logger = get_logger("wrap")
    record = logger.makeRecord(
        logger.name, 30, __file__, 1, "word " * 20, None, None
    )
    lines = formatter.format(record).splitlines()

    assert lines[0].startswith("WARNING: word")
    assert len(lines) > 1
    assert all(len(line) <= 30 for line in lines)
    assert all(line.startswith("  ") for line in lines[1:])


def test_configure_logging_writes_only_to_stderr() -> None:
    logger = configure_logging(verbosity=Verbosity.DEBUG)

    assert [type(handler) for handler in logger.handlers] == [logging.StreamHandler]
    assert logger.propagate is False
