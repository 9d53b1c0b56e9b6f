# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# simlogging.py
# -----------------------------------------------------------------------------
# Purpose:
#   Configure standard Python logging for the package and expose it through
#   static methods on SimLogging.
#
# Design notes:
#   - All package loggers hang below one base logger ("equipsim"); the root
#     logger is never touched.
#   - Setting the environment variable equipsim_DISABLE_LOGGING silences the
#     package entirely (handy for long replication sweeps).
#
# Usage:
#   from equipsim.simlogging import SimLogging
#   logger = SimLogging.get_logger(__name__)
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging, os

__all__ = ["SimLogging"]

_BASE_LOGGER_NAME = __name__.split(".")[0]

_baseLogger = logging.getLogger(_BASE_LOGGER_NAME)
_baseLogger.setLevel(logging.WARNING)

_formatter = logging.Formatter("%(name)s %(levelname)s: %(message)s")
_ch = logging.StreamHandler()
_ch.setFormatter(_formatter)
_baseLogger.addHandler(_ch)

_DISABLE_LOGGING_ENV_NAME = _BASE_LOGGER_NAME + "_DISABLE_LOGGING"
if os.getenv(_DISABLE_LOGGING_ENV_NAME):
    _baseLogger.disabled = True


class SimLogging:
    """Static helpers for getting and tuning package loggers."""

    @staticmethod
    def get_logger(name: str, level: int = logging.NOTSET) -> logging.Logger:
        """
        Return a logger below the package base logger.

        Names that do not already start with the base name (e.g. a script's
        "__main__") are prefixed so every logger shares the same handler.
        """
        if name.split(".")[0] != _BASE_LOGGER_NAME:
            name = _BASE_LOGGER_NAME + "." + name
        logger = logging.getLogger(name)
        logger.setLevel(level)
        return logger

    @staticmethod
    def set_level(lvl, name: str | None = None):
        """Set the level of the named package logger (base logger if None).

        ``lvl`` may be a numeric level or a level name such as "DEBUG".
        """
        if name is None:
            name = _BASE_LOGGER_NAME
        if name.split(".")[0] != _BASE_LOGGER_NAME:
            raise ValueError(f"not a package logger: {name}")
        if isinstance(lvl, str):
            lvl = lvl.upper()
        logging.getLogger(name).setLevel(lvl)

    @staticmethod
    def get_level(name: str | None = None) -> int:
        if name is None:
            name = _BASE_LOGGER_NAME
        return logging.getLogger(name).getEffectiveLevel()
