"""Logging setup for the autotab command line."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import logging
import sys

# chardet logs each detection attempt at DEBUG; shown only in trace mode
_NOISY_LOGGERS = ("chardet",)


def configure_logging(log_level: int, log_file: str | None = None, trace_mode: bool = False) -> logging.Logger:
    """Route autotab's detection and extraction messages to stderr.

    Parameters
    ----------
    log_level : int
        Numeric logging level, e.g. ``logging.DEBUG`` for ``--verbose``
    log_file : str, optional
        File receiving a copy of the messages
    trace_mode : bool, default False
        Add timestamps and logger names, and let chardet's debug output through

    Returns
    -------
    logging.Logger
        The configured root logger

    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    if trace_mode:
        formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", "%Y-%m-%d %H:%M:%S")
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            root_logger.warning(f"Could not create log file {log_file}: {exc}")

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(log_level if trace_mode else max(log_level, logging.WARNING))

    return root_logger
