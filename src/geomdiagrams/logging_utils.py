"""
logging_utils.py
----------------

Console and file logging setup for applications built on geomdiagrams.

The library modules only create loggers (`logging.getLogger(__name__)`); they
never attach handlers. Call `configure_logging()` from the application or a
debugging session to see the algebra's DEBUG trace.
"""

from __future__ import annotations

__all__ = ["configure_logging", "ColorFormatter"]

import os
import time
import logging
from typing import Optional, Union
from logging.handlers import RotatingFileHandler
from pathlib import Path

from colorama import Fore, Style, init as colorama_init

PathLike = Union[str, os.PathLike]

PACKAGE_LOGGER = "geomdiagrams"


class ColorFormatter(logging.Formatter):
    """Colorized console formatter."""
    COLORS = {
        "DEBUG":    Fore.CYAN,
        "INFO":     Fore.GREEN,
        "WARNING":  Fore.YELLOW,
        "ERROR":    Fore.RED,
        "CRITICAL": Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        reset = Style.RESET_ALL
        level_str = f"{record.levelname:<5s}"
        return (
            f"[{self.formatTime(record, self.datefmt)}] "
            f"[{color}{level_str}{reset}] "
            f"{record.name}: {record.getMessage()}"
        )


def configure_logging(level: int = logging.INFO,
                      log_dir: Optional[PathLike] = None,
                      name: str = PACKAGE_LOGGER,
                      run_prefix: str = "diagrams") -> Optional[Path]:
    """Configure colorized console + optional rotating file logging.

    Existing handlers on the target logger are replaced, so calling this
    repeatedly does not duplicate output.

    Args:
        level:      Logging level for the logger and its handlers.
        log_dir:    Directory for the rotating log file. No file is written
                    when None.
        name:       Logger to configure. Defaults to the package logger.
        run_prefix: File name prefix of the log file.

    Returns:
        Path of the log file, or None when logging to the console only.
    """
    colorama_init(strip=False, convert=True)
    datefmt = "%H:%M:%S"

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(ColorFormatter(datefmt=datefmt))
    logger.addHandler(ch)

    log_path = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        ts = time.strftime("%Y-%m-%d_%H%M%S")
        log_path = log_dir / f"{run_prefix}_PID{os.getpid()}_{ts}.log"

        mono_fmt = "[%(asctime)s] [%(process)5d] [%(levelname)-5s] %(name)s: %(message)s"
        fh = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=5)
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(mono_fmt, datefmt))
        logger.addHandler(fh)

    logger.info(f"Logging initialized - PID {os.getpid()}; file {log_path}")
    return log_path
