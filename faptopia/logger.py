""" This module contains custom logging classes for faptopia. """

import logging
from copy import copy
from datetime import datetime
from pathlib import Path

from faptopia.faptopia import Faptopia


class FaptopiaFormatter(logging.Formatter):
    """ Custom formatter for FaptopiaLogger """
    _COLORS = {
        logging.DEBUG: "\x1b[34m",  # Blue
        logging.INFO: "\x1b[32m",  # Green
        logging.WARNING: "\x1b[33m",  # Yellow
        logging.ERROR: "\x1b[31m",  # Red
        logging.CRITICAL: "\x1b[31m"  # Red
    }
    _RESET = "\x1b[0m"
    _FORMAT = '%(asctime)s [OK: %(found)d][ERR: %(failed)d][%(levelname)s]: %(message)s'

    _use_color: bool

    def __init__(self, use_color: bool = True):
        super().__init__(self._FORMAT)
        self._use_color = use_color

    def format(self, record: logging.LogRecord):
        record_copy = copy(record)
        if self._use_color:
            color = self._COLORS.get(record.levelno)
            record_copy.levelname = f"{color}{record.levelname}{self._RESET}"
        return super().format(record_copy)


class FaptopiaLogger(logging.Logger):
    """ Custom logger for faptopia """
    _faptopia: Faptopia | None = None

    def __init__(self, level=logging.INFO, log_dir: Path | None = Path("logs")):
        super().__init__("FaptopiaLogger", level)

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(FaptopiaFormatter())
        self.addHandler(console_handler)

        if log_dir is None:
            return

        log_dir.mkdir(parents=True, exist_ok=True)

        # File handler
        log_filename = log_dir / f"{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        file_handler = logging.FileHandler(log_filename, encoding="utf-8")
        file_handler.setFormatter(FaptopiaFormatter(use_color=False))
        file_handler.setLevel(logging.DEBUG)
        self.addHandler(file_handler)

    def set_faptopia(self, faptopia: Faptopia):
        """ Set the Faptopia instance to get the counters from """
        self._faptopia = faptopia

    def close(self):
        """ Flushes and closes all handlers """
        for handler in list(self.handlers):
            handler.close()
            self.removeHandler(handler)

    def _get_extra(self):
        if self._faptopia is None:
            return {
                "found": 0,
                "failed": 0
            }

        return {
            "found": self._faptopia.found_items(),
            "failed": self._faptopia.failed_items()
        }

    def _log_with_counters(self, level: int, msg, *args, **kwargs):
        super().log(level, msg, *args, extra=self._get_extra(), **kwargs)

    def critical(self, msg, *args, **kwargs):
        self._log_with_counters(logging.CRITICAL, msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        self._log_with_counters(logging.ERROR, msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        self._log_with_counters(logging.WARNING, msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        self._log_with_counters(logging.INFO, msg, *args, **kwargs)

    def debug(self, msg, *args, **kwargs):
        self._log_with_counters(logging.DEBUG, msg, *args, **kwargs)
