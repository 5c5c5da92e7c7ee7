"""
debug.py - Logging for the gravity-flip engine

All engine modules log through the `debug` singleton, tagging each message
with a component name (`game`, `gravity`, `search`, `env`, `cli`). The bot
mutes `game` and `gravity` while it searches, so the moves it tries on
copied games do not flood the log.
"""

import logging
import sys
import time
from contextlib import contextmanager
from enum import Enum
from typing import Dict, Iterator, Optional


class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


# logging has no TRACE level, so TRACE messages go out as DEBUG
_LOGGING_LEVELS = {
    DebugLevel.NONE: logging.CRITICAL + 1,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG,
}

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class EngineLog:
    """Level-filtered, component-tagged logger for the engine."""

    def __init__(self, name: str = "gravity4"):
        self._level = DebugLevel.INFO
        self._muted: Dict[str, int] = {}
        self._timers: Dict[str, float] = {}

        self._logger = logging.getLogger(name)
        self._logger.setLevel(_LOGGING_LEVELS[self._level])
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(logging.Formatter(_FORMAT, datefmt='%H:%M:%S'))
        self._logger.addHandler(console)

    def configure(self, level: Optional[DebugLevel] = None, log_file: Optional[str] = None):
        """
        Set the level and, optionally, a file to copy log output to.

        Args:
            level: Most verbose level that is still logged
            log_file: Path of the log file (an empty string turns file logging off)
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(_LOGGING_LEVELS[level])

        if log_file is not None:
            for handler in [h for h in self._logger.handlers if isinstance(h, logging.FileHandler)]:
                self._logger.removeHandler(handler)
                handler.close()
            if log_file:
                file_handler = logging.FileHandler(log_file)
                file_handler.setFormatter(logging.Formatter(_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
                self._logger.addHandler(file_handler)

    def set_from_string(self, level_str: str):
        """Set the level from a command-line name such as 'debug'."""
        try:
            self.configure(level=DebugLevel[level_str.upper()])
        except KeyError:
            self.warning(f"Unknown debug level: {level_str}")

    def enabled(self, level: DebugLevel, component: Optional[str] = None) -> bool:
        """Whether a message at `level` for `component` would be written."""
        if level == DebugLevel.NONE or level.value > self._level.value:
            return False
        return not (component and self._muted.get(component))

    @contextmanager
    def muted(self, *components: str) -> Iterator[None]:
        """Silence the given components inside the block. Nests."""
        for component in components:
            self._muted[component] = self._muted.get(component, 0) + 1
        try:
            yield
        finally:
            for component in components:
                self._muted[component] -= 1

    def _write(self, level: DebugLevel, message: str, component: Optional[str]):
        if not self.enabled(level, component):
            return
        if component:
            message = f"[{component}] {message}"
        if level == DebugLevel.TRACE:
            message = f"TRACE: {message}"
        self._logger.log(_LOGGING_LEVELS[level], message)

    def warning(self, message: str, component: Optional[str] = None):
        self._write(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: Optional[str] = None):
        self._write(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: Optional[str] = None):
        self._write(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: Optional[str] = None):
        self._write(DebugLevel.TRACE, message, component)

    def start_timer(self, name: str):
        self._timers[name] = time.perf_counter()

    def end_timer(self, name: str, component: Optional[str] = None) -> Optional[float]:
        """
        Stop a timer and log how long it ran.

        Returns:
            Elapsed seconds, or None if the timer was never started
        """
        started = self._timers.pop(name, None)
        if started is None:
            self.warning(f"Timer '{name}' not started")
            return None

        elapsed = time.perf_counter() - started
        self.debug(f"{name} took {elapsed:.6f} seconds", component)
        return elapsed


debug = EngineLog()
