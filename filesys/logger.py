"""
Filesys Logger Module

Logging for the filesystem backends:
- One logger per subsystem ('vfs', 'handle', 'osfs', 'factory', ...)
- Every record carries the subsystem name and a context dict
  (path, new path, sizes) next to its message
- Optional console and file output
- In-memory buffer of recent records for inspection in tests and tools

The library stays silent until Logger.initialize() is called.

Author: YSNRFD
Version: 1.0.0
"""

import logging
import sys
import threading
from collections import deque
from enum import IntEnum
from pathlib import Path
from typing import Optional, Any, List, TextIO


ROOT_LOGGER = 'filesys'


class LogLevel(IntEnum):
    """Levels understood by Logger.initialize (stdlib numeric values)."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def from_name(cls, name: str) -> 'LogLevel':
        """Look up a level by (case-insensitive) name."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name}") from None


class LogFormatter(logging.Formatter):
    """
    Single-line formatter for filesystem events.

    Output looks like:
        2024-01-01 12:00:00.123 DEBUG    [vfs] Renamed resource {from=/a to=/b}
    """

    LEVEL_COLORS = {
        logging.DEBUG: '\033[2m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[1;31m',
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = False, stream: Optional[TextIO] = None):
        super().__init__(datefmt='%Y-%m-%d %H:%M:%S')
        isatty = getattr(stream, 'isatty', None)
        self.use_colors = use_colors and callable(isatty) and isatty()

    @staticmethod
    def render_context(context: dict[str, Any]) -> str:
        """Render a context dict as '{k=v k=v}'; empty for no context."""
        if not context:
            return ''
        pairs = ' '.join(f"{key}={value}" for key, value in context.items())
        return f" {{{pairs}}}"

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:<8}"
        if self.use_colors:
            level = f"{self.LEVEL_COLORS.get(record.levelno, '')}{level}{self.RESET}"

        subsystem = getattr(record, 'subsystem', record.name)
        line = (
            f"{self.formatTime(record, self.datefmt)}.{int(record.msecs):03d} "
            f"{level} [{subsystem}] {record.getMessage()}"
            f"{self.render_context(getattr(record, 'context', None))}"
        )
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class LogBufferHandler(logging.Handler):
    """
    Keeps the most recent records in memory as plain dicts.

    Tests use it to assert on emitted events without capturing stdout.
    """

    def __init__(self, max_entries: int = 10000):
        super().__init__()
        self._records: deque = deque(maxlen=max_entries)

    @property
    def max_entries(self) -> int:
        return self._records.maxlen

    def emit(self, record: logging.LogRecord) -> None:
        entry = {
            'timestamp': record.created,
            'level': record.levelname,
            'subsystem': getattr(record, 'subsystem', None),
            'message': record.getMessage(),
            'context': dict(getattr(record, 'context', None) or {}),
        }
        # Handler.lock is created by createLock() in Handler.__init__
        with self.lock:
            self._records.append(entry)

    def get_logs(
        self,
        level: Optional[str] = None,
        subsystem: Optional[str] = None,
        limit: int = 100
    ) -> List[dict[str, Any]]:
        """Return up to limit of the newest records, oldest first."""
        with self.lock:
            entries = list(self._records)

        selected = [
            entry for entry in entries
            if (level is None or entry['level'] == level.upper())
            and (subsystem is None or entry['subsystem'] == subsystem)
        ]
        return selected[-limit:] if limit > 0 else []

    def clear(self) -> None:
        with self.lock:
            self._records.clear()


# A library must not print unless asked to
logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


class Logger:
    """
    Subsystem logger for filesys.

    One instance exists per subsystem name; each wraps the stdlib logger
    ``filesys.<subsystem>`` and attaches the subsystem name and a context
    dict to every record.

    Example:
        >>> log = Logger('vfs')
        >>> log.debug("Created file", context={'path': '/tmp/a.txt'})
    """

    _instances: dict[str, 'Logger'] = {}
    _lock = threading.Lock()
    _buffer_handler: Optional[LogBufferHandler] = None
    _handlers: List[logging.Handler] = []

    def __new__(cls, subsystem: str = 'core') -> 'Logger':
        with cls._lock:
            logger = cls._instances.get(subsystem)
            if logger is None:
                logger = super().__new__(cls)
                logger._subsystem = subsystem
                logger._logger = logging.getLogger(f'{ROOT_LOGGER}.{subsystem}')
                cls._instances[subsystem] = logger
            return logger

    @property
    def subsystem(self) -> str:
        return self._subsystem

    @classmethod
    def initialize(
        cls,
        level: int = LogLevel.INFO,
        log_file: Optional[str] = None,
        use_colors: bool = True,
        console_output: bool = True
    ) -> None:
        """
        Install log handlers on the ``filesys`` logger.

        Calling it again removes the handlers installed by the previous
        call, so tests and tools can reconfigure freely. The record buffer
        is always installed and starts empty.

        Args:
            level: Minimum level that is recorded
            log_file: Also append records to this file (parents are created)
            use_colors: Color the level name when stdout is a terminal
            console_output: Also print records to stdout
        """
        handlers: List[logging.Handler] = []

        buffer_handler = LogBufferHandler()
        handlers.append(buffer_handler)

        if console_output:
            console = logging.StreamHandler(sys.stdout)
            console.setFormatter(LogFormatter(use_colors=use_colors, stream=sys.stdout))
            handlers.append(console)

        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(LogFormatter())
            handlers.append(file_handler)

        with cls._lock:
            root = logging.getLogger(ROOT_LOGGER)
            for old in cls._handlers:
                root.removeHandler(old)
                old.close()

            root.setLevel(level)
            for handler in handlers:
                handler.setLevel(level)
                root.addHandler(handler)

            cls._handlers = handlers
            cls._buffer_handler = buffer_handler

    @classmethod
    def get_buffered_logs(
        cls,
        level: Optional[str] = None,
        subsystem: Optional[str] = None,
        limit: int = 100
    ) -> List[dict[str, Any]]:
        """Records kept since the last initialize(); empty before the first."""
        if cls._buffer_handler is None:
            return []
        return cls._buffer_handler.get_logs(level=level, subsystem=subsystem, limit=limit)

    def _log(self, level: int, message: str, context: Optional[dict[str, Any]]) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(
                level,
                message,
                extra={'subsystem': self._subsystem, 'context': context or {}}
            )

    def debug(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(logging.INFO, message, context)

    def warning(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, message, context)

    def error(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(logging.ERROR, message, context)


def get_logger(subsystem: str) -> Logger:
    """Return the Logger for a subsystem ('vfs', 'handle', 'osfs', ...)."""
    return Logger(subsystem)
