"""
Thread-safe diagnostic logging shared by the server and the client.

Wraps a named ``logging.Logger`` with an optional append-only file sink and
console output. Side-effect only: nothing here influences control flow.
"""

import logging
import sys
from typing import Optional


class _MaxLevelFilter(logging.Filter):
    """Pass only records below ``max_level``."""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


class ThreadFormatter(logging.Formatter):
    """Timestamped formatter that tags every line with the emitting thread.

    Records logged through ``simple_log`` carry ``simple=True`` and are
    written without the level field.
    """

    LEVEL_FORMAT = '[%(asctime)s.%(msecs)03d] [%(levelname)s] [Thread:%(thread)d] %(message)s'
    SIMPLE_FORMAT = '[%(asctime)s.%(msecs)03d] [Thread:%(thread)d] %(message)s'
    DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

    def __init__(self):
        super().__init__(self.LEVEL_FORMAT, datefmt=self.DATE_FORMAT)
        self._simple = logging.Formatter(self.SIMPLE_FORMAT, datefmt=self.DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        if getattr(record, 'simple', False):
            return self._simple.format(record)
        return super().format(record)


class ThreadSafeLogger:
    """Logging class writing to a file and, optionally, the console.

    Handlers hang off the process-wide ``logging.getLogger(name)``, so a new
    instance built with the same name takes over that logger and detaches the
    earlier instance's sinks. Give each live instance its own name.
    """

    def __init__(self, name: str, log_file: Optional[str] = None, log_level: int = logging.INFO,
                 console_output: bool = True):
        self.log_file = log_file
        self.formatter = ThreadFormatter()

        # Set up main logger
        self.logger = logging.getLogger(name)
        self.logger.setLevel(log_level)
        self.logger.propagate = False

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
            if isinstance(handler, logging.FileHandler):
                handler.close()

        # Keeps records from reaching logging.lastResort once every sink is detached
        self.logger.addHandler(logging.NullHandler())

        # File sink; an unopenable path raises OSError to the caller
        self.file_handler = None
        if log_file:
            self.file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
            self.file_handler.setFormatter(self.formatter)
            self.logger.addHandler(self.file_handler)

        # Console handlers: errors go to stderr, everything else to stdout
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.addFilter(_MaxLevelFilter(logging.ERROR))
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.ERROR)
        self.console_handlers = [stdout_handler, stderr_handler]
        for handler in self.console_handlers:
            handler.setFormatter(self.formatter)

        self.console_output = False
        self.set_console_output(console_output)

    def log(self, level: int, message: str):
        """Log a message at the given level."""
        self.logger.log(level, message)

    def simple_log(self, message: str):
        """Log a message without a level; not subject to the minimum level."""
        record = self.logger.makeRecord(
            self.logger.name, logging.INFO, '(simple)', 0, message, None, None,
            extra={'simple': True}
        )
        self.logger.handle(record)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def critical(self, message: str):
        """Log critical message."""
        self.logger.critical(message)

    def set_min_level(self, level: int):
        self.logger.setLevel(level)

    def set_console_output(self, enable: bool):
        """Attach or detach the console handlers."""
        if enable and not self.console_output:
            for handler in self.console_handlers:
                self.logger.addHandler(handler)
        elif not enable and self.console_output:
            for handler in self.console_handlers:
                self.logger.removeHandler(handler)
        self.console_output = enable

    def flush(self):
        for handler in self.logger.handlers:
            handler.flush()

    def close(self):
        """Flush and detach every handler, closing the file sink."""
        self.set_console_output(False)
        if self.file_handler is not None:
            self.file_handler.flush()
            self.logger.removeHandler(self.file_handler)
            self.file_handler.close()
            self.file_handler = None

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")
