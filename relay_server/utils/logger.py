"""
Server logging module.

This module handles server-side logging functionality. A ``ServerLogger`` is
constructed once by the entry point and handed to every server component;
there is no module-level instance.
"""

import logging
from typing import Optional

from relay_common.constants import SERVER_LOG_FILE, SERVER_LOGGER_NAME
from relay_common.logger import ThreadSafeLogger


class ServerLogger(ThreadSafeLogger):
    """Server logging class."""

    def __init__(self, log_file: Optional[str] = SERVER_LOG_FILE, log_level: int = logging.INFO,
                 console_output: bool = True, name: str = SERVER_LOGGER_NAME):
        super().__init__(name, log_file, log_level, console_output)

    def log_connection(self, identity: str):
        """Log client connection."""
        self.info(f"New connection from {identity}")

    def log_disconnect(self, identity: str):
        """Log client disconnect."""
        self.info(f"Client {identity} disconnected")

    def log_chat(self, identity: str, message: str):
        """Log chat message."""
        self.info(f"Message from {identity}: {message}")
