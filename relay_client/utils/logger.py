"""
Client logging module.

This module handles client-side logging functionality. Console output is off
by default so log lines do not interleave with the chat on the terminal.
"""

import logging
from typing import Optional

from relay_common.constants import CLIENT_LOG_FILE, CLIENT_LOGGER_NAME
from relay_common.logger import ThreadSafeLogger


class ClientLogger(ThreadSafeLogger):
    """Client logging class."""

    def __init__(self, log_file: Optional[str] = CLIENT_LOG_FILE, log_level: int = logging.INFO,
                 console_output: bool = False, name: str = CLIENT_LOGGER_NAME):
        super().__init__(name, log_file, log_level, console_output)

    def log_connection(self, host: str, port: int, success: bool):
        """Log connection attempt."""
        status = "Connected" if success else "Failed to connect"
        self.info(f"{status} to {host}:{port}")

    def log_chat_sent(self, message: str):
        """Log chat message sent."""
        self.debug(f"Chat sent: {message}")
