"""
Server configuration module.

This module handles server-side configuration settings.
"""

from relay_common.constants import (
    DEFAULT_SERVER_HOST, DEFAULT_PORT, DEFAULT_MAX_BACKLOG, BUFFER_SIZE,
    MAX_HISTORY_SIZE, HISTORY_REPLAY_COUNT, SERVER_LOG_FILE, ACCEPT_JOIN_TIMEOUT
)


class ServerConfig:
    """Server configuration class."""

    def __init__(self, host: str = DEFAULT_SERVER_HOST, port: int = DEFAULT_PORT,
                 max_backlog: int = DEFAULT_MAX_BACKLOG, log_file: str = SERVER_LOG_FILE):
        self.host = host
        self.port = port
        self.max_backlog = max_backlog

        # Logging configuration
        self.log_file = log_file

        # Connection settings
        self.buffer_size = BUFFER_SIZE
        self.accept_join_timeout = ACCEPT_JOIN_TIMEOUT

        # Chat settings
        self.max_history = MAX_HISTORY_SIZE
        self.history_replay_count = HISTORY_REPLAY_COUNT

    def get_connection_info(self):
        """Get connection information."""
        return {
            'host': self.host,
            'port': self.port,
            'max_backlog': self.max_backlog
        }

    def get_history_settings(self):
        """Get chat history settings."""
        return {
            'max_history': self.max_history,
            'history_replay_count': self.history_replay_count
        }

    def get_log_settings(self):
        """Get logging settings."""
        return {
            'log_file': self.log_file
        }
