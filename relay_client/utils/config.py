"""
Client configuration module.

This module handles client-side configuration settings.
"""

from relay_common.constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_CLIENT_ID, CLIENT_LOG_FILE, BUFFER_SIZE


class ClientConfig:
    """Client configuration class."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, client_id: str = DEFAULT_CLIENT_ID,
                 log_file: str = CLIENT_LOG_FILE):
        self.host = host
        self.port = port
        self.client_id = client_id or DEFAULT_CLIENT_ID
        self.log_file = log_file

        # Connection settings
        self.buffer_size = BUFFER_SIZE

    def get_connection_info(self):
        """Get connection information."""
        return {
            'host': self.host,
            'port': self.port,
            'client_id': self.client_id
        }
