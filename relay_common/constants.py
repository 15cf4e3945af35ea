"""
Shared constants for the chat relay.

This module contains all constants used across client and server components.
"""

# Network Configuration
DEFAULT_HOST = '127.0.0.1'
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_PORT = 8080
DEFAULT_MAX_BACKLOG = 100

# Buffer Sizes
BUFFER_SIZE = 4096  # bytes per recv(); one read is one chat message

# Chat History
MAX_HISTORY_SIZE = 1000
HISTORY_REPLAY_COUNT = 50

# Shutdown
ACCEPT_JOIN_TIMEOUT = 5.0  # seconds
SERVER_POLL_INTERVAL = 1.0  # seconds

# Logging
SERVER_LOG_FILE = 'server.log'
CLIENT_LOG_FILE = 'client.log'
SERVER_LOGGER_NAME = 'chat_relay_server'
CLIENT_LOGGER_NAME = 'chat_relay_client'

# Client
DEFAULT_CLIENT_ID = 'Cliente'
EXIT_COMMANDS = ('sair', 'exit', 'quit')

# Wire encoding
ENCODING = 'utf-8'
