#!/usr/bin/env python3
"""
Chat Relay Server - Main Entry Point

Starts the TCP broadcast relay and keeps it running until SIGINT/SIGTERM.

Usage:
    python main_server.py [port]

Optional arguments:
    port                  TCP port to listen on (default: 8080)
    --host HOST           Bind address (default: 0.0.0.0)
    --backlog N           Listen backlog (default: 100)
    --log-file PATH       Log file (default: server.log)
"""

import argparse
import signal
import sys
import time

from relay_common.constants import (
    DEFAULT_PORT, DEFAULT_SERVER_HOST, DEFAULT_MAX_BACKLOG, SERVER_LOG_FILE, SERVER_POLL_INTERVAL
)
from relay_server.chat.chat_server import ChatServer
from relay_server.utils.config import ServerConfig
from relay_server.utils.logger import ServerLogger


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description='Chat Relay Server')
    parser.add_argument('port', type=int, nargs='?', default=DEFAULT_PORT,
                        help=f'TCP port to listen on (default: {DEFAULT_PORT})')
    parser.add_argument('--host', type=str, default=DEFAULT_SERVER_HOST,
                        help=f'Host to bind to (default: {DEFAULT_SERVER_HOST})')
    parser.add_argument('--backlog', type=int, default=DEFAULT_MAX_BACKLOG,
                        help=f'Listen backlog (default: {DEFAULT_MAX_BACKLOG})')
    parser.add_argument('--log-file', type=str, default=SERVER_LOG_FILE,
                        help=f'Log file (default: {SERVER_LOG_FILE})')

    args = parser.parse_args(argv)

    config = ServerConfig(host=args.host, port=args.port, max_backlog=args.backlog, log_file=args.log_file)

    try:
        logger = ServerLogger(log_file=config.log_file, console_output=True)
    except OSError as e:
        print(f"[ERROR] Could not open log file {config.log_file}: {e}", file=sys.stderr)
        return 1

    print("========================================")
    print("   Chat Relay Server")
    print("========================================")
    print(f"Port: {config.port}")
    print("Press Ctrl+C to stop the server")
    print("========================================")
    print()

    server = ChatServer(config, logger)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, stopping server...")
        server.stop()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    if not server.start():
        print("[ERROR] Failed to start server!", file=sys.stderr)
        logger.close()
        return 1

    while server.is_running():
        time.sleep(SERVER_POLL_INTERVAL)

    print("\nServer shut down cleanly.")
    logger.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
