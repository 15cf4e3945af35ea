#!/usr/bin/env python3
"""
Chat Relay Client - Main Entry Point

Interactive line-based client: every line typed is sent to the relay and
everything the relay sends is printed as it arrives.

Usage:
    python main_client.py [host] [port] [client_id]

Type 'sair', 'exit' or 'quit' to disconnect.
"""

import argparse
import sys

from relay_common.constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_CLIENT_ID, CLIENT_LOG_FILE, EXIT_COMMANDS
from relay_client.chat.chat_client import ChatClient
from relay_client.utils.config import ClientConfig
from relay_client.utils.logger import ClientLogger


def run_interactive(client: ChatClient, stdin=sys.stdin) -> int:
    """Send lines from ``stdin`` until an exit command, EOF or a lost connection."""
    while client.is_connected():
        line = stdin.readline()
        if not line:
            print("\nInput closed. Exiting...")
            break

        message = line.rstrip('\r\n')
        if message in EXIT_COMMANDS:
            print("\nLeaving...")
            break

        if message and not client.send_message(message):
            print("\nFailed to send message. Connection lost.")
            break

    client.disconnect()
    print("Disconnected.")
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description='Chat Relay Client')
    parser.add_argument('host', type=str, nargs='?', default=DEFAULT_HOST,
                        help=f'Server address (default: {DEFAULT_HOST})')
    parser.add_argument('port', type=int, nargs='?', default=DEFAULT_PORT,
                        help=f'Server port (default: {DEFAULT_PORT})')
    parser.add_argument('client_id', type=str, nargs='?', default=DEFAULT_CLIENT_ID,
                        help=f'Client name (default: {DEFAULT_CLIENT_ID})')
    parser.add_argument('--log-file', type=str, default=CLIENT_LOG_FILE,
                        help=f'Log file (default: {CLIENT_LOG_FILE})')

    args = parser.parse_args(argv)

    config = ClientConfig(args.host, args.port, args.client_id, args.log_file)

    try:
        logger = ClientLogger(log_file=config.log_file)
    except OSError as e:
        print(f"[ERROR] Could not open log file {config.log_file}: {e}", file=sys.stderr)
        return 1

    print("========================================")
    print("   Chat Relay Client")
    print("========================================")
    print(f"Server: {config.host}:{config.port}")
    print("========================================")
    print()

    client = ChatClient(config.host, config.port, logger)
    print(f"Connecting to {config.host}:{config.port}...")

    if not client.connect(config.client_id):
        print("[ERROR] Could not connect to the server!", file=sys.stderr)
        logger.close()
        return 1

    print(f"Connected! Type your messages (or {'/'.join(EXIT_COMMANDS)} to disconnect):")
    print()

    try:
        return run_interactive(client)
    except KeyboardInterrupt:
        client.disconnect()
        print("\nDisconnected.")
        return 0
    finally:
        logger.close()


if __name__ == "__main__":
    sys.exit(main())
