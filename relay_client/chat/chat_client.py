"""
Chat client module.

This module handles client-side chat messaging: a connection to the relay,
a background receive thread and a plain text send path.
"""

import socket
import sys
import threading
from typing import Optional, Callable

from relay_common.constants import BUFFER_SIZE, ENCODING
from relay_client.utils.logger import ClientLogger


class ChatClient:
    """Client-side chat functionality."""

    def __init__(self, host: str, port: int, logger: ClientLogger):
        self.host = host
        self.port = port
        self.logger = logger
        self.client_id: Optional[str] = None

        self.sock: Optional[socket.socket] = None
        self.receive_thread: Optional[threading.Thread] = None
        self.message_handler: Optional[Callable[[bytes], None]] = None

        self._connected = False
        self._lock = threading.Lock()

    def set_message_callback(self, handler: Callable[[bytes], None]):
        """Set the handler called with every chunk received from the server."""
        self.message_handler = handler

    def is_connected(self) -> bool:
        return self._connected

    def connect(self, client_id: str) -> bool:
        """Connect to the server and start receiving in the background."""
        self.client_id = client_id

        sock = None
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            sock.connect((self.host, self.port))
        except (OSError, OverflowError) as e:
            self.logger.log_connection(self.host, self.port, False)
            self.logger.log_error("connection", e)
            if sock is not None:
                sock.close()
            return False

        self.sock = sock
        self._connected = True
        self.logger.log_connection(self.host, self.port, True)

        self.receive_thread = threading.Thread(
            target=self._receive_messages, name=f"receive-{client_id}", daemon=True
        )
        self.receive_thread.start()
        return True

    def _receive_messages(self):
        """Read from the server until it closes the connection."""
        while self._connected:
            try:
                data = self.sock.recv(BUFFER_SIZE)
            except OSError as e:
                if self._connected:
                    self.logger.log_error("receive", e)
                break

            if not data:
                break

            if self.message_handler:
                self.message_handler(data)
            else:
                sys.stdout.write(data.decode(ENCODING, errors='replace'))
                sys.stdout.flush()

        if self._connected:
            self.logger.info("Connection to server lost")
            self.disconnect()

    def send_message(self, message: str) -> bool:
        """Send a text message to the server."""
        if not self._connected:
            self.logger.error("Not connected to server")
            return False

        try:
            self.sock.sendall(message.encode(ENCODING))
            self.logger.log_chat_sent(message)
            return True
        except OSError as e:
            self.logger.log_error("send", e)
            self.disconnect()
            return False

    def disconnect(self):
        """Close the connection. Safe to call more than once and from any thread."""
        with self._lock:
            if not self._connected:
                return
            self._connected = False

        try:
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self.sock.close()

        if self.receive_thread is not None and self.receive_thread is not threading.current_thread():
            self.receive_thread.join()

        self.logger.info("Disconnected from server")
