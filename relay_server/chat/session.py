"""
Client session module.

A ``ClientSession`` wraps one accepted connection: its identity, the socket
it exclusively owns and a liveness flag read by several threads.
"""

import socket
import threading
from enum import Enum

from relay_common.constants import BUFFER_SIZE


class SessionState(Enum):
    CONNECTED = 'connected'
    DISCONNECTING = 'disconnecting'
    CLOSED = 'closed'


class ClientSession:
    """Server-side handle for one connected client."""

    def __init__(self, identity: str, sock: socket.socket, logger):
        self._identity = identity
        self.sock = sock
        self.logger = logger
        self._state = SessionState.CONNECTED
        # Guards only the CONNECTED -> DISCONNECTING transition
        self._state_lock = threading.Lock()

    @property
    def identity(self) -> str:
        return self._identity

    @property
    def state(self) -> SessionState:
        return self._state

    def is_connected(self) -> bool:
        return self._state is SessionState.CONNECTED

    def send(self, data: bytes) -> bool:
        """Send ``data`` to the client.

        Returns False without touching the socket if the session is no longer
        connected. A socket error disconnects the session.
        """
        if not self.is_connected():
            return False

        try:
            self.sock.sendall(data)
            return True
        except OSError as e:
            self.logger.error(f"Failed to send to {self._identity}: {e}")
            self.disconnect()
            return False

    def recv(self, bufsize: int = BUFFER_SIZE) -> bytes:
        """Block until data arrives; b'' means the peer closed the connection."""
        return self.sock.recv(bufsize)

    def disconnect(self):
        """Shut down and close the socket. Only the first call has an effect."""
        with self._state_lock:
            if self._state is not SessionState.CONNECTED:
                return
            self._state = SessionState.DISCONNECTING

        # shutdown() wakes a recv() blocked in the session's read loop
        try:
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass  # peer already gone
        try:
            self.sock.close()
        except OSError as e:
            self.logger.warning(f"Error closing socket for {self._identity}: {e}")

        self._state = SessionState.CLOSED
        self.logger.debug(f"Session {self._identity} closed")

    def __repr__(self):
        return f"ClientSession({self._identity!r}, {self._state.value})"
