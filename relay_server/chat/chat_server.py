"""
Chat server module.

This module owns the listening socket, accepts connections and runs one
read/broadcast loop per connected client on its own thread.
"""

import socket
import threading
from enum import Enum
from typing import Optional

from relay_common.constants import SERVER_POLL_INTERVAL
from relay_common.protocol_definitions import (
    Message, format_identity, format_chat_line, create_join_notification,
    create_leave_notification, create_history_header, HISTORY_FOOTER, WELCOME_MESSAGE
)
from relay_server.chat.broadcast import BroadcastEngine
from relay_server.chat.history import MessageHistory
from relay_server.chat.registry import ClientRegistry
from relay_server.chat.session import ClientSession
from relay_server.utils.config import ServerConfig
from relay_server.utils.logger import ServerLogger


class ServerState(Enum):
    CREATED = 'created'
    STARTING = 'starting'
    RUNNING = 'running'
    STOPPING = 'stopping'
    STOPPED = 'stopped'


class ChatServer:
    """TCP broadcast relay server.

    Lifecycle: CREATED -> STARTING -> RUNNING -> STOPPING -> STOPPED. A failed
    ``start()`` falls back to CREATED. Session threads are not joined; ``stop()``
    disconnects every registered session so each read loop exits on its own.
    """

    def __init__(self, config: ServerConfig, logger: ServerLogger):
        self.config = config
        self.logger = logger

        self.server_socket: Optional[socket.socket] = None
        self.accept_thread: Optional[threading.Thread] = None
        self._bound_port: Optional[int] = None

        self._state = ServerState.CREATED
        self._state_lock = threading.Lock()

        self.registry = ClientRegistry(logger)
        self.history = MessageHistory(config.max_history)
        self.broadcaster = BroadcastEngine(self.registry, logger)

    @property
    def state(self) -> ServerState:
        return self._state

    @property
    def port(self) -> int:
        """The bound port once started, otherwise the configured one."""
        if self._bound_port is not None:
            return self._bound_port
        return self.config.port

    def is_running(self) -> bool:
        return self._state is ServerState.RUNNING

    def get_connected_clients(self) -> int:
        return self.registry.count()

    def get_total_messages(self) -> int:
        return self.history.count()

    def start(self) -> bool:
        """Bind, listen and spawn the acceptance thread.

        Returns False, leaving the server in CREATED, if the socket cannot be
        set up.
        """
        with self._state_lock:
            if self._state is not ServerState.CREATED:
                self.logger.warning(f"Cannot start server in state '{self._state.value}'")
                return False
            self._state = ServerState.STARTING

        sock = None
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.config.host, self.config.port))
            sock.listen(self.config.max_backlog)
            sock.settimeout(SERVER_POLL_INTERVAL)
        except OSError as e:
            self.logger.log_error(f"server startup on port {self.config.port}", e)
            if sock is not None:
                sock.close()
            with self._state_lock:
                self._state = ServerState.CREATED
            return False

        self.server_socket = sock
        self._bound_port = sock.getsockname()[1]

        with self._state_lock:
            self._state = ServerState.RUNNING
            self.accept_thread = threading.Thread(
                target=self._accept_connections, name='accept', daemon=True
            )
            self.accept_thread.start()

        self.logger.info(f"Server listening on {self.config.host}:{self._bound_port}")
        return True

    def stop(self):
        """Stop accepting, disconnect every client and wait for the accept loop.

        Only the first call made while RUNNING has an effect.
        """
        with self._state_lock:
            if self._state is not ServerState.RUNNING:
                return
            self._state = ServerState.STOPPING

        self.logger.info("Stopping server...")

        # Unblock a pending accept()
        if self.server_socket is not None:
            try:
                self.server_socket.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass  # not supported on listening sockets everywhere
            self.server_socket.close()

        for session in self.registry.snapshot():
            session.disconnect()

        if self.accept_thread is not None and self.accept_thread is not threading.current_thread():
            self.accept_thread.join(timeout=self.config.accept_join_timeout)
            # A lingering accept loop sees the state has left RUNNING on its next poll
            if self.accept_thread.is_alive():
                self.logger.warning("Accept thread did not finish in time")

        with self._state_lock:
            self._state = ServerState.STOPPED
        self.logger.info("Server stopped")

    def _accept_connections(self):
        """Accept clients until the server leaves RUNNING."""
        while self.is_running():
            try:
                client_sock, addr = self.server_socket.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if self.is_running():
                    self.logger.log_error("accept", e)
                    continue
                break

            if not self.is_running():
                client_sock.close()
                break

            identity = format_identity(addr)
            self.logger.log_connection(identity)

            session = ClientSession(identity, client_sock, self.logger)
            self.registry.add(session)

            # stop() may have taken its snapshot before add()
            if not self.is_running():
                session.disconnect()
                self.registry.remove(identity)
                break

            threading.Thread(
                target=self._handle_client, args=(session,),
                name=f"session-{identity}", daemon=True
            ).start()

        self.logger.debug("Accept loop finished")

    def _handle_client(self, session: ClientSession):
        """Per-connection loop: announce, replay history, then relay reads."""
        identity = session.identity

        self.broadcaster.announce(create_join_notification(identity), exclude_identity=identity)
        self.logger.debug(f"Join notification for {identity} sent to other clients")

        self._send_history(session)

        try:
            while True:
                try:
                    data = session.recv(self.config.buffer_size)
                except OSError as e:
                    if session.is_connected():
                        self.logger.log_error(f"receive from {identity}", e)
                    break

                if not data:
                    break

                message = Message(identity, data)
                self.logger.log_chat(identity, message.text)

                self.history.append(message)
                self.broadcaster.broadcast(message, exclude_identity=identity)
        finally:
            self._end_session(session)

    def _end_session(self, session: ClientSession):
        """Announce departure and deregister. Runs once per session."""
        identity = session.identity
        self.logger.log_disconnect(identity)

        self.broadcaster.announce(create_leave_notification(identity), exclude_identity=identity)

        session.disconnect()
        self.registry.remove(identity)

    def _send_history(self, session: ClientSession):
        """Replay stored messages, or a welcome line if there are none."""
        messages = self.history.recent(self.config.history_replay_count)

        if not messages:
            session.send(WELCOME_MESSAGE)
            return

        session.send(create_history_header(len(messages)))
        for message in messages:
            session.send(format_chat_line(message))
        session.send(HISTORY_FOOTER)

        self.logger.info(f"History sent to {session.identity} ({len(messages)} messages)")
