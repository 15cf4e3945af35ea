#!/usr/bin/env python3
"""
Unit tests for ClientSession.

Tests the liveness state machine and the send/disconnect contract:
- send on a live session reaches the peer
- send on a disconnected session is a no-op returning False
- a socket error during send disconnects the session
- disconnect is idempotent, also under concurrent callers
- disconnect wakes a recv() blocked in another thread
"""

import socket
import threading
import unittest
from unittest.mock import Mock

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from relay_server.chat.session import ClientSession, SessionState


class TestClientSession(unittest.TestCase):
    """Test cases for ClientSession over a real socket pair."""

    def setUp(self):
        self.server_side, self.peer = socket.socketpair()
        self.peer.settimeout(5.0)
        self.logger = Mock()
        self.session = ClientSession('127.0.0.1:40000', self.server_side, self.logger)

    def tearDown(self):
        self.session.disconnect()
        self.peer.close()

    def test_initial_state(self):
        self.assertEqual(self.session.identity, '127.0.0.1:40000')
        self.assertTrue(self.session.is_connected())
        self.assertIs(self.session.state, SessionState.CONNECTED)

    def test_send_reaches_peer(self):
        self.assertTrue(self.session.send(b"hello\n"))
        self.assertEqual(self.peer.recv(64), b"hello\n")

    def test_recv_returns_peer_data(self):
        self.peer.sendall(b"chunk")
        self.assertEqual(self.session.recv(4096), b"chunk")

    def test_disconnect_closes_and_peer_sees_eof(self):
        """After disconnect the state is CLOSED and the peer reads EOF."""
        self.session.disconnect()

        self.assertFalse(self.session.is_connected())
        self.assertIs(self.session.state, SessionState.CLOSED)
        self.assertEqual(self.peer.recv(64), b"")

    def test_send_after_disconnect_fails(self):
        self.session.disconnect()
        self.assertFalse(self.session.send(b"late"))

    def test_disconnect_wakes_blocked_recv(self):
        """A recv() blocked in the read-loop thread returns once disconnect() runs."""
        result = {}

        def reader():
            try:
                result['data'] = self.session.recv(4096)
            except OSError as e:
                result['error'] = e

        thread = threading.Thread(target=reader)
        thread.start()

        self.session.disconnect()
        thread.join(timeout=5.0)

        self.assertFalse(thread.is_alive())
        self.assertTrue(result.get('data') == b"" or 'error' in result)


class TestClientSessionWithMockSocket(unittest.TestCase):
    """Test cases that need to observe socket calls."""

    def setUp(self):
        self.sock = Mock()
        self.logger = Mock()
        self.session = ClientSession('10.1.1.1:5000', self.sock, self.logger)

    def test_disconnect_is_idempotent(self):
        """Only the first disconnect shuts the socket down."""
        self.session.disconnect()
        self.session.disconnect()
        self.session.disconnect()

        self.sock.shutdown.assert_called_once_with(socket.SHUT_RDWR)
        self.sock.close.assert_called_once()

    def test_send_on_disconnected_session_has_no_side_effects(self):
        self.session.disconnect()
        self.sock.reset_mock()

        self.assertFalse(self.session.send(b"data"))

        self.sock.sendall.assert_not_called()
        self.sock.shutdown.assert_not_called()

    def test_send_failure_triggers_disconnect(self):
        """A socket error while sending disconnects the session and reports failure."""
        self.sock.sendall.side_effect = BrokenPipeError("broken pipe")

        self.assertFalse(self.session.send(b"data"))

        self.assertIs(self.session.state, SessionState.CLOSED)
        self.sock.shutdown.assert_called_once()
        self.logger.error.assert_called_once()

    def test_shutdown_error_still_closes(self):
        self.sock.shutdown.side_effect = OSError("not connected")

        self.session.disconnect()

        self.sock.close.assert_called_once()
        self.assertIs(self.session.state, SessionState.CLOSED)

    def test_concurrent_disconnect_runs_once(self):
        start = threading.Barrier(10)

        def worker():
            start.wait()
            self.session.disconnect()

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.sock.shutdown.assert_called_once()
        self.sock.close.assert_called_once()


if __name__ == '__main__':
    unittest.main()
