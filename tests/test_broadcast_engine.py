#!/usr/bin/env python3
"""
Unit tests for BroadcastEngine.

Tests sender exclusion, wire formatting and per-recipient failure isolation.
"""

import unittest
from unittest.mock import Mock

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from relay_common.protocol_definitions import Message, create_join_notification
from relay_server.chat.broadcast import BroadcastEngine
from relay_server.chat.registry import ClientRegistry


def make_session(identity: str, delivered: bool = True) -> Mock:
    session = Mock(identity=identity)
    session.send.return_value = delivered
    return session


class TestBroadcastEngine(unittest.TestCase):
    """Test cases for BroadcastEngine."""

    def setUp(self):
        self.logger = Mock()
        self.registry = ClientRegistry(self.logger)
        self.engine = BroadcastEngine(self.registry, self.logger)

        self.alice = make_session('10.0.0.1:1111')
        self.bob = make_session('10.0.0.2:2222')
        self.carol = make_session('10.0.0.3:3333')
        for session in (self.alice, self.bob, self.carol):
            self.registry.add(session)

    def test_sender_is_excluded(self):
        """A broadcast never reaches the session it came from."""
        message = Message(self.alice.identity, b"hello")

        failed = self.engine.broadcast(message, exclude_identity=self.alice.identity)

        self.assertEqual(failed, [])
        self.alice.send.assert_not_called()
        self.bob.send.assert_called_once_with(b"[10.0.0.1:1111]: hello\n")
        self.carol.send.assert_called_once_with(b"[10.0.0.1:1111]: hello\n")

    def test_no_exclusion_reaches_everyone(self):
        self.engine.broadcast(Message('server', b"note"))

        for session in (self.alice, self.bob, self.carol):
            session.send.assert_called_once()

    def test_send_failure_is_isolated(self):
        """A failed recipient is reported and the others still receive the message."""
        self.bob.send.return_value = False

        failed = self.engine.broadcast(Message(self.alice.identity, b"hi"),
                                       exclude_identity=self.alice.identity)

        self.assertEqual(failed, [self.bob.identity])
        self.carol.send.assert_called_once()
        self.logger.warning.assert_called_once()

    def test_unexpected_exception_is_isolated(self):
        self.alice.send.side_effect = RuntimeError("boom")

        failed = self.engine.announce(b"*** x ***\n")

        self.assertEqual(failed, [self.alice.identity])
        self.bob.send.assert_called_once_with(b"*** x ***\n")
        self.carol.send.assert_called_once_with(b"*** x ***\n")
        self.logger.error.assert_called_once()

    def test_announce_join_excludes_new_member(self):
        notice = create_join_notification(self.carol.identity)

        self.engine.announce(notice, exclude_identity=self.carol.identity)

        self.carol.send.assert_not_called()
        self.alice.send.assert_called_once_with(b"*** 10.0.0.3:3333 entrou no chat ***\n")
        self.bob.send.assert_called_once_with(b"*** 10.0.0.3:3333 entrou no chat ***\n")

    def test_registry_changes_during_broadcast(self):
        """Recipients iterate a snapshot, so removals mid-broadcast are safe."""
        self.alice.send.side_effect = lambda data: self.registry.remove(self.bob.identity) >= 0

        self.engine.announce(b"x\n")

        self.bob.send.assert_called_once()
        self.carol.send.assert_called_once()
        self.assertEqual(self.registry.count(), 2)

    def test_empty_registry(self):
        engine = BroadcastEngine(ClientRegistry(self.logger), self.logger)
        self.assertEqual(engine.broadcast(Message('a:1', b"lonely")), [])


if __name__ == '__main__':
    unittest.main()
