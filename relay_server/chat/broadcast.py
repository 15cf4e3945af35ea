"""
Broadcast module.

Fans a message out to every registered session except its sender.
"""

from typing import List, Optional

from relay_common.protocol_definitions import Message, format_chat_line
from relay_server.chat.registry import ClientRegistry


class BroadcastEngine:
    """Synchronous fan-out over a registry snapshot.

    Delivery failures are isolated per recipient: a failed ``send`` only
    affects that recipient and the remaining ones are still attempted.
    """

    def __init__(self, registry: ClientRegistry, logger):
        self.registry = registry
        self.logger = logger

    def broadcast(self, message: Message, exclude_identity: Optional[str] = None) -> List[str]:
        """Send a chat message to everyone but ``exclude_identity``."""
        return self.announce(format_chat_line(message), exclude_identity)

    def announce(self, data: bytes, exclude_identity: Optional[str] = None) -> List[str]:
        """Send pre-formatted bytes to everyone but ``exclude_identity``.

        Returns the identities whose delivery failed.
        """
        failed = []

        for session in self.registry.snapshot():
            if exclude_identity is not None and session.identity == exclude_identity:
                continue
            try:
                if not session.send(data):
                    failed.append(session.identity)
            except Exception as e:
                self.logger.error(f"Failed to broadcast to {session.identity}: {e}")
                failed.append(session.identity)

        if failed:
            self.logger.warning(f"Broadcast not delivered to {len(failed)} client(s): {', '.join(failed)}")
        return failed
