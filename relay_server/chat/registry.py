"""
Client registry module.

Thread-safe collection of the sessions currently connected to the server.
"""

import threading
from typing import List, Optional


class ClientRegistry:
    """Registry of connected sessions keyed by identity.

    Callers never perform socket I/O while holding ``lock``: take a
    ``snapshot()`` and iterate the copy instead.
    """

    def __init__(self, logger):
        self.clients: List = []
        self.lock = threading.Lock()
        self.logger = logger

    def add(self, session):
        """Register a session. Identity uniqueness is the caller's guarantee."""
        with self.lock:
            self.clients.append(session)
            total = len(self.clients)
        self.logger.info(f"Client added: {session.identity} (Total: {total})")

    def remove(self, identity: str) -> int:
        """Remove every session with ``identity``; returns how many were removed."""
        with self.lock:
            remaining = [c for c in self.clients if c.identity != identity]
            removed = len(self.clients) - len(remaining)
            self.clients = remaining
            total = len(remaining)

        if removed:
            self.logger.info(f"Client removed: {identity} (Total: {total})")
        return removed

    def snapshot(self) -> List:
        """Return an independent copy of the current members."""
        with self.lock:
            return list(self.clients)

    def find(self, identity: str) -> Optional[object]:
        with self.lock:
            for session in self.clients:
                if session.identity == identity:
                    return session
        return None

    def count(self) -> int:
        with self.lock:
            return len(self.clients)
