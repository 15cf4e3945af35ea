"""
Message history module.

Bounded FIFO store of past chat messages, replayed to clients as they join.
"""

import threading
from collections import deque
from itertools import islice
from typing import List

from relay_common.constants import MAX_HISTORY_SIZE, HISTORY_REPLAY_COUNT
from relay_common.protocol_definitions import Message


class MessageHistory:
    """Thread-safe bounded message store.

    Appending to a full store evicts the oldest message. The lock is only
    held while copying or mutating the deque, never during I/O.
    """

    def __init__(self, capacity: int = MAX_HISTORY_SIZE):
        self.capacity = capacity
        self.messages = deque(maxlen=capacity)
        self.lock = threading.Lock()

    def append(self, message: Message):
        """Add a message to the tail, evicting from the head when full."""
        with self.lock:
            self.messages.append(message)

    def recent(self, n: int = HISTORY_REPLAY_COUNT) -> List[Message]:
        """Return up to ``n`` stored messages without removing them.

        Messages are taken from the head of the store, so when more than
        ``n`` are held this returns the *oldest* ``n`` in chronological order.
        """
        with self.lock:
            return list(islice(self.messages, n))

    def count(self) -> int:
        with self.lock:
            return len(self.messages)
