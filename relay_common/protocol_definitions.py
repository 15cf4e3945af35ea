"""
Protocol definitions for the chat relay.

The wire format is plain UTF-8 text over TCP with no framing. Every
builder in this module returns the exact bytes that go on the wire.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Tuple

from relay_common.constants import ENCODING


@dataclass(frozen=True)
class Message:
    """A chat message as received from one client.

    ``content`` is the raw chunk returned by a single ``recv()`` call and may
    contain several lines or only part of one.
    """
    sender_id: str
    content: bytes
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def text(self) -> str:
        """Content decoded for display and logging."""
        return self.content.decode(ENCODING, errors='replace')


HISTORY_FOOTER = "=== Fim do Histórico ===\n".encode(ENCODING)
WELCOME_MESSAGE = "=== Bem-vindo ao Chat! Você é o primeiro aqui. ===\n".encode(ENCODING)


def format_identity(addr: Tuple[str, int]) -> str:
    """Build a session identity from a peer address tuple."""
    return f"{addr[0]}:{addr[1]}"


def create_join_notification(identity: str) -> bytes:
    """Create the line announcing that ``identity`` joined."""
    return f"*** {identity} entrou no chat ***\n".encode(ENCODING)


def create_leave_notification(identity: str) -> bytes:
    """Create the line announcing that ``identity`` left."""
    return f"*** {identity} saiu do chat ***\n".encode(ENCODING)


def format_chat_line(message: Message) -> bytes:
    """Format a message as ``[sender]: content`` plus newline."""
    return b"[" + message.sender_id.encode(ENCODING) + b"]: " + message.content + b"\n"


def create_history_header(count: int) -> bytes:
    """Create the header line sent before a history replay."""
    return f"=== Histórico de Mensagens (últimas {count} mensagens) ===\n".encode(ENCODING)
