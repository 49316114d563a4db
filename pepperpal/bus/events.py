"""Event types exchanged between the transport layer and the chat service."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class InboundMessage:
    """Message received from a chat channel."""

    channel: str  # telegram, cli, …
    sender_id: str  # Platform-level user identifier
    chat_id: str  # Conversation identifier
    content: str  # Message text
    timestamp: datetime = field(default_factory=datetime.now)
    metadata: dict[str, Any] = field(default_factory=dict)  # Channel-specific data
    chat_type: str = "private"  # "private" | "group"
    message_id: str = ""

    @property
    def session_key(self) -> str:
        """Key shared by the duplicate guard and log lines."""
        return f"{self.sender_id}:{self.chat_id or self.sender_id}"


@dataclass
class OutboundMessage:
    """Message to send to a chat channel."""

    channel: str
    chat_id: str
    content: str
    reply_to: str | None = None
    parse_mode: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
