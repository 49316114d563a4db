"""Message types shared by channels and the chat service."""

from pepperpal.bus.events import InboundMessage, OutboundMessage

__all__ = ["InboundMessage", "OutboundMessage"]
