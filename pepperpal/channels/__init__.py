"""Chat transports. Import the channel module you need, e.g. ``pepperpal.channels.telegram``."""
