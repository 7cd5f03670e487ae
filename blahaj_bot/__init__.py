"""Message handlers, command replies, moderation checks and a member API for a chat bot."""

__version__ = "0.2.1"