"""Read the chat, handle and attachment tables of an iMessage chat database."""

__version__ = "0.1.0"