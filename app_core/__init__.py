"""
Core application package for the coding assistant.
Provides configuration, console utilities and the chat session loop.
"""

__all__ = [
    "config",
    "console",
    "session",
]
