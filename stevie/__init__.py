"""A small vi-like screen text editor, with its buffer, screen and environment-block helpers."""

__version__ = "3.91.0"
__all__ = ["buffer", "charinfo", "cli", "commands", "editor", "help", "screen", "setenv", "terminal"]