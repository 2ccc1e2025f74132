"""
Console adapter for EchoSave.

Runs the code group flows in a terminal: prompts, numbered menus and notices
on stdin/stdout.
"""

from .port import ConsolePort

__all__ = ["ConsolePort"]
