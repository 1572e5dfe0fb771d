"""Builtin command handlers.

Importing this package registers every builtin with ``engine.registry.registry``.
Module order sets the category order shown by ``help``.
"""

from engine.commands import navigation, files, text, search, environment, system

__all__ = ["navigation", "files", "text", "search", "environment", "system"]
