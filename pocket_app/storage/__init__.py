"""
Tag storage module.

Implements the Strategy Pattern for the persistent tag -> URL mapping.
"""

from .strategies import TagStore, SQLTagStore

__all__ = [
    "TagStore",
    "SQLTagStore",
]
