"""
Database models for the pocket server.
"""

from .entry import Entry

__all__ = ["Entry"]
