"""Pocket Server: a small personal HTTP utility server."""

__version__ = "1.0.0"
