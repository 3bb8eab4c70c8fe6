# src/__init__.py - v1
"""pdffusion: merge PDF documents in a user-chosen order."""

from pdffusion.version import __version__

__all__ = ["__version__"]
