"""
Adapters package - External resource connections.
Filesystem adapter for uploaded images.
"""

from adapters import attachment_store

__all__ = ["attachment_store"]
