"""Session state containers."""

from .responses import ResponseStore

__all__ = ["ResponseStore"]
