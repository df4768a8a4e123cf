"""Service layer for clipbridge."""

from .clipboard_service import ClipboardService

__all__ = ["ClipboardService"]
