"""CoW hooks — models package."""

from .app_data import AppData, AppDataDocument, HooksMetadata, Metadata
from .hook import Hook

__all__ = [
    "AppData",
    "AppDataDocument",
    "Hook",
    "HooksMetadata",
    "Metadata",
]
