"""CoW hooks — app-data document building and publishing."""

from .builder import app_data_hash, generate_app_data
from .client import AppDataClient, AppDataPublishError

__all__ = [
    "AppDataClient",
    "AppDataPublishError",
    "app_data_hash",
    "generate_app_data",
]
