"""Storage layer exports."""

from .database import Base, DatabaseManager, get_db_manager, shutdown_database
from .documents import find_document, insert_document, save_document
from .models import AnganwadiCenter, SettingsDocument, User

__all__ = [
    "Base",
    "DatabaseManager",
    "get_db_manager",
    "shutdown_database",
    "find_document",
    "insert_document",
    "save_document",
    "AnganwadiCenter",
    "SettingsDocument",
    "User",
]
