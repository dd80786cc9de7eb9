"""Core app configuration, database, security and error taxonomy."""

from app.core.config import get_settings, settings
from app.core.database import StoreStatus, check_store, get_db

__all__ = ["get_settings", "settings", "get_db", "check_store", "StoreStatus"]
