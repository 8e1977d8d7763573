from .settings import Settings, MissingDatabaseURLError, get_settings

__all__ = ["Settings", "MissingDatabaseURLError", "get_settings"]
