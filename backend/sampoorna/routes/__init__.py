"""Route modules for the backend."""

from . import centers, settings

__all__ = ["centers", "settings"]
