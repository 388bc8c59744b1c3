"""Error taxonomy shared by services and the HTTP layer."""

from __future__ import annotations

from typing import Any


class SettingsError(Exception):
    """Base class for failures surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str, detail: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail if detail is not None else message


class NotFoundError(SettingsError):
    """A document or section required by the operation does not exist."""

    status_code = 404


class ValidationError(SettingsError):
    """A value is outside its declared type or allowed set."""

    status_code = 400


class StorageError(SettingsError):
    """The database layer failed; the original exception is chained."""

    status_code = 500


__all__ = ["SettingsError", "NotFoundError", "ValidationError", "StorageError"]
