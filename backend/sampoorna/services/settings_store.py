"""Lifecycle of the system settings singleton.

There is exactly one settings document per deployment, stored under
``SETTINGS_KEY``. Reading the whole document creates it with defaults when
missing; section-level reads and writes do not, and fail with
:class:`NotFoundError` instead. Every write validates the merged result
against :class:`SystemSettings`, stamps ``maintenance.lastUpdate`` and
persists the whole document in one go.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from ..config import get_settings
from ..errors import NotFoundError, ValidationError
from ..schemas.settings import SECTION_NAMES, SystemSettings
from ..storage import DatabaseManager, SettingsDocument, find_document, get_db_manager, insert_document, save_document

logger = logging.getLogger(__name__)

SETTINGS_KEY = "system"

# Keys that identify a stored document rather than describe settings.
IDENTITY_FIELDS = frozenset({"_id", "__v", "id", "key", "createdAt", "updatedAt"})


def shallow_merge(current: Mapping[str, Any], partial: Mapping[str, Any]) -> dict[str, Any]:
    """Overwrite top-level keys of ``current`` with those of ``partial``.

    Nested values under a key present in ``partial`` are replaced wholesale,
    never merged recursively.
    """
    return {**current, **partial}


def wire_keys(section: str, partial: Mapping[str, Any]) -> dict[str, Any]:
    """Rename attribute-style keys of a typed section to their stored camelCase form."""
    fields = getattr(SystemSettings.model_fields[section].annotation, "model_fields", None)
    if not fields:
        return dict(partial)
    aliases = {name: field.alias or name for name, field in fields.items()}
    return {aliases.get(key, key): value for key, value in partial.items()}


def _validate(document: Mapping[str, Any]) -> SystemSettings:
    try:
        return SystemSettings.model_validate(dict(document))
    except PydanticValidationError as exc:
        raise ValidationError("Invalid settings", exc.errors(include_url=False, include_context=False)) from exc


def _stamp(settings: SystemSettings, previous: Optional[datetime] = None) -> SystemSettings:
    now = datetime.now(timezone.utc)
    if previous is not None and previous > now:
        now = previous
    settings.maintenance.last_update = now
    return settings


def _previous_stamp(document: Optional[SettingsDocument]) -> Optional[datetime]:
    if document is None:
        return None
    try:
        return SystemSettings.model_validate(document.data).maintenance.last_update
    except PydanticValidationError:
        return None


def _require_section(name: str) -> None:
    if name not in SECTION_NAMES:
        raise NotFoundError("Settings section not found", f"Unknown section '{name}'")


class SettingsStore:
    """Reads and writes the singleton settings document."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    @property
    def db(self) -> DatabaseManager:
        return self._db

    async def get_or_create(self) -> dict[str, Any]:
        """Return the whole document, materialising defaults on first access."""
        async with self._lock:
            async with self._db.session() as session:
                document = await find_document(session, SETTINGS_KEY)
                if document is None:
                    defaults = SystemSettings().to_document()
                    document = await insert_document(session, SETTINGS_KEY, defaults)
                    logger.info("Created default system settings")
                return dict(document.data)

    async def find(self) -> Optional[dict[str, Any]]:
        """Return the whole document, or ``None`` if it was never created."""
        async with self._db.session() as session:
            document = await find_document(session, SETTINGS_KEY)
            return dict(document.data) if document is not None else None

    async def replace_all(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Replace every section supplied in ``data``; others are kept."""
        sections = {name: data[name] for name in SECTION_NAMES if name in data}
        async with self._lock:
            async with self._db.session() as session:
                document = await find_document(session, SETTINGS_KEY)
                if document is None:
                    settings = _stamp(_validate(sections))
                    document = await insert_document(session, SETTINGS_KEY, settings.to_document())
                else:
                    previous = _previous_stamp(document)
                    settings = _stamp(_validate(shallow_merge(document.data, sections)), previous)
                    document = await save_document(session, document, settings.to_document())
                logger.info("Saved system settings (sections: %s)", ", ".join(sections) or "none")
                return dict(document.data)

    async def get_section(self, name: str) -> Any:
        _require_section(name)
        document = await self.find()
        if document is None:
            raise NotFoundError("Settings section not found", "Settings have not been created yet")
        return document.get(name)

    async def replace_section(self, name: str, partial: Mapping[str, Any]) -> Any:
        """Shallow-merge ``partial`` into section ``name`` and return the new section."""
        _require_section(name)
        if not isinstance(partial, Mapping):
            raise ValidationError("Invalid settings", f"Section '{name}' must be an object")
        async with self._lock:
            async with self._db.session() as session:
                document = await find_document(session, SETTINGS_KEY)
                if document is None:
                    raise NotFoundError("Settings not found", "Settings have not been created yet")
                current = document.data.get(name) or {}
                merged = dict(document.data)
                merged[name] = shallow_merge(current, wire_keys(name, partial))
                settings = _stamp(_validate(merged), _previous_stamp(document))
                document = await save_document(session, document, settings.to_document())
                logger.info("Updated %s settings (keys: %s)", name, ", ".join(partial))
                return document.data[name]

    async def set_module_flag(self, module_id: str, enabled: bool) -> dict[str, bool]:
        """Enable or disable a module by id; unknown ids are added."""
        async with self._lock:
            async with self._db.session() as session:
                document = await find_document(session, SETTINGS_KEY)
                if document is None:
                    raise NotFoundError("Settings not found", "Settings have not been created yet")
                settings = _stamp(_validate(document.data), _previous_stamp(document))
                settings.maintenance.modules[module_id] = enabled
                document = await save_document(session, document, settings.to_document())
                logger.info("Module %s %s", module_id, "enabled" if enabled else "disabled")
                return dict(document.data["maintenance"]["modules"])

    async def set_logo(self, logo_path: str) -> Optional[dict[str, Any]]:
        """Point ``general.logo`` at an uploaded file; no-op if nothing is stored yet."""
        async with self._lock:
            async with self._db.session() as session:
                document = await find_document(session, SETTINGS_KEY)
                if document is None:
                    logger.warning("Logo %s uploaded before settings exist; not recorded", logo_path)
                    return None
                settings = _stamp(_validate(document.data), _previous_stamp(document))
                settings.general.logo = logo_path
                document = await save_document(session, document, settings.to_document())
                return dict(document.data)

    async def fill_location_defaults(self, panchayat_name: str, district: str, state: str) -> dict[str, Any]:
        """Fill blank general location fields, creating the document if needed."""
        async with self._lock:
            async with self._db.session() as session:
                document = await find_document(session, SETTINGS_KEY)
                settings = SystemSettings() if document is None else _validate(document.data)
                general = settings.general
                if not general.panchayat_name:
                    general.panchayat_name = panchayat_name
                if not general.district:
                    general.district = district
                if not general.state:
                    general.state = state
                _stamp(settings, _previous_stamp(document))
                if document is None:
                    document = await insert_document(session, SETTINGS_KEY, settings.to_document())
                else:
                    document = await save_document(session, document, settings.to_document())
                return dict(document.data)

    async def export(self) -> dict[str, Any]:
        """Build the ``{exportDate, version, settings}`` envelope."""
        async with self._db.session() as session:
            document = await find_document(session, SETTINGS_KEY)
            if document is None:
                raise NotFoundError("No settings found to export")
            settings = {
                "_id": document.key,
                **document.data,
                "createdAt": document.created_at.isoformat(),
                "updatedAt": document.updated_at.isoformat(),
            }
        return {
            "exportDate": datetime.now(timezone.utc).isoformat(),
            "version": get_settings().app_version,
            "settings": settings,
        }

    async def import_envelope(self, envelope: Any) -> dict[str, Any]:
        """Apply an exported envelope, ignoring storage identity fields."""
        if not isinstance(envelope, Mapping) or not isinstance(envelope.get("settings"), Mapping):
            raise ValidationError("Invalid settings file format", "Expected an object with a 'settings' key")
        data = {key: value for key, value in envelope["settings"].items() if key not in IDENTITY_FIELDS}
        return await self.replace_all(data)


_settings_store: SettingsStore | None = None


async def get_settings_store() -> SettingsStore:
    global _settings_store
    db = await get_db_manager()
    if _settings_store is None or _settings_store.db is not db:
        _settings_store = SettingsStore(db)
    return _settings_store


def reset_settings_store() -> None:
    global _settings_store
    _settings_store = None
