"""Pydantic models for settings documents and center records."""

from .centers import CenterProfile
from .settings import SECTION_NAMES, ModuleToggle, SystemSettings

__all__ = ["CenterProfile", "ModuleToggle", "SECTION_NAMES", "SystemSettings"]
