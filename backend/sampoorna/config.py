"""Application configuration models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


REPO_ROOT = Path(__file__).resolve().parents[2]


class LocationDefaults(BaseModel):
    """Values used to fill blank location fields of the general settings."""

    panchayat_name: str = Field(default="Elikkulam")
    district: str = Field(default="Kottayam")
    state: str = Field(default="Kerala")


class AppSettings(BaseSettings):
    """Top-level settings entry point."""

    model_config = SettingsConfigDict(
        env_prefix="SAMPOORNA_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    database_path: Path = Field(default=REPO_ROOT / "backend" / "data" / "sampoorna.db")
    upload_root: Path = Field(default=REPO_ROOT / "backend" / "data" / "uploads")
    max_logo_bytes: int = Field(default=5 * 1024 * 1024, gt=0, description="Upper bound for logo uploads")
    max_import_bytes: int = Field(default=1024 * 1024, gt=0, description="Upper bound for imported settings files")
    app_version: str = Field(default="1.0.0", description="Reported by system info and settings export")
    log_level: str = Field(default="INFO")
    cors_origins: list[str] = Field(
        default=[
            "http://localhost",
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]
    )
    location_defaults: LocationDefaults = LocationDefaults()


_settings_instance: AppSettings | None = None


def get_settings() -> AppSettings:
    """Singleton accessor for settings."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = AppSettings()
    return _settings_instance


def reload_settings() -> AppSettings:
    """Drop the cached settings and re-read them from the environment."""
    global _settings_instance
    _settings_instance = AppSettings()
    return _settings_instance
