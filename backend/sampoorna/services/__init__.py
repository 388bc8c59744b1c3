"""Service layer exports."""

from .centers import count_centers, count_users, create_center, delete_center, list_centers, update_center
from .settings_store import SETTINGS_KEY, SettingsStore, get_settings_store, reset_settings_store, shallow_merge
from .system_info import collect_system_info
from .uploads import read_json_upload, save_logo

__all__ = [
    "SETTINGS_KEY",
    "SettingsStore",
    "get_settings_store",
    "reset_settings_store",
    "shallow_merge",
    "list_centers",
    "create_center",
    "update_center",
    "delete_center",
    "count_centers",
    "count_users",
    "collect_system_info",
    "save_logo",
    "read_json_upload",
]
