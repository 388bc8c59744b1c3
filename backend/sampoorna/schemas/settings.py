"""Typed model of the system settings document.

The document is exchanged as camelCase JSON. Each section model fills in its
own defaults, so validating ``{}`` yields the full default document. Fields
the administrators treat as free-form (``roles``, ``nutritionStandards``,
``maintenance.modules``) are open maps; everything else is typed and enum
fields reject values outside their literal set.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


Weekday = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
Frequency = Literal["daily", "weekly", "monthly"]
DashboardMetric = Literal["attendance", "nutrition", "health", "growth", "waste", "users"]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SettingsModel(BaseModel):
    """Base for every settings model: camelCase aliases, unknown keys dropped."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _default_roles() -> dict[str, Any]:
    return {
        "admin": {"name": "Admin", "permissions": ["all"]},
        "aww": {"name": "Anganwadi Worker", "permissions": ["registration", "attendance", "nutrition", "health"]},
        "asha": {"name": "ASHA Worker", "permissions": ["health", "reports"]},
        "parent": {"name": "Parent", "permissions": ["view_child", "attendance"]},
        "adolescent": {"name": "Adolescent", "permissions": ["health", "nutrition"]},
    }


def _default_modules() -> dict[str, bool]:
    return {
        "registration": True,
        "attendance": True,
        "nutrition": True,
        "health": True,
        "waste": True,
        "reports": True,
    }


class GeneralSettings(SettingsModel):
    system_name: str = "SampoornaAangan"
    panchayat_name: str = ""
    district: str = ""
    state: str = ""
    logo: Optional[str] = None
    primary_color: str = "#e91e63"
    secondary_color: str = "#2196f3"


class EmailConfig(SettingsModel):
    provider: Literal["gmail", "outlook", "custom"] = "gmail"
    host: Optional[str] = None
    port: Optional[int] = None
    username: Optional[str] = None
    password: Optional[str] = None
    secure: bool = True


class SmsConfig(SettingsModel):
    provider: Literal["twilio", "aws", "custom"] = "twilio"
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    sender: Optional[str] = Field(default=None, alias="from")


class ParentAlerts(SettingsModel):
    attendance: bool = True
    health: bool = True
    nutrition: bool = False
    vaccination: bool = True


class WorkerAlerts(SettingsModel):
    low_attendance: bool = True
    health_screening: bool = True
    stock_alert: bool = True
    reports: bool = False


class NotificationSettings(SettingsModel):
    email_enabled: bool = True
    sms_enabled: bool = False
    email_config: EmailConfig = Field(default_factory=EmailConfig)
    sms_config: SmsConfig = Field(default_factory=SmsConfig)
    parent_alerts: ParentAlerts = Field(default_factory=ParentAlerts)
    worker_alerts: WorkerAlerts = Field(default_factory=WorkerAlerts)


class Vaccination(SettingsModel):
    name: Optional[str] = None
    age_in_months: Optional[int] = None
    description: Optional[str] = None


class HealthSettings(SettingsModel):
    growth_monitoring_interval: int = 30  # days
    vaccination_reminders: bool = True
    nutrition_menu_rotation: Literal["weekly", "monthly", "seasonal"] = "weekly"
    health_screening_frequency: Literal["weekly", "monthly", "quarterly"] = "monthly"
    default_vaccinations: list[Vaccination] = Field(default_factory=list)
    nutrition_standards: dict[str, Any] = Field(default_factory=dict)


class CollectionSchedule(SettingsModel):
    frequency: Frequency = "daily"
    time: str = "10:00"
    days: list[Weekday] = Field(default_factory=list)


class SanitationWorker(SettingsModel):
    name: Optional[str] = None
    contact: Optional[str] = None
    area: Optional[str] = None
    active: bool = True


class WasteCategory(SettingsModel):
    name: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None


class WasteSettings(SettingsModel):
    collection_schedule: CollectionSchedule = Field(default_factory=CollectionSchedule)
    sanitation_workers: list[SanitationWorker] = Field(default_factory=list)
    alert_threshold: float = 24  # hours
    waste_categories: list[WasteCategory] = Field(default_factory=list)


class PasswordPolicy(SettingsModel):
    min_length: int = 8
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_numbers: bool = True
    require_special_chars: bool = False


class SecuritySettings(SettingsModel):
    session_timeout: int = 24  # hours
    password_expiry: int = 90  # days
    password_policy: PasswordPolicy = Field(default_factory=PasswordPolicy)
    backup_frequency: Frequency = "weekly"
    data_retention: int = 365  # days
    encryption_enabled: bool = True
    two_factor_auth: bool = False


class ScheduledReport(SettingsModel):
    name: Optional[str] = None
    type: Optional[str] = None
    frequency: Optional[Literal["daily", "weekly", "monthly", "yearly"]] = None
    recipients: list[str] = Field(default_factory=list)
    active: bool = True


class DataVisualization(SettingsModel):
    charts: bool = True
    graphs: bool = True
    animations: bool = True


class ReportSettings(SettingsModel):
    auto_generate: bool = True
    default_format: Literal["pdf", "excel", "csv"] = "pdf"
    scheduled_reports: list[ScheduledReport] = Field(default_factory=list)
    dashboard_metrics: list[DashboardMetric] = Field(
        default_factory=lambda: ["attendance", "nutrition", "health", "growth"]
    )
    data_visualization: DataVisualization = Field(default_factory=DataVisualization)


class CacheSettings(SettingsModel):
    enabled: bool = True
    duration: int = 3600  # seconds


class MaintenanceSettings(SettingsModel):
    modules: dict[str, bool] = Field(default_factory=_default_modules)
    version: str = "1.0.0"
    last_update: datetime = Field(default_factory=_now)
    maintenance_mode: bool = False
    debug_mode: bool = False
    cache_settings: CacheSettings = Field(default_factory=CacheSettings)


class SystemSettings(SettingsModel):
    """The singleton configuration document."""

    general: GeneralSettings = Field(default_factory=GeneralSettings)
    roles: dict[str, Any] = Field(default_factory=_default_roles)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    health: HealthSettings = Field(default_factory=HealthSettings)
    waste: WasteSettings = Field(default_factory=WasteSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    reports: ReportSettings = Field(default_factory=ReportSettings)
    maintenance: MaintenanceSettings = Field(default_factory=MaintenanceSettings)

    def to_document(self) -> dict[str, Any]:
        """Serialize to the JSON-safe camelCase form that is persisted."""
        return self.model_dump(mode="json", by_alias=True)


SECTION_NAMES: tuple[str, ...] = tuple(SystemSettings.model_fields)


class ModuleToggle(BaseModel):
    enabled: bool


__all__ = [
    "SECTION_NAMES",
    "SystemSettings",
    "GeneralSettings",
    "NotificationSettings",
    "HealthSettings",
    "WasteSettings",
    "SecuritySettings",
    "ReportSettings",
    "MaintenanceSettings",
    "ModuleToggle",
]
