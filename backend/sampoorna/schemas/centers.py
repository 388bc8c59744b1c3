"""Request and record models for Anganwadi centers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import Field, field_validator

from .settings import SettingsModel, Weekday


Facility = Literal[
    "kitchen",
    "playground",
    "toilet",
    "water_supply",
    "electricity",
    "medical_kit",
    "weighing_scale",
    "height_chart",
    "storage_room",
]
CenterService = Literal[
    "supplementary_nutrition",
    "immunization",
    "health_checkup",
    "pre_school_education",
    "nutrition_health_education",
    "adolescent_programs",
]
CenterStatus = Literal["active", "inactive", "maintenance", "closed"]


class Ward(SettingsModel):
    number: int
    name: str

    @field_validator("name")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()


class Address(SettingsModel):
    street: Optional[str] = None
    locality: Optional[str] = None
    pincode: Optional[str] = None
    district: Optional[str] = None
    state: Optional[str] = None


class Contact(SettingsModel):
    phone: Optional[str] = None
    email: Optional[str] = None


class Capacity(SettingsModel):
    children: int = 50
    adolescents: int = 25
    pregnant_women: int = 15


class Location(SettingsModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class Inspection(SettingsModel):
    date: Optional[datetime] = None
    inspector: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    notes: Optional[str] = None


class Statistics(SettingsModel):
    total_beneficiaries: int = Field(default=0, ge=0)
    active_children: int = Field(default=0, ge=0)
    active_adolescents: int = Field(default=0, ge=0)
    pregnant_women: int = Field(default=0, ge=0)


class OperatingHours(SettingsModel):
    start: str = "09:00"
    end: str = "16:00"
    working_days: list[Weekday] = Field(default_factory=list)


class CenterProfile(SettingsModel):
    """Full center record as accepted on create and update."""

    name: str = Field(min_length=1)
    code: Optional[str] = None
    ward: Ward
    address: Address = Field(default_factory=Address)
    contact: Contact = Field(default_factory=Contact)
    assigned_worker: Optional[int] = None
    capacity: Capacity = Field(default_factory=Capacity)
    facilities: list[Facility] = Field(default_factory=list)
    location: Location = Field(default_factory=Location)
    status: CenterStatus = "active"
    established_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_inspection: Optional[Inspection] = None
    operating_hours: OperatingHours = Field(default_factory=OperatingHours)
    services: list[CenterService] = Field(default_factory=list)
    statistics: Statistics = Field(default_factory=Statistics)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("code")
    @classmethod
    def _normalize_code(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().upper()
        return value or None


__all__ = ["CenterProfile", "CenterStatus", "Facility", "CenterService"]
