"""Tests for the settings document model and merge helper."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sampoorna.schemas.settings import SECTION_NAMES, SystemSettings
from sampoorna.services.settings_store import shallow_merge


def test_section_names_are_the_eight_top_level_groups():
    assert SECTION_NAMES == (
        "general",
        "roles",
        "notifications",
        "health",
        "waste",
        "security",
        "reports",
        "maintenance",
    )


def test_empty_document_materializes_every_default():
    doc = SystemSettings().to_document()

    assert doc["general"] == {
        "systemName": "SampoornaAangan",
        "panchayatName": "",
        "district": "",
        "state": "",
        "logo": None,
        "primaryColor": "#e91e63",
        "secondaryColor": "#2196f3",
    }
    assert doc["roles"]["aww"]["permissions"] == ["registration", "attendance", "nutrition", "health"]
    assert doc["notifications"]["emailConfig"]["provider"] == "gmail"
    assert doc["notifications"]["smsConfig"]["provider"] == "twilio"
    assert doc["notifications"]["parentAlerts"]["nutrition"] is False
    assert doc["health"]["growthMonitoringInterval"] == 30
    assert doc["health"]["nutritionStandards"] == {}
    assert doc["waste"]["collectionSchedule"] == {"frequency": "daily", "time": "10:00", "days": []}
    assert doc["waste"]["alertThreshold"] == 24
    assert doc["security"]["sessionTimeout"] == 24
    assert doc["security"]["passwordPolicy"]["minLength"] == 8
    assert doc["reports"]["dashboardMetrics"] == ["attendance", "nutrition", "health", "growth"]
    assert doc["maintenance"]["modules"] == {
        "registration": True,
        "attendance": True,
        "nutrition": True,
        "health": True,
        "waste": True,
        "reports": True,
    }
    assert doc["maintenance"]["cacheSettings"] == {"enabled": True, "duration": 3600}
    assert isinstance(doc["maintenance"]["lastUpdate"], str)


def test_sms_sender_uses_from_key():
    settings = SystemSettings.model_validate({"notifications": {"smsConfig": {"from": "ANGNWD"}}})

    assert settings.notifications.sms_config.sender == "ANGNWD"
    assert settings.to_document()["notifications"]["smsConfig"]["from"] == "ANGNWD"


@pytest.mark.parametrize(
    "document",
    [
        {"notifications": {"emailConfig": {"provider": "unknown-provider"}}},
        {"reports": {"defaultFormat": "docx"}},
        {"security": {"backupFrequency": "hourly"}},
        {"waste": {"alertThreshold": "soon"}},
        {"waste": {"collectionSchedule": {"days": ["funday"]}}},
    ],
)
def test_out_of_set_values_are_rejected(document):
    with pytest.raises(ValidationError):
        SystemSettings.model_validate(document)


def test_unknown_keys_in_typed_sections_are_dropped_but_open_maps_keep_them():
    settings = SystemSettings.model_validate(
        {
            "general": {"motto": "ignored"},
            "roles": {"supervisor": {"name": "Supervisor", "permissions": ["reports"]}},
            "health": {"nutritionStandards": {"calories": {"3-6y": 1350}}},
        }
    )
    doc = settings.to_document()

    assert "motto" not in doc["general"]
    assert doc["roles"] == {"supervisor": {"name": "Supervisor", "permissions": ["reports"]}}
    assert doc["health"]["nutritionStandards"] == {"calories": {"3-6y": 1350}}


def test_shallow_merge_replaces_touched_keys_wholesale():
    current = {"emailConfig": {"provider": "outlook", "port": 587}, "parentAlerts": {"health": False}}

    merged = shallow_merge(current, {"emailConfig": {"host": "smtp.example.org"}})

    assert merged == {"emailConfig": {"host": "smtp.example.org"}, "parentAlerts": {"health": False}}
    assert current["emailConfig"] == {"provider": "outlook", "port": 587}
