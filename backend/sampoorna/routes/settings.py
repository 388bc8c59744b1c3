"""Endpoints for reading and updating the system settings document."""

from __future__ import annotations

import json
from datetime import date
from typing import Any

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import JSONResponse

from ..config import get_settings
from ..errors import ValidationError
from ..schemas.settings import ModuleToggle
from ..services.settings_store import get_settings_store
from ..services.system_info import collect_system_info
from ..services.uploads import read_json_upload, save_logo


router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("")
async def read_settings() -> dict[str, Any]:
    """Return the whole settings document, creating defaults on first access."""

    store = await get_settings_store()
    return await store.get_or_create()


@router.put("")
async def save_settings(payload: dict[str, Any]) -> dict[str, Any]:
    store = await get_settings_store()
    settings = await store.replace_all(payload)
    return {"success": True, "message": "Settings saved successfully", "data": settings}


@router.get("/export")
async def export_settings() -> JSONResponse:
    store = await get_settings_store()
    envelope = await store.export()
    filename = f"system-settings-{date.today().isoformat()}.json"
    return JSONResponse(envelope, headers={"Content-Disposition": f"attachment; filename={filename}"})


@router.post("/import")
async def import_settings(settings: UploadFile | None = File(default=None)) -> dict[str, Any]:
    if settings is None:
        raise ValidationError("No settings file uploaded")

    raw = await read_json_upload(settings, get_settings().max_import_bytes)
    try:
        envelope = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValidationError("Invalid settings file format", str(exc)) from exc

    store = await get_settings_store()
    imported = await store.import_envelope(envelope)
    return {"success": True, "message": "Settings imported successfully", "data": imported}


@router.post("/upload-logo")
async def upload_logo(logo: UploadFile | None = File(default=None)) -> dict[str, Any]:
    if logo is None:
        raise ValidationError("No logo file uploaded")

    logo_path = await save_logo(logo)
    store = await get_settings_store()
    await store.set_logo(logo_path)
    return {"success": True, "message": "Logo uploaded successfully", "data": {"logoPath": logo_path}}


@router.get("/system-info")
async def system_info() -> dict[str, Any]:
    return {"success": True, "data": await collect_system_info()}


@router.put("/maintenance/modules/{module_id}")
async def toggle_module(module_id: str, payload: ModuleToggle) -> dict[str, Any]:
    store = await get_settings_store()
    modules = await store.set_module_flag(module_id, payload.enabled)
    state = "enabled" if payload.enabled else "disabled"
    return {"success": True, "message": f"Module {module_id} {state} successfully", "data": modules}


@router.get("/{section}")
async def read_section(section: str) -> dict[str, Any]:
    store = await get_settings_store()
    return {"success": True, "data": await store.get_section(section)}


@router.put("/{section}")
async def update_section(section: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Shallow-merge the payload into one section."""

    store = await get_settings_store()
    data = await store.replace_section(section, payload)
    return {"success": True, "message": f"{section} settings updated successfully", "data": data}
