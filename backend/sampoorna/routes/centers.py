"""Anganwadi center management endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status

from ..services import centers as center_service

router = APIRouter(prefix="/api/centers", tags=["centers"])


@router.get("")
async def list_centers() -> dict[str, Any]:
    """Return all centers ordered by name."""

    return {"success": True, "data": await center_service.list_centers()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_center(payload: dict[str, Any]) -> dict[str, Any]:
    center = await center_service.create_center(payload)
    return {"success": True, "message": "Anganwadi center created successfully", "data": center}


@router.put("/{center_id}")
async def update_center(center_id: int, payload: dict[str, Any]) -> dict[str, Any]:
    center = await center_service.update_center(center_id, payload)
    return {"success": True, "message": "Anganwadi center updated successfully", "data": center}


@router.delete("/{center_id}")
async def remove_center(center_id: int) -> dict[str, Any]:
    await center_service.delete_center(center_id)
    return {"success": True, "message": "Anganwadi center deleted successfully"}
