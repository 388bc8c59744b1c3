"""Anganwadi center management utilities."""

from __future__ import annotations

import logging
import secrets
import time
from typing import Any, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..errors import NotFoundError, ValidationError
from ..schemas.centers import CenterProfile
from ..storage import AnganwadiCenter, User, get_db_manager
from .settings_store import shallow_merge

logger = logging.getLogger(__name__)


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def generate_center_code(ward_number: int, suffix: Optional[int] = None) -> str:
    """``AWC`` + two-digit ward + four digits, by default the tail of the epoch milliseconds."""
    if suffix is None:
        suffix = _epoch_ms()
    return f"AWC{ward_number:02d}{suffix % 10_000:04d}"


def _wire_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    aliases = {name: field.alias or name for name, field in CenterProfile.model_fields.items()}
    return {aliases.get(key, key): value for key, value in payload.items()}


def _validate_profile(data: Mapping[str, Any]) -> CenterProfile:
    try:
        return CenterProfile.model_validate(dict(data))
    except PydanticValidationError as exc:
        raise ValidationError("Invalid center", exc.errors(include_url=False, include_context=False)) from exc


def serialize_worker(user: Optional[User]) -> Optional[dict[str, object]]:
    if user is None:
        return None
    return {"id": user.id, "name": user.name, "email": user.email}


def serialize_center(center: AnganwadiCenter) -> dict[str, object]:
    return {
        **center.data,
        "id": center.id,
        "name": center.name,
        "code": center.code,
        "status": center.status,
        "assignedWorker": serialize_worker(center.assigned_worker),
        "createdAt": center.created_at.isoformat(),
        "updatedAt": center.updated_at.isoformat(),
    }


async def _ensure_worker_exists(session: AsyncSession, worker_id: Optional[int]) -> None:
    if worker_id is not None and await session.get(User, worker_id) is None:
        raise ValidationError("Invalid center", f"Assigned worker {worker_id} does not exist")


async def _code_taken(session: AsyncSession, code: str, exclude_id: Optional[int] = None) -> bool:
    stmt = select(AnganwadiCenter.id).where(AnganwadiCenter.code == code)
    if exclude_id is not None:
        stmt = stmt.where(AnganwadiCenter.id != exclude_id)
    return (await session.execute(stmt)).first() is not None


async def _ensure_code_free(session: AsyncSession, code: str, exclude_id: Optional[int] = None) -> None:
    if await _code_taken(session, code, exclude_id):
        raise ValidationError("Invalid center", f"Center code '{code}' is already in use")


async def _free_generated_code(session: AsyncSession, ward_number: int, attempts: int = 5) -> str:
    code = generate_center_code(ward_number)
    for _ in range(attempts):
        if not await _code_taken(session, code):
            return code
        logger.debug("Generated center code %s is taken; retrying", code)
        code = generate_center_code(ward_number, secrets.randbelow(10_000))
    raise ValidationError("Invalid center", f"Could not generate a free code for ward {ward_number}")


def _apply_profile(center: AnganwadiCenter, profile: CenterProfile) -> None:
    center.name = profile.name
    center.code = profile.code or center.code
    center.status = profile.status
    center.assigned_worker_id = profile.assigned_worker
    center.data = profile.model_dump(mode="json", by_alias=True, exclude={"name", "code", "status"})


async def _load_center(session: AsyncSession, center_id: int) -> Optional[AnganwadiCenter]:
    center = await session.get(AnganwadiCenter, center_id)
    if center is not None:
        await session.refresh(center)
        await session.refresh(center, attribute_names=["assigned_worker"])
    return center


async def list_centers() -> list[dict[str, object]]:
    db = await get_db_manager()
    async with db.session() as session:
        result = await session.execute(
            select(AnganwadiCenter)
            .options(selectinload(AnganwadiCenter.assigned_worker))
            .order_by(AnganwadiCenter.name)
        )
        centers = result.scalars().all()
        return [serialize_center(center) for center in centers]


async def create_center(payload: Mapping[str, Any]) -> dict[str, object]:
    profile = _validate_profile(payload)
    db = await get_db_manager()
    async with db.session() as session:
        if profile.code:
            code = profile.code
            await _ensure_code_free(session, code)
        else:
            code = await _free_generated_code(session, profile.ward.number)
        await _ensure_worker_exists(session, profile.assigned_worker)
        center = AnganwadiCenter(code=code)
        _apply_profile(center, profile)
        session.add(center)
        await session.flush()
        loaded = await _load_center(session, center.id)
        assert loaded is not None
        logger.info("Created center %s (%s)", loaded.code, loaded.name)
        return serialize_center(loaded)


async def update_center(center_id: int, payload: Mapping[str, Any]) -> dict[str, object]:
    """Shallow-merge ``payload`` into the stored center and re-validate it."""
    db = await get_db_manager()
    async with db.session() as session:
        center = await _load_center(session, center_id)
        if center is None:
            raise NotFoundError("Anganwadi center not found")
        current = {**center.data, "name": center.name, "code": center.code, "status": center.status}
        profile = _validate_profile(shallow_merge(current, _wire_keys(payload)))
        if profile.code and profile.code != center.code:
            await _ensure_code_free(session, profile.code, exclude_id=center.id)
        await _ensure_worker_exists(session, profile.assigned_worker)
        _apply_profile(center, profile)
        await session.flush()
        loaded = await _load_center(session, center.id)
        assert loaded is not None
        return serialize_center(loaded)


async def delete_center(center_id: int) -> None:
    db = await get_db_manager()
    async with db.session() as session:
        center = await session.get(AnganwadiCenter, center_id)
        if center is None:
            raise NotFoundError("Anganwadi center not found")
        await session.delete(center)
        logger.info("Deleted center %s", center.code)


async def count_centers() -> int:
    db = await get_db_manager()
    async with db.session() as session:
        return int(await session.scalar(select(func.count(AnganwadiCenter.id))) or 0)


async def count_users() -> int:
    db = await get_db_manager()
    async with db.session() as session:
        return int(await session.scalar(select(func.count(User.id))) or 0)
