"""Find / insert / save primitives for keyed JSON documents."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from .models import SettingsDocument


async def find_document(session: AsyncSession, key: str) -> Optional[SettingsDocument]:
    return await session.get(SettingsDocument, key)


async def insert_document(session: AsyncSession, key: str, data: dict[str, Any]) -> SettingsDocument:
    document = SettingsDocument(key=key, data=data)
    session.add(document)
    await session.flush()
    await session.refresh(document)
    return document


async def save_document(session: AsyncSession, document: SettingsDocument, data: dict[str, Any]) -> SettingsDocument:
    """Replace the stored JSON wholesale.

    A fresh dict is always assigned so the ORM sees the column as changed;
    in-place mutation of ``document.data`` would not be flushed.
    """
    document.data = dict(data)
    await session.flush()
    await session.refresh(document)
    return document


__all__ = ["find_document", "insert_document", "save_document"]
