"""Lookups of referenced directory records (admin users, contacts)."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.directory import DirectoryEntry
from app.application.services.denormalization_resolver import ADMIN_USER, CONTACT
from app.infrastructure.persistence.models.directory import AdminUser, Contact

_MODELS: dict[str, type[AdminUser] | type[Contact]] = {
    ADMIN_USER: AdminUser,
    CONTACT: Contact,
}


class DirectoryRepository:
    """Read-only directory lookups. Implements IDirectoryRepository."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def lookup(self, kind: str, record_id: str) -> DirectoryEntry | None:
        """Fetch one record inside a savepoint.

        A failed lookup rolls back to the savepoint only, so the caller's
        transaction stays usable for the write that follows.
        """
        model = _MODELS.get(kind)
        if model is None:
            raise ValueError(f"Unknown directory kind: {kind}")
        async with self.db.begin_nested():
            record = await self.db.get(model, record_id)
        if record is None:
            return None
        return DirectoryEntry(
            id=record.id,
            full_name=record.full_name,
            phone=record.phone,
            email=record.email,
        )
