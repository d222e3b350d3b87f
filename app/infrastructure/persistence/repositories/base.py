"""Base repository: generic CRUD over one ORM model."""

from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, get_all, create, update and delete.

    Subclasses map ORM rows to application DTOs; ORM objects do not
    leave the persistence layer.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        return await self.db.get(self.model, entity_id)

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[ModelType]:
        """Return records with pagination (newest first)."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).order_by(model.created_at.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and load server defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType, fields: dict[str, Any]) -> ModelType:
        """Apply writable fields to an attached record and flush."""
        for key, value in fields.items():
            setattr(obj, key, value)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self.db.flush()

    def _writable(self, fields: dict[str, Any], allowed: Iterable[str]) -> dict[str, Any]:
        """Keep only keys that are writable columns of the model."""
        allowed = set(allowed)
        return {key: value for key, value in fields.items() if key in allowed}
