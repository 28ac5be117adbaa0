"""Base repository: versioned create/update/delete for frozen domain entities."""

from dataclasses import replace
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from casework.domain.exceptions import (
    ConflictException,
    DuplicateRecordException,
    ResourceNotFoundException,
)
from casework.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)
EntityType = TypeVar("EntityType")


class VersionedRepository(Generic[ModelType, EntityType]):
    """Maps ORM rows to domain entities and enforces optimistic concurrency.

    update() issues UPDATE ... WHERE id = :id AND version = :expected and
    treats a zero rowcount as a lost race; create() maps unique-index
    violations to DuplicateRecordException. Subclasses provide the two mappers.
    """

    resource_type = "record"

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    def _to_entity(self, obj: ModelType) -> EntityType:
        raise NotImplementedError

    def _to_values(self, entity: EntityType) -> dict[str, Any]:
        raise NotImplementedError

    async def _get_orm(self, entity_id: str) -> ModelType | None:
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def _list(self, *criteria: Any, order_by: Any = None) -> list[EntityType]:
        model: Any = self.model
        stmt = select(self.model).where(*criteria).order_by(
            order_by if order_by is not None else model.created_at
        )
        result = await self.db.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_by_id(self, entity_id: str) -> EntityType | None:
        obj = await self._get_orm(entity_id)
        return self._to_entity(obj) if obj else None

    async def create(self, entity: EntityType) -> EntityType:
        """Insert inside a savepoint so a unique-key loss leaves the transaction usable."""
        obj = self.model(**self._to_values(entity), version=1)
        try:
            async with self.db.begin_nested():
                self.db.add(obj)
                await self.db.flush()
        except IntegrityError as e:
            raise DuplicateRecordException(self.resource_type, getattr(entity, "id")) from e
        return replace(entity, version=1)  # type: ignore[type-var]

    async def update(self, entity: EntityType, expected_version: int) -> EntityType:
        model: Any = self.model
        entity_id: str = getattr(entity, "id")
        values = self._to_values(entity)
        values.pop("id")
        stmt = (
            update(self.model)
            .where(model.id == entity_id, model.version == expected_version)
            .values(**values, version=expected_version + 1)
        )
        result = await self.db.execute(stmt)
        if result.rowcount != 1:
            if await self._get_orm(entity_id) is None:
                raise ResourceNotFoundException(self.resource_type, entity_id)
            raise ConflictException(self.resource_type, entity_id, expected_version)
        return replace(entity, version=expected_version + 1)  # type: ignore[type-var]

    async def delete(self, entity_id: str) -> bool:
        model: Any = self.model
        result = await self.db.execute(delete(self.model).where(model.id == entity_id))
        return result.rowcount == 1
