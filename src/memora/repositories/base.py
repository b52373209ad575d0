"""Generic async repository over one SQLModel table."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select


ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Data access for a single model.

    Repositories never commit. The service that owns the operation decides
    when the transaction ends, so several repository calls can share one.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        return await self.first_where(self.model.id == id)  # type: ignore[attr-defined]

    async def first_where(self, *criteria: Any) -> ModelType | None:
        """Single row matching criteria, or None."""
        result = await self.session.execute(select(self.model).where(*criteria))
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Stage entity in the session without flushing."""
        self.session.add(entity)

    async def save(self, entity: ModelType) -> ModelType:
        """Stage and flush entity so constraint violations surface immediately.

        Raises:
            IntegrityError: A unique or foreign key constraint was violated.
        """
        self.add(entity)
        await self.session.flush()
        return entity
