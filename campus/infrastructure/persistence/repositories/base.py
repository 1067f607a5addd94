"""Base repository: request-session reads and the store error translation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campus.domain.exceptions import DependencyException
from campus.infrastructure.persistence.database import Base


@asynccontextmanager
async def translate_store_errors() -> AsyncIterator[None]:
    """Map connection-level failures to DependencyException.

    IntegrityError is left for the caller, which knows which constraint
    means what.
    """
    try:
        yield
    except IntegrityError:
        raise
    except (OperationalError, InterfaceError, OSError) as exc:
        raise DependencyException("database", type(exc).__name__) from exc


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Repository bound to one request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        async with translate_store_errors():
            result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()


class TransactionalStore:
    """Store whose every public call runs in its own short, committed transaction."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        async with translate_store_errors():
            async with self.session_factory() as session:
                async with session.begin():
                    yield session
