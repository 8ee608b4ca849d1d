"""Shared plumbing for the data access services."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any, ClassVar

import structlog
from pydantic import BaseModel
from sqlalchemy import Table, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_records.core.exceptions import NotFoundException, translate_integrity_error

logger = structlog.get_logger(__name__)


def to_row_values(data: BaseModel, **overrides: Any) -> dict[str, Any]:
    """Dump a schema into column values, unwrapping enums.

    ``None`` fields are left out so the column falls back to its server default.
    """
    values = data.model_dump(exclude_none=True)
    values.update(overrides)
    return {
        key: value.value if isinstance(value, Enum) else value for key, value in values.items()
    }


class BaseService:
    """Base class holding the session and the write/commit protocol."""

    def __init__(self, db: AsyncSession, autocommit: bool = True):
        """Initialize service with database session.

        With ``autocommit`` off, writes are only flushed and the caller owns
        the commit.
        """
        self.db = db
        self.autocommit = autocommit

    @asynccontextmanager
    async def writing(self, context: str) -> AsyncIterator[None]:
        """
        Run a block of writes as one unit and commit it.

        Integrity errors roll the session back and surface as application
        exceptions. The rollback discards the caller's whole transaction
        when ``autocommit`` is off.

        Args:
            context: Short description used in logs and error messages

        Raises:
            AppException: If the store rejects the change
        """
        try:
            yield
            if self.autocommit:
                await self.db.commit()
            else:
                await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning("integrity_error", context=context, error=str(e.orig))
            raise translate_integrity_error(e, context) from e
        except Exception:
            await self.db.rollback()
            raise


class CatalogService(BaseService):
    """CRUD over a single table keyed by an integer ``id``."""

    table: ClassVar[Table]
    response_model: ClassVar[type[BaseModel]]
    entity_name: ClassVar[str]

    def not_found(self, entity_id: int) -> NotFoundException:
        """Build the exception for a missing row."""
        label = self.entity_name.replace("_", " ").capitalize()
        return NotFoundException(f"{label} {entity_id} not found")

    async def create(self, data: BaseModel) -> Any:
        """Insert a row and return it."""
        stmt = self.table.insert().values(**to_row_values(data)).returning(self.table)
        async with self.writing(f"create {self.entity_name}"):
            result = await self.db.execute(stmt)
            row = result.mappings().one()

        logger.info(f"{self.entity_name}_created", id=row["id"])
        return self.response_model.model_validate(dict(row))

    async def get(self, entity_id: int) -> Any:
        """
        Get a row by ID.

        Raises:
            NotFoundException: If the row does not exist
        """
        result = await self.db.execute(select(self.table).where(self.table.c.id == entity_id))
        row = result.mappings().first()

        if not row:
            raise self.not_found(entity_id)

        return self.response_model.model_validate(dict(row))

    async def list_all(self, skip: int = 0, limit: int = 100) -> list[Any]:
        """List rows ordered by ID."""
        stmt = select(self.table).order_by(self.table.c.id).offset(skip).limit(limit)
        result = await self.db.execute(stmt)
        return [self.response_model.model_validate(dict(row)) for row in result.mappings()]

    async def count(self) -> int:
        """Count rows in the table."""
        result = await self.db.execute(select(func.count()).select_from(self.table))
        return result.scalar() or 0

    async def delete(self, entity_id: int) -> None:
        """
        Delete a row by ID.

        Referential actions declared on the schema apply: dependants are
        cascaded, nulled, or block the delete.

        Raises:
            NotFoundException: If the row does not exist
            ReferenceViolationException: If a restricting reference blocks the delete
        """
        stmt = delete(self.table).where(self.table.c.id == entity_id)
        async with self.writing(f"delete {self.entity_name} {entity_id}"):
            result = await self.db.execute(stmt)
            if result.rowcount == 0:
                raise self.not_found(entity_id)

        logger.info(f"{self.entity_name}_deleted", id=entity_id)
