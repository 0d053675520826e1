from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.errors import BoardError, ConstraintViolation, Internal, NotFound
from taskboard.kinds import EntityKind, spec_for
from taskboard.models import Base

logger = logging.getLogger(__name__)


class EntityStore:
  """Typed CRUD over the five entity kinds.

  Mutations are staged on the wrapped session and become visible to other
  readers only when the surrounding :meth:`transaction` commits.
  """

  def __init__(self, db: AsyncSession) -> None:
    self.db = db

  def _where(self, kind: EntityKind, filters: dict[str, Any]) -> list[Any]:
    model = spec_for(kind).model
    clauses = []
    for field, value in filters.items():
      col = getattr(model, field)
      if isinstance(value, (list, tuple, set, frozenset)):
        clauses.append(col.in_(list(value)))
      else:
        clauses.append(col == value)
    return clauses

  async def find(self, kind: EntityKind, entity_id: str, *, for_update: bool = False) -> Base | None:
    """Load one row. With ``for_update`` the row is re-read from the database
    and stays locked until the current transaction ends."""
    model = spec_for(kind).model
    stmt = select(model).where(model.id == entity_id)
    if for_update:
      stmt = stmt.with_for_update().execution_options(populate_existing=True)
    res = await self.db.execute(stmt)
    return res.scalar_one_or_none()

  async def get(
    self,
    kind: EntityKind,
    entity_id: str,
    message: str | None = None,
    *,
    for_update: bool = False,
  ) -> Base:
    entity = await self.find(kind, entity_id, for_update=for_update)
    if entity is None:
      raise NotFound(message or f"{spec_for(kind).label} could not be found")
    return entity

  async def find_many(self, kind: EntityKind, **filters: Any) -> list[Base]:
    model = spec_for(kind).model
    res = await self.db.execute(select(model).where(*self._where(kind, filters)))
    return list(res.scalars().all())

  async def insert(self, kind: EntityKind, entity: Base) -> str:
    self.db.add(entity)
    try:
      await self.db.flush()
    except IntegrityError as exc:
      raise ConstraintViolation(f"{spec_for(kind).label} already exists", dev=str(exc.orig)) from exc
    return entity.id

  async def update(self, kind: EntityKind, entity_id: str, patch: dict[str, Any]) -> None:
    model = spec_for(kind).model
    await self.db.execute(update(model).where(model.id == entity_id).values(**patch))

  async def delete(self, kind: EntityKind, entity_id: str) -> None:
    model = spec_for(kind).model
    await self.db.execute(delete(model).where(model.id == entity_id))

  async def delete_many(self, kind: EntityKind, **filters: Any) -> int:
    if any(isinstance(v, (list, tuple, set, frozenset)) and not v for v in filters.values()):
      return 0
    model = spec_for(kind).model
    res = await self.db.execute(delete(model).where(*self._where(kind, filters)))
    return res.rowcount or 0

  @asynccontextmanager
  async def transaction(self) -> AsyncIterator[None]:
    """Commit everything staged inside the block, or nothing at all."""
    try:
      yield
      await self.db.commit()
    except IntegrityError as exc:
      await self.db.rollback()
      raise ConstraintViolation(dev=str(exc.orig)) from exc
    except BoardError:
      await self.db.rollback()
      raise
    except SQLAlchemyError as exc:
      await self.db.rollback()
      logger.exception("transaction aborted")
      raise Internal(dev=str(exc)) from exc
    except BaseException:
      await self.db.rollback()
      raise
