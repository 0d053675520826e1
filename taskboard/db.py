from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taskboard.config import settings
from taskboard.models import Base

engine = create_async_engine(settings.database_url, future=True, pool_pre_ping=True)

if engine.dialect.name == "sqlite":
  # sqlite ignores FOR UPDATE; serialize writers by taking the write lock at BEGIN

  @event.listens_for(engine.sync_engine, "connect")
  def _sqlite_connect(dbapi_connection, _record) -> None:
    dbapi_connection.isolation_level = None

  @event.listens_for(engine.sync_engine, "begin")
  def _sqlite_begin(conn) -> None:
    conn.exec_driver_sql("BEGIN IMMEDIATE")


SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


async def create_tables() -> None:
  async with engine.begin() as conn:
    await conn.run_sync(Base.metadata.create_all)
