from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.config import settings
from taskboard.db import SessionLocal
from taskboard.errors import Unauthenticated
from taskboard.kinds import EntityKind
from taskboard.models import User
from taskboard.rate_limit import limiter
from taskboard.security import verify_token
from taskboard.store import EntityStore


async def get_db() -> AsyncIterator[AsyncSession]:
  async with SessionLocal() as session:
    yield session


async def get_store(db: AsyncSession = Depends(get_db)) -> EntityStore:
  return EntityStore(db)


async def get_current_user(request: Request, store: EntityStore = Depends(get_store)) -> User:
  auth = request.headers.get("authorization") or ""
  parts = auth.split(" ")
  if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
    raise Unauthenticated(dev="authorization header is invalid")
  user_id = verify_token(parts[1].strip())
  if not user_id:
    raise Unauthenticated(dev="token could not be successfully verified")
  u = await store.find(EntityKind.USER, user_id)
  if u is None:
    raise Unauthenticated(dev="token names a user that no longer exists")
  return u


def client_ip(request: Request) -> str | None:
  return request.client.host if request.client else None


def rate_limit_auth(request: Request) -> None:
  ip = client_ip(request) or "unknown"
  retry_after = limiter.hit(f"auth:ip:{ip}", limit=settings.rate_limit_auth_ip_per_minute, window_seconds=60)
  if retry_after:
    raise HTTPException(
      status_code=status.HTTP_429_TOO_MANY_REQUESTS,
      detail="Too many requests",
      headers={"Retry-After": str(retry_after)},
    )
