from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from taskboard.cascade import delete_and_unlink
from taskboard.deps import get_current_user, get_store, rate_limit_auth
from taskboard.errors import Internal, Unauthenticated, Unprocessable
from taskboard.kinds import EntityKind
from taskboard.models import User, now_ms
from taskboard.presenters import user_out
from taskboard.schemas import AuthOut, CredentialsIn, DeleteOut, MessageOut, PasswordChangeIn, UserOut
from taskboard.security import hash_password, issue_token, verify_password
from taskboard.store import EntityStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


def _auth_out(u: User) -> AuthOut:
  try:
    token, expires = issue_token(u.id)
  except Exception as exc:
    raise Internal("token could not be generated", dev=str(exc)) from exc
  return AuthOut(token=token, userId=u.id, expires=expires)


@router.post("/signup", response_model=AuthOut, status_code=status.HTTP_201_CREATED, dependencies=[Depends(rate_limit_auth)])
async def signup(payload: CredentialsIn, store: EntityStore = Depends(get_store)) -> AuthOut:
  username = payload.username.strip()
  existing = await store.find_many(EntityKind.USER, username=username)
  if existing:
    raise Unprocessable("user already exists in system")
  ts = now_ms()
  u = User(
    username=username,
    password_hash=hash_password(payload.password),
    boards=[],
    created_on=ts,
    updated_on=ts,
    last_login=ts,
  )
  async with store.transaction():
    await store.insert(EntityKind.USER, u)
  logger.info("user %s signed up", u.id)
  return _auth_out(u)


@router.post("/login", response_model=AuthOut, dependencies=[Depends(rate_limit_auth)])
async def login(payload: CredentialsIn, store: EntityStore = Depends(get_store)) -> AuthOut:
  found = await store.find_many(EntityKind.USER, username=payload.username.strip())
  u = found[0] if found else None
  if u is None or not verify_password(payload.password, u.password_hash):
    raise Unauthenticated("invalid credentials")
  async with store.transaction():
    u.last_login = now_ms()
  return _auth_out(u)


@router.get("/me", response_model=UserOut)
async def me(user: User = Depends(get_current_user)) -> UserOut:
  return user_out(user)


@router.patch("/password", response_model=MessageOut)
async def change_password(
  payload: PasswordChangeIn,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> MessageOut:
  async with store.transaction():
    await store.update(EntityKind.USER, user.id, {"password_hash": hash_password(payload.password), "updated_on": now_ms()})
  return MessageOut(message=f"user {user.username} password successfully changed")


@router.delete("", response_model=DeleteOut)
async def delete_user(user: User = Depends(get_current_user), store: EntityStore = Depends(get_store)) -> DeleteOut:
  return DeleteOut(**await delete_and_unlink(store, EntityKind.USER, user.id, user.id))
