from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from taskboard.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)

TOKEN_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
  return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
  return pwd_context.verify(password, password_hash)


def issue_token(user_id: str) -> tuple[str, int]:
  """Return a signed token for ``user_id`` and its expiry in epoch ms."""
  expires_at = datetime.now(timezone.utc) + timedelta(hours=settings.token_ttl_hours)
  token = jwt.encode({"userId": user_id, "exp": expires_at}, settings.app_secret, algorithm=TOKEN_ALGORITHM)
  return token, int(expires_at.timestamp() * 1000)


def verify_token(token: str) -> str | None:
  try:
    payload = jwt.decode(token, settings.app_secret, algorithms=[TOKEN_ALGORITHM])
  except jwt.PyJWTError:
    return None
  user_id = payload.get("userId")
  if not isinstance(user_id, str) or not user_id:
    return None
  return user_id
