"""Ownership-chain access control.

Every entity below User is visible and mutable only by the User at the root
of its ownership chain. Boards carry that User directly in ``owner``; Lists,
Cards and Checklists carry it in the denormalized ``indirect_owner`` so the
check never has to walk the chain.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any

from taskboard.errors import Unauthorized
from taskboard.kinds import EntityKind

logger = logging.getLogger(__name__)


def normalize_id(value: Any) -> str | None:
  if value is None:
    return None
  if isinstance(value, uuid.UUID):
    return str(value)
  s = str(value).strip()
  if not s:
    return None
  try:
    return str(uuid.UUID(s))
  except ValueError:
    return s


def authorize(caller_id: Any, owner_id: Any) -> bool:
  caller = normalize_id(caller_id)
  owner = normalize_id(owner_id)
  if caller is None or owner is None:
    return False
  return caller == owner


def root_owner(kind: EntityKind, entity: Any) -> str:
  if kind == EntityKind.USER:
    return entity.id
  if kind == EntityKind.BOARD:
    return entity.owner
  return entity.indirect_owner


def ensure_authorized(caller_id: Any, owner_id: Any, message: str = "owner does not match authenticated user") -> None:
  if not authorize(caller_id, owner_id):
    logger.warning("access denied: caller=%s owner=%s (%s)", caller_id, owner_id, message)
    raise Unauthorized(message)
