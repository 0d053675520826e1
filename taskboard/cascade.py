"""Create-and-link and delete-and-unlink across the ownership tree.

Both operations run inside a single transaction so the parent/child
collections, the order arrays and the child rows never disagree once
committed.
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from taskboard.guard import ensure_authorized, root_owner
from taskboard.kinds import EntityKind, spec_for
from taskboard.models import Base, now_ms
from taskboard.store import EntityStore

logger = logging.getLogger(__name__)


async def create_and_link(
  store: EntityStore,
  child_kind: EntityKind,
  fields: dict[str, Any],
  parent_id: str,
  caller_id: str,
) -> Base:
  child_spec = spec_for(child_kind)
  parent_kind = child_spec.parent
  if parent_kind is None:
    raise ValueError(f"{child_spec.label} has no parent to link into")
  parent_spec = spec_for(parent_kind)

  parent = await store.get(parent_kind, parent_id, f"owning {parent_spec.label} could not be found")
  owner_root = root_owner(parent_kind, parent)
  ensure_authorized(caller_id, owner_root)

  ts = now_ms()
  values = dict(fields, owner=parent.id, created_on=ts, updated_on=ts)
  if child_kind != EntityKind.BOARD:
    values["indirect_owner"] = owner_root
  if child_spec.children_field:
    values[child_spec.children_field] = []
  if child_spec.order_field:
    values[child_spec.order_field] = []
  child = child_spec.model(**values)

  async with store.transaction():
    # re-read under lock so a concurrent create or move is not overwritten
    parent = await store.get(parent_kind, parent.id, f"owning {parent_spec.label} could not be found", for_update=True)
    await store.insert(child_kind, child)
    setattr(parent, parent_spec.children_field, [*getattr(parent, parent_spec.children_field), child.id])
    if parent_spec.order_field:
      setattr(parent, parent_spec.order_field, [*getattr(parent, parent_spec.order_field), child.id])
    parent.updated_on = ts

  logger.info("%s %s created under %s %s", child_spec.label, child.id, parent_spec.label, parent.id)
  return child


async def _purge(store: EntityStore, kind: EntityKind, ids: list[str], counts: Counter) -> None:
  # post-order: descendants go before the rows that own them
  if not ids:
    return
  spec = spec_for(kind)
  if spec.child is not None:
    children = await store.find_many(spec.child, owner=ids)
    await _purge(store, spec.child, [c.id for c in children], counts)
  counts[spec.label] += await store.delete_many(kind, id=ids)


async def _unlink_from_parent(store: EntityStore, kind: EntityKind, entity: Any, ts: int) -> None:
  spec = spec_for(kind)
  parent_kind = spec.parent
  if parent_kind is None:
    return
  parent_spec = spec_for(parent_kind)
  parent = await store.find(parent_kind, entity.owner, for_update=True)
  if parent is None:
    return
  patch: dict[str, Any] = {
    parent_spec.children_field: [x for x in getattr(parent, parent_spec.children_field) if x != entity.id],
    "updated_on": ts,
  }
  if parent_spec.order_field:
    patch[parent_spec.order_field] = [x for x in getattr(parent, parent_spec.order_field) if x != entity.id]
  await store.update(parent_kind, parent.id, patch)


async def delete_and_unlink(store: EntityStore, kind: EntityKind, entity_id: str, caller_id: str) -> dict[str, Any]:
  spec = spec_for(kind)
  entity = await store.get(kind, entity_id, f"{spec.label} could not be found")
  ensure_authorized(caller_id, root_owner(kind, entity), "incorrect token for desired action")

  label = getattr(entity, "username", None) or getattr(entity, "name", None) or getattr(entity, "objective", "")
  ts = now_ms()
  counts: Counter = Counter()

  async with store.transaction():
    # parent before child, the same order create_and_link locks in
    seen_owner = getattr(entity, "owner", None)
    await _unlink_from_parent(store, kind, entity, ts)
    entity = await store.get(kind, entity_id, f"{spec.label} could not be found", for_update=True)
    if getattr(entity, "owner", seen_owner) != seen_owner:
      # moved while we waited on the old parent
      await _unlink_from_parent(store, kind, entity, ts)
    if kind == EntityKind.USER:
      # rows whose parent chain was already broken still name the user
      for stray in (EntityKind.CHECKLIST, EntityKind.CARD, EntityKind.LIST):
        counts[spec_for(stray).label] += await store.delete_many(stray, indirect_owner=entity.id)
    await _purge(store, kind, [entity.id], counts)

  logger.info("%s %s deleted (%s)", spec.label, entity_id, dict(counts))
  return {"message": f"{spec.label} {label} successfully deleted", "id": entity_id, "deleted": dict(counts)}
