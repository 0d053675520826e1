"""Drag-and-drop reordering of child ids inside and between containers."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from taskboard.errors import StaleOrder
from taskboard.guard import ensure_authorized, normalize_id, root_owner
from taskboard.kinds import EntityKind, spec_for
from taskboard.models import now_ms
from taskboard.store import EntityStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveResult:
  src_order: list[str]
  des_order: list[str]
  same_container: bool


def reconcile_move(
  moved_id: str,
  src_container_id: str,
  src_index: int,
  src_order: Sequence[str],
  des_container_id: str,
  des_index: int,
  des_order: Sequence[str],
) -> MoveResult:
  """Compute the order arrays after moving ``moved_id``.

  Rejects with :class:`StaleOrder` when ``src_order[src_index]`` is not the
  moved id (the caller's view is out of date) or when either index falls
  outside the array it addresses. Indices are never clamped.
  """
  if not 0 <= src_index < len(src_order):
    raise StaleOrder(f"srcIdx {src_index} is out of bounds")
  if normalize_id(src_order[src_index]) != normalize_id(moved_id):
    raise StaleOrder("moved item is not at srcIdx")

  new_src = list(src_order)
  target = new_src.pop(src_index)
  same = normalize_id(src_container_id) == normalize_id(des_container_id)

  if same:
    if not 0 <= des_index <= len(new_src):
      raise StaleOrder(f"desIdx {des_index} is out of bounds")
    new_src.insert(des_index, target)
    return MoveResult(src_order=new_src, des_order=new_src, same_container=True)

  if not 0 <= des_index <= len(des_order):
    raise StaleOrder(f"desIdx {des_index} is out of bounds")
  new_des = list(des_order)
  new_des.insert(des_index, target)
  return MoveResult(src_order=new_src, des_order=new_des, same_container=False)


def _check_expected(actual: Sequence[str], expected: Sequence[str] | None, which: str) -> None:
  if expected is None:
    return
  if [normalize_id(x) for x in actual] != [normalize_id(x) for x in expected]:
    raise StaleOrder(f"{which} order does not match the stored order")


async def _lock_containers(store: EntityStore, kind: EntityKind, src_id: str, des_id: str, label: str) -> tuple[Any, Any]:
  # fixed id order so two moves over the same pair cannot deadlock
  locked = {}
  for cid in sorted({src_id, des_id}):
    which = "source" if cid == src_id else "destination"
    locked[cid] = await store.get(kind, cid, f"{which} {label} could not be found", for_update=True)
  return locked[src_id], locked[des_id]


async def apply_move(
  store: EntityStore,
  kind: EntityKind,
  moved_id: str,
  src_container_id: str,
  src_index: int | None,
  des_container_id: str,
  des_index: int | None,
  caller_id: str,
  *,
  expected_src_order: Sequence[str] | None = None,
  expected_des_order: Sequence[str] | None = None,
  moved_patch: dict[str, Any] | None = None,
) -> MoveResult:
  """Persist a move of one ``kind`` item; all writes commit together.

  Both containers are re-read under a row lock before the order arrays are
  computed. ``src_index=None`` moves the item from wherever it currently
  sits; ``des_index=None`` appends it to the destination. ``moved_patch``
  holds extra column values written to the moved row in the same
  transaction.
  """
  container_kind = spec_for(kind).parent
  if container_kind is None:
    raise ValueError(f"{spec_for(kind).label} cannot be reordered")
  cspec = spec_for(container_kind)
  label = cspec.label
  item_label = spec_for(kind).label

  src = await store.get(container_kind, src_container_id, f"source {label} could not be found")
  des = await store.get(container_kind, des_container_id, f"destination {label} could not be found")
  ensure_authorized(caller_id, root_owner(container_kind, src), f"source {label} is inaccessible")
  if normalize_id(src.id) != normalize_id(des.id):
    ensure_authorized(caller_id, root_owner(container_kind, des), f"destination {label} is inaccessible")

  ts = now_ms()
  async with store.transaction():
    src, des = await _lock_containers(store, container_kind, src.id, des.id, label)
    src_order = list(getattr(src, cspec.order_field))
    des_order = list(getattr(des, cspec.order_field))
    _check_expected(src_order, expected_src_order, "source")

    if src_index is None:
      if moved_id not in src_order:
        raise StaleOrder(f"{item_label} is missing from its {label} order")
      src_index = src_order.index(moved_id)
    if des_index is None:
      des_index = len(des_order) - 1 if src.id == des.id else len(des_order)

    try:
      result = reconcile_move(moved_id, src.id, src_index, src_order, des.id, des_index, des_order)
    except StaleOrder:
      logger.warning("stale %s move rejected: %s in %s at %s", item_label, moved_id, src.id, src_index)
      raise

    moved_values: dict[str, Any] = dict(moved_patch or {})
    if not result.same_container:
      _check_expected(des_order, expected_des_order, "destination")
      moved = await store.get(kind, moved_id, f"{item_label} could not be found")
      ensure_authorized(caller_id, root_owner(kind, moved), f"{item_label} is inaccessible")
      await store.update(
        container_kind,
        des.id,
        {
          cspec.order_field: result.des_order,
          cspec.children_field: [*getattr(des, cspec.children_field), moved.id],
          "updated_on": ts,
        },
      )
      moved_values["owner"] = des.id

    src_patch: dict[str, Any] = {cspec.order_field: result.src_order, "updated_on": ts}
    if not result.same_container:
      src_patch[cspec.children_field] = [x for x in getattr(src, cspec.children_field) if x != moved_id]
    await store.update(container_kind, src.id, src_patch)
    if moved_values:
      moved_values["updated_on"] = ts
      await store.update(kind, moved_id, moved_values)

  logger.info(
    "%s %s moved from %s %s[%s] to %s %s[%s]",
    item_label,
    moved_id,
    label,
    src.id,
    src_index,
    label,
    des.id,
    des_index,
  )
  return result
