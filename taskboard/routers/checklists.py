from __future__ import annotations

from fastapi import APIRouter, Depends, status

from taskboard.cascade import create_and_link, delete_and_unlink
from taskboard.deps import get_current_user, get_store
from taskboard.guard import ensure_authorized
from taskboard.kinds import EntityKind
from taskboard.models import User, now_ms
from taskboard.presenters import checklist_out, in_order
from taskboard.schemas import ChecklistCreateIn, ChecklistOut, ChecklistUpdateIn, DeleteOut
from taskboard.store import EntityStore

router = APIRouter(prefix="/checklists", tags=["checklists"])


@router.post("", response_model=ChecklistOut, status_code=status.HTTP_201_CREATED)
async def create_checklist(
  payload: ChecklistCreateIn,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> ChecklistOut:
  c = await create_and_link(
    store,
    EntityKind.CHECKLIST,
    {"objective": payload.objective, "is_completed": payload.isCompleted},
    payload.owner,
    user.id,
  )
  return checklist_out(c)


@router.get("/card/{card_id}", response_model=list[ChecklistOut])
async def list_checklists_for_card(
  card_id: str,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> list[ChecklistOut]:
  card = await store.get(EntityKind.CARD, card_id, "owning card could not be found")
  ensure_authorized(user.id, card.indirect_owner)
  checklists = await store.find_many(EntityKind.CHECKLIST, owner=card.id)
  return [checklist_out(c) for c in in_order(checklists, card.checklist_order)]


@router.get("/{checklist_id}", response_model=ChecklistOut)
async def get_checklist(
  checklist_id: str,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> ChecklistOut:
  c = await store.get(EntityKind.CHECKLIST, checklist_id, "checklistId does not match any existing checklist")
  ensure_authorized(user.id, c.indirect_owner)
  return checklist_out(c)


@router.patch("/{checklist_id}", response_model=ChecklistOut)
async def update_checklist(
  checklist_id: str,
  payload: ChecklistUpdateIn,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> ChecklistOut:
  c = await store.get(EntityKind.CHECKLIST, checklist_id, "checklistId does not match any existing checklist")
  ensure_authorized(user.id, c.indirect_owner, "incorrect token for desired action")
  async with store.transaction():
    if payload.objective is not None:
      c.objective = payload.objective
    if payload.isCompleted is not None:
      c.is_completed = payload.isCompleted
    c.updated_on = now_ms()
  return checklist_out(c)


@router.delete("/{checklist_id}", response_model=DeleteOut)
async def delete_checklist(
  checklist_id: str,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> DeleteOut:
  return DeleteOut(**await delete_and_unlink(store, EntityKind.CHECKLIST, checklist_id, user.id))
