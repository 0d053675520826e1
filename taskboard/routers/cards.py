from __future__ import annotations

from fastapi import APIRouter, Depends, status

from taskboard.cascade import create_and_link, delete_and_unlink
from taskboard.deps import get_current_user, get_store
from taskboard.guard import ensure_authorized, normalize_id
from taskboard.kinds import EntityKind
from taskboard.models import User, now_ms
from taskboard.ordering import apply_move
from taskboard.presenters import card_detail_out, card_out, in_order
from taskboard.schemas import CardCreateIn, CardDetailOut, CardOut, CardUpdateIn, ChecklistOrderIn, DeleteOut, MessageOut
from taskboard.store import EntityStore

router = APIRouter(prefix="/cards", tags=["cards"])


@router.post("", response_model=CardOut, status_code=status.HTTP_201_CREATED)
async def create_card(
  payload: CardCreateIn,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> CardOut:
  c = await create_and_link(
    store,
    EntityKind.CARD,
    {"name": payload.name, "description": payload.description, "color": payload.color},
    payload.owner,
    user.id,
  )
  return card_out(c)


@router.get("/list/{list_id}", response_model=list[CardOut])
async def list_cards_for_list(
  list_id: str,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> list[CardOut]:
  l = await store.get(EntityKind.LIST, list_id, "owning list could not be found")
  ensure_authorized(user.id, l.indirect_owner)
  cards = await store.find_many(EntityKind.CARD, owner=l.id)
  return [card_out(c) for c in in_order(cards, l.card_order)]


@router.get("/{card_id}", response_model=CardDetailOut)
async def get_card(
  card_id: str,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> CardDetailOut:
  c = await store.get(EntityKind.CARD, card_id, "cardId does not match any existing card")
  ensure_authorized(user.id, c.indirect_owner)
  checklists = await store.find_many(EntityKind.CHECKLIST, owner=c.id)
  return card_detail_out(c, checklists)


@router.patch("/{card_id}/update/checklist/order", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
async def update_checklist_order(
  card_id: str,
  payload: ChecklistOrderIn,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> MessageOut:
  await apply_move(
    store,
    EntityKind.CHECKLIST,
    payload.checklistId,
    card_id,
    payload.srcIdx,
    card_id,
    payload.desIdx,
    user.id,
    expected_src_order=payload.checklistOrder,
  )
  return MessageOut(message="order updated")


@router.patch("/{card_id}", response_model=CardOut)
async def update_card(
  card_id: str,
  payload: CardUpdateIn,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> CardOut:
  c = await store.get(EntityKind.CARD, card_id)
  ensure_authorized(user.id, c.indirect_owner, "incorrect token for desired action")

  fields: dict = {}
  if payload.name is not None:
    fields["name"] = payload.name
  if payload.description is not None:
    fields["description"] = payload.description
  if payload.color is not None:
    fields["color"] = payload.color

  if payload.owner is not None and normalize_id(payload.owner) != normalize_id(c.owner):
    # re-parenting is a move to the end of the destination list; edits ride along
    await apply_move(store, EntityKind.CARD, c.id, c.owner, None, payload.owner, None, user.id, moved_patch=fields)
  else:
    async with store.transaction():
      await store.update(EntityKind.CARD, c.id, {**fields, "updated_on": now_ms()})
  c = await store.get(EntityKind.CARD, card_id)
  return card_out(c)


@router.delete("/{card_id}", response_model=DeleteOut)
async def delete_card(
  card_id: str,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> DeleteOut:
  return DeleteOut(**await delete_and_unlink(store, EntityKind.CARD, card_id, user.id))
