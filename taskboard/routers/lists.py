from __future__ import annotations

from fastapi import APIRouter, Depends, status

from taskboard.cascade import create_and_link, delete_and_unlink
from taskboard.deps import get_current_user, get_store
from taskboard.guard import ensure_authorized
from taskboard.kinds import EntityKind
from taskboard.models import User, now_ms
from taskboard.ordering import apply_move
from taskboard.presenters import in_order, list_detail_out, list_out
from taskboard.schemas import CardOrderIn, DeleteOut, ListCreateIn, ListDetailOut, ListOut, ListUpdateIn, MessageOut
from taskboard.store import EntityStore

router = APIRouter(prefix="/lists", tags=["lists"])


@router.post("", response_model=ListOut, status_code=status.HTTP_201_CREATED)
async def create_list(
  payload: ListCreateIn,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> ListOut:
  l = await create_and_link(store, EntityKind.LIST, {"name": payload.name}, payload.owner, user.id)
  return list_out(l)


@router.patch("/update/card/order", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
async def update_card_order(
  payload: CardOrderIn,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> MessageOut:
  await apply_move(
    store,
    EntityKind.CARD,
    payload.cardId,
    payload.srcListId,
    payload.srcIdx,
    payload.desListId,
    payload.desIdx,
    user.id,
    expected_src_order=payload.srcListOrder,
    expected_des_order=payload.desListOrder,
  )
  return MessageOut(message="order updated")


@router.get("/board/{board_id}", response_model=list[ListOut])
async def list_lists_for_board(
  board_id: str,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> list[ListOut]:
  b = await store.get(EntityKind.BOARD, board_id, "owning board could not be found")
  ensure_authorized(user.id, b.owner)
  lists = await store.find_many(EntityKind.LIST, owner=b.id)
  return [list_out(l) for l in in_order(lists, b.list_order)]


@router.get("/{list_id}", response_model=ListDetailOut)
async def get_list(
  list_id: str,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> ListDetailOut:
  l = await store.get(EntityKind.LIST, list_id, "listId does not match any existing list")
  ensure_authorized(user.id, l.indirect_owner)
  cards = await store.find_many(EntityKind.CARD, owner=l.id)
  return list_detail_out(l, cards)


@router.patch("/{list_id}", response_model=ListOut)
async def update_list(
  list_id: str,
  payload: ListUpdateIn,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> ListOut:
  l = await store.get(EntityKind.LIST, list_id)
  ensure_authorized(user.id, l.indirect_owner, "incorrect token for desired action")
  async with store.transaction():
    l.name = payload.name
    l.updated_on = now_ms()
  return list_out(l)


@router.delete("/{list_id}", response_model=DeleteOut)
async def delete_list(
  list_id: str,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> DeleteOut:
  return DeleteOut(**await delete_and_unlink(store, EntityKind.LIST, list_id, user.id))
