from __future__ import annotations

from fastapi import APIRouter, Depends, status

from taskboard.cascade import create_and_link, delete_and_unlink
from taskboard.deps import get_current_user, get_store
from taskboard.guard import ensure_authorized
from taskboard.kinds import EntityKind
from taskboard.models import User, now_ms
from taskboard.ordering import apply_move
from taskboard.presenters import board_detail_out, board_out
from taskboard.schemas import BoardCreateIn, BoardDetailOut, BoardOut, BoardUpdateIn, DeleteOut, ListOrderIn, MessageOut
from taskboard.store import EntityStore

router = APIRouter(prefix="/boards", tags=["boards"])


@router.post("", response_model=BoardOut, status_code=status.HTTP_201_CREATED)
async def create_board(
  payload: BoardCreateIn,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> BoardOut:
  b = await create_and_link(
    store,
    EntityKind.BOARD,
    {"name": payload.name, "color": payload.color},
    user.id,
    user.id,
  )
  return board_out(b)


@router.get("/user/{user_id}", response_model=list[BoardOut])
async def list_boards_for_user(
  user_id: str,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> list[BoardOut]:
  ensure_authorized(user.id, user_id)
  boards = await store.find_many(EntityKind.BOARD, owner=user.id)
  boards.sort(key=lambda b: b.created_on)
  return [board_out(b) for b in boards]


@router.patch("/update/list/order", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
async def update_list_order(
  payload: ListOrderIn,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> MessageOut:
  await apply_move(
    store,
    EntityKind.LIST,
    payload.listId,
    payload.boardId,
    payload.srcIdx,
    payload.boardId,
    payload.desIdx,
    user.id,
    expected_src_order=payload.listOrder,
  )
  return MessageOut(message="order updated")


@router.get("/{board_id}", response_model=BoardDetailOut)
async def get_board(
  board_id: str,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> BoardDetailOut:
  b = await store.get(EntityKind.BOARD, board_id, "boardId does not match any existing board")
  ensure_authorized(user.id, b.owner)
  lists = await store.find_many(EntityKind.LIST, owner=b.id)
  cards = await store.find_many(EntityKind.CARD, owner=[l.id for l in lists]) if lists else []
  return board_detail_out(b, lists, cards)


@router.patch("/{board_id}", response_model=BoardOut)
async def update_board(
  board_id: str,
  payload: BoardUpdateIn,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> BoardOut:
  b = await store.get(EntityKind.BOARD, board_id)
  ensure_authorized(user.id, b.owner, "incorrect token for desired action")
  async with store.transaction():
    if payload.name is not None:
      b.name = payload.name
    if payload.color is not None:
      b.color = payload.color
    b.updated_on = now_ms()
  return board_out(b)


@router.delete("/{board_id}", response_model=DeleteOut)
async def delete_board(
  board_id: str,
  user: User = Depends(get_current_user),
  store: EntityStore = Depends(get_store),
) -> DeleteOut:
  return DeleteOut(**await delete_and_unlink(store, EntityKind.BOARD, board_id, user.id))
