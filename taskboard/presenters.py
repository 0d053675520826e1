from __future__ import annotations

from typing import Sequence, TypeVar

from taskboard.models import Board, Card, Checklist, TaskList, User
from taskboard.schemas import (
  BoardDetailOut,
  BoardOut,
  CardDetailOut,
  CardOut,
  ChecklistOut,
  ListDetailOut,
  ListOut,
  UserOut,
)

T = TypeVar("T", Board, TaskList, Card, Checklist)


def in_order(items: Sequence[T], order: Sequence[str]) -> list[T]:
  """Sort ``items`` by their position in ``order``; unknown ids go last."""
  pos = {item_id: idx for idx, item_id in enumerate(order)}
  return sorted(items, key=lambda i: (pos.get(i.id, len(pos)), i.created_on))


def user_out(u: User) -> UserOut:
  return UserOut(
    id=u.id,
    username=u.username,
    name=u.name,
    boards=list(u.boards),
    createdOn=u.created_on,
    updatedOn=u.updated_on,
    lastLogin=u.last_login,
  )


def checklist_out(c: Checklist) -> ChecklistOut:
  return ChecklistOut(
    id=c.id,
    objective=c.objective,
    isCompleted=c.is_completed,
    owner=c.owner,
    indirectOwner=c.indirect_owner,
    createdOn=c.created_on,
    updatedOn=c.updated_on,
  )


def card_out(c: Card) -> CardOut:
  return CardOut(
    id=c.id,
    name=c.name,
    description=c.description,
    color=c.color,
    owner=c.owner,
    indirectOwner=c.indirect_owner,
    checklists=list(c.checklists),
    checklistOrder=list(c.checklist_order),
    createdOn=c.created_on,
    updatedOn=c.updated_on,
  )


def card_detail_out(c: Card, checklists: Sequence[Checklist]) -> CardDetailOut:
  data = card_out(c).model_dump()
  data["checklists"] = [checklist_out(x) for x in in_order(checklists, c.checklist_order)]
  return CardDetailOut(**data)


def list_out(l: TaskList) -> ListOut:
  return ListOut(
    id=l.id,
    name=l.name,
    owner=l.owner,
    indirectOwner=l.indirect_owner,
    cards=list(l.cards),
    cardOrder=list(l.card_order),
    createdOn=l.created_on,
    updatedOn=l.updated_on,
  )


def list_detail_out(l: TaskList, cards: Sequence[Card]) -> ListDetailOut:
  data = list_out(l).model_dump()
  data["cards"] = [card_out(c) for c in in_order([c for c in cards if c.owner == l.id], l.card_order)]
  return ListDetailOut(**data)


def board_out(b: Board) -> BoardOut:
  return BoardOut(
    id=b.id,
    name=b.name,
    color=b.color,
    owner=b.owner,
    lists=list(b.lists),
    listOrder=list(b.list_order),
    createdOn=b.created_on,
    updatedOn=b.updated_on,
  )


def board_detail_out(b: Board, lists: Sequence[TaskList], cards: Sequence[Card]) -> BoardDetailOut:
  data = board_out(b).model_dump()
  data["lists"] = [list_detail_out(l, cards) for l in in_order(lists, b.list_order)]
  return BoardDetailOut(**data)
