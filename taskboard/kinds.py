from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from taskboard.models import Base, Board, Card, Checklist, TaskList, User


class EntityKind(str, Enum):
  USER = "user"
  BOARD = "board"
  LIST = "list"
  CARD = "card"
  CHECKLIST = "checklist"


@dataclass(frozen=True)
class KindSpec:
  model: type[Base]
  label: str
  parent: EntityKind | None
  child: EntityKind | None
  # attribute names on this kind's rows holding its child ids
  children_field: str | None
  order_field: str | None


KINDS: dict[EntityKind, KindSpec] = {
  EntityKind.USER: KindSpec(User, "user", None, EntityKind.BOARD, "boards", None),
  EntityKind.BOARD: KindSpec(Board, "board", EntityKind.USER, EntityKind.LIST, "lists", "list_order"),
  EntityKind.LIST: KindSpec(TaskList, "list", EntityKind.BOARD, EntityKind.CARD, "cards", "card_order"),
  EntityKind.CARD: KindSpec(Card, "card", EntityKind.LIST, EntityKind.CHECKLIST, "checklists", "checklist_order"),
  EntityKind.CHECKLIST: KindSpec(Checklist, "checklist", EntityKind.CARD, None, None, None),
}


def spec_for(kind: EntityKind) -> KindSpec:
  return KINDS[kind]
