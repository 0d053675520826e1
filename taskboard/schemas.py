from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

USERNAME_MIN_LEN = 4
USERNAME_MAX_LEN = 16
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 32
DEFAULT_MAX_LEN = 256
CHECKLIST_MAX_LEN = 512
DESCRIPTION_MAX_LEN = 2048


class StrippedIn(BaseModel):
  model_config = ConfigDict(str_strip_whitespace=True)


class MessageOut(BaseModel):
  message: str


class DeleteOut(BaseModel):
  message: str
  id: str
  deleted: dict[str, int] = Field(default_factory=dict)


# users


class CredentialsIn(BaseModel):
  username: str = Field(min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
  password: str = Field(min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class PasswordChangeIn(BaseModel):
  password: str = Field(min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class AuthOut(BaseModel):
  token: str
  userId: str
  expires: int


class UserOut(BaseModel):
  id: str
  username: str
  name: str | None = None
  boards: list[str]
  createdOn: int
  updatedOn: int
  lastLogin: int


# checklists


class ChecklistCreateIn(StrippedIn):
  objective: str = Field(min_length=1, max_length=CHECKLIST_MAX_LEN)
  isCompleted: bool = False
  owner: str = Field(min_length=1)


class ChecklistUpdateIn(StrippedIn):
  objective: str | None = Field(default=None, min_length=1, max_length=CHECKLIST_MAX_LEN)
  isCompleted: bool | None = None


class ChecklistOut(BaseModel):
  id: str
  objective: str
  isCompleted: bool
  owner: str
  indirectOwner: str
  createdOn: int
  updatedOn: int


class ChecklistOrderIn(StrippedIn):
  checklistId: str = Field(min_length=1)
  srcIdx: int
  desIdx: int
  checklistOrder: list[str] | None = None


# cards


class CardCreateIn(StrippedIn):
  name: str = Field(min_length=1, max_length=DEFAULT_MAX_LEN)
  description: str = Field(default="", max_length=DESCRIPTION_MAX_LEN)
  color: str = Field(min_length=1, max_length=DEFAULT_MAX_LEN)
  owner: str = Field(min_length=1)


class CardUpdateIn(StrippedIn):
  name: str | None = Field(default=None, min_length=1, max_length=DEFAULT_MAX_LEN)
  description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LEN)
  color: str | None = Field(default=None, min_length=1, max_length=DEFAULT_MAX_LEN)
  owner: str | None = Field(default=None, min_length=1)


class CardOut(BaseModel):
  id: str
  name: str
  description: str
  color: str
  owner: str
  indirectOwner: str
  checklists: list[str]
  checklistOrder: list[str]
  createdOn: int
  updatedOn: int


class CardDetailOut(CardOut):
  checklists: list[ChecklistOut]


class CardOrderIn(StrippedIn):
  cardId: str = Field(min_length=1)
  srcListId: str = Field(min_length=1)
  srcIdx: int
  desListId: str = Field(min_length=1)
  desIdx: int
  srcListOrder: list[str] | None = None
  desListOrder: list[str] | None = None


# lists


class ListCreateIn(StrippedIn):
  name: str = Field(min_length=1, max_length=DEFAULT_MAX_LEN)
  owner: str = Field(min_length=1)


class ListUpdateIn(StrippedIn):
  name: str = Field(min_length=1, max_length=DEFAULT_MAX_LEN)


class ListOut(BaseModel):
  id: str
  name: str
  owner: str
  indirectOwner: str
  cards: list[str]
  cardOrder: list[str]
  createdOn: int
  updatedOn: int


class ListDetailOut(ListOut):
  cards: list[CardOut]


class ListOrderIn(StrippedIn):
  boardId: str = Field(min_length=1)
  listId: str = Field(min_length=1)
  srcIdx: int
  desIdx: int
  listOrder: list[str] | None = None


# boards


class BoardCreateIn(StrippedIn):
  name: str = Field(min_length=1, max_length=DEFAULT_MAX_LEN)
  color: str = Field(min_length=1, max_length=DEFAULT_MAX_LEN)


class BoardUpdateIn(StrippedIn):
  name: str | None = Field(default=None, min_length=1, max_length=DEFAULT_MAX_LEN)
  color: str | None = Field(default=None, min_length=1, max_length=DEFAULT_MAX_LEN)


class BoardOut(BaseModel):
  id: str
  name: str
  color: str
  owner: str
  lists: list[str]
  listOrder: list[str]
  createdOn: int
  updatedOn: int


class BoardDetailOut(BoardOut):
  lists: list[ListDetailOut]
