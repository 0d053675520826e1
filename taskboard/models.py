from __future__ import annotations

import time
import uuid

from sqlalchemy import JSON, BigInteger, Boolean, ForeignKey, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def now_ms() -> int:
  return int(time.time() * 1000)


def new_id() -> str:
  return str(uuid.uuid4())


class Base(DeclarativeBase):
  pass


class User(Base):
  __tablename__ = "users"

  id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
  username: Mapped[str] = mapped_column(String(16), nullable=False, unique=True, index=True)
  password_hash: Mapped[str] = mapped_column(String, nullable=False)
  name: Mapped[str | None] = mapped_column(String, nullable=True)
  boards: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
  created_on: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
  updated_on: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
  last_login: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)


class Board(Base):
  __tablename__ = "boards"

  id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
  name: Mapped[str] = mapped_column(String, nullable=False)
  color: Mapped[str] = mapped_column(String, nullable=False)
  owner: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False, index=True)
  lists: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
  list_order: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
  created_on: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
  updated_on: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)


class TaskList(Base):
  __tablename__ = "lists"

  id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
  name: Mapped[str] = mapped_column(String, nullable=False)
  owner: Mapped[str] = mapped_column(String(36), ForeignKey("boards.id"), nullable=False, index=True)
  indirect_owner: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False, index=True)
  cards: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
  card_order: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
  created_on: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
  updated_on: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)


class Card(Base):
  __tablename__ = "cards"

  id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
  name: Mapped[str] = mapped_column(String, nullable=False)
  description: Mapped[str] = mapped_column(Text, nullable=False, default="")
  color: Mapped[str] = mapped_column(String, nullable=False)
  owner: Mapped[str] = mapped_column(String(36), ForeignKey("lists.id"), nullable=False, index=True)
  indirect_owner: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False, index=True)
  checklists: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
  checklist_order: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
  created_on: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
  updated_on: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)


class Checklist(Base):
  __tablename__ = "checklists"

  id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
  objective: Mapped[str] = mapped_column(Text, nullable=False)
  is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
  owner: Mapped[str] = mapped_column(String(36), ForeignKey("cards.id"), nullable=False, index=True)
  indirect_owner: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False, index=True)
  created_on: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
  updated_on: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
