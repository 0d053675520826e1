from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import delete

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
  sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./taskboard_test.db")
os.environ.setdefault("APP_SECRET", "test-secret-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from taskboard.config import settings
from taskboard.db import SessionLocal, create_tables, engine
from taskboard.main import app
from taskboard.models import Board, Card, Checklist, TaskList, User
from taskboard.rate_limit import limiter
from taskboard.store import EntityStore


@pytest.fixture(scope="session")
def anyio_backend() -> str:
  return "asyncio"


async def _reset_db() -> None:
  limiter.forget("auth:")
  await create_tables()
  async with SessionLocal() as db:
    # children first so foreign keys never dangle
    for model in (Checklist, Card, TaskList, Board, User):
      await db.execute(delete(model))
    await db.commit()
  await engine.dispose()


@pytest.fixture
async def clean_db() -> None:
  if not settings.is_test_db():
    raise RuntimeError(
      "Refusing to run destructive tests against non-test DB. "
      "Set DATABASE_URL to a *_test database (e.g. taskboard_test)."
    )
  await _reset_db()
  yield
  await _reset_db()


@pytest.fixture
async def client(clean_db: None) -> AsyncClient:
  transport = ASGITransport(app=app)
  async with AsyncClient(transport=transport, base_url="http://localhost") as c:
    yield c


@pytest.fixture
async def store(clean_db: None) -> EntityStore:
  async with SessionLocal() as db:
    yield EntityStore(db)


async def signup(client: AsyncClient, username: str, password: str = "password123") -> tuple[dict[str, str], str]:
  res = await client.post("/user/signup", json={"username": username, "password": password})
  assert res.status_code == 201, res.text
  body = res.json()
  return {"Authorization": f"Bearer {body['token']}"}, body["userId"]


async def make_board(client: AsyncClient, headers: dict[str, str], name: str = "Board") -> dict:
  res = await client.post("/boards", json={"name": name, "color": "#112233"}, headers=headers)
  assert res.status_code == 201, res.text
  return res.json()


async def make_list(client: AsyncClient, headers: dict[str, str], board_id: str, name: str = "List") -> dict:
  res = await client.post("/lists", json={"name": name, "owner": board_id}, headers=headers)
  assert res.status_code == 201, res.text
  return res.json()


async def make_card(client: AsyncClient, headers: dict[str, str], list_id: str, name: str = "Card") -> dict:
  res = await client.post("/cards", json={"name": name, "color": "red", "owner": list_id}, headers=headers)
  assert res.status_code == 201, res.text
  return res.json()


async def make_checklist(client: AsyncClient, headers: dict[str, str], card_id: str, objective: str = "Do it") -> dict:
  res = await client.post("/checklists", json={"objective": objective, "owner": card_id}, headers=headers)
  assert res.status_code == 201, res.text
  return res.json()
