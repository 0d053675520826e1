from __future__ import annotations

import pytest
from httpx import AsyncClient

from conftest import make_board, make_card, make_list, signup


@pytest.mark.anyio
async def test_create_board_links_it_to_the_user(client: AsyncClient) -> None:
  headers, user_id = await signup(client, "alice")
  b = await make_board(client, headers, "Roadmap")
  assert b["owner"] == user_id
  assert b["lists"] == [] and b["listOrder"] == []

  me = (await client.get("/user/me", headers=headers)).json()
  assert me["boards"] == [b["id"]]


@pytest.mark.anyio
async def test_board_name_is_stripped_and_required(client: AsyncClient) -> None:
  headers, _ = await signup(client, "alice")
  r = await client.post("/boards", json={"name": "   ", "color": "red"}, headers=headers)
  assert r.status_code == 422, r.text
  assert r.json()["errors"][0]["field"] == "name"

  r = await client.post("/boards", json={"name": "  Ops  ", "color": "red"}, headers=headers)
  assert r.status_code == 201, r.text
  assert r.json()["name"] == "Ops"


@pytest.mark.anyio
async def test_list_boards_for_user(client: AsyncClient) -> None:
  headers, user_id = await signup(client, "alice")
  _, other_id = await signup(client, "bobby")
  b1 = await make_board(client, headers, "One")
  b2 = await make_board(client, headers, "Two")

  r = await client.get(f"/boards/user/{user_id}", headers=headers)
  assert r.status_code == 200, r.text
  assert [b["id"] for b in r.json()] == [b1["id"], b2["id"]]

  r = await client.get(f"/boards/user/{other_id}", headers=headers)
  assert r.status_code == 403, r.text


@pytest.mark.anyio
async def test_board_detail_populates_lists_and_cards_in_order(client: AsyncClient) -> None:
  headers, _ = await signup(client, "alice")
  b = await make_board(client, headers)
  l1 = await make_list(client, headers, b["id"], "Todo")
  l2 = await make_list(client, headers, b["id"], "Done")
  c1 = await make_card(client, headers, l1["id"], "first")
  c2 = await make_card(client, headers, l1["id"], "second")

  r = await client.patch(
    "/boards/update/list/order",
    json={"boardId": b["id"], "listId": l2["id"], "srcIdx": 1, "desIdx": 0},
    headers=headers,
  )
  assert r.status_code == 201, r.text

  r = await client.get(f"/boards/{b['id']}", headers=headers)
  assert r.status_code == 200, r.text
  detail = r.json()
  assert detail["listOrder"] == [l2["id"], l1["id"]]
  assert [l["id"] for l in detail["lists"]] == [l2["id"], l1["id"]]
  assert detail["lists"][0]["cards"] == []
  assert [c["id"] for c in detail["lists"][1]["cards"]] == [c1["id"], c2["id"]]


@pytest.mark.anyio
async def test_board_detail_access_errors(client: AsyncClient) -> None:
  headers, _ = await signup(client, "alice")
  other_headers, _ = await signup(client, "bobby")
  b = await make_board(client, headers)

  r = await client.get(f"/boards/{b['id']}", headers=other_headers)
  assert r.status_code == 403, r.text

  r = await client.get("/boards/00000000-0000-0000-0000-000000000000", headers=headers)
  assert r.status_code == 404, r.text
  assert r.json()["detail"] == "boardId does not match any existing board"


@pytest.mark.anyio
async def test_update_board(client: AsyncClient) -> None:
  headers, _ = await signup(client, "alice")
  other_headers, _ = await signup(client, "bobby")
  b = await make_board(client, headers)

  r = await client.patch(f"/boards/{b['id']}", json={"color": "green"}, headers=headers)
  assert r.status_code == 200, r.text
  assert r.json()["color"] == "green"
  assert r.json()["name"] == b["name"]
  assert r.json()["updatedOn"] >= b["updatedOn"]

  r = await client.patch(f"/boards/{b['id']}", json={"name": "Stolen"}, headers=other_headers)
  assert r.status_code == 403, r.text


@pytest.mark.anyio
async def test_list_reorder_rejects_stale_requests(client: AsyncClient) -> None:
  headers, _ = await signup(client, "alice")
  b = await make_board(client, headers)
  l1 = await make_list(client, headers, b["id"], "A")
  l2 = await make_list(client, headers, b["id"], "B")

  r = await client.patch(
    "/boards/update/list/order",
    json={"boardId": b["id"], "listId": l1["id"], "srcIdx": 1, "desIdx": 0},
    headers=headers,
  )
  assert r.status_code == 422, r.text

  r = await client.patch(
    "/boards/update/list/order",
    json={"boardId": b["id"], "listId": l1["id"], "srcIdx": 0, "desIdx": 1, "listOrder": [l2["id"], l1["id"]]},
    headers=headers,
  )
  assert r.status_code == 422, r.text

  detail = (await client.get(f"/boards/{b['id']}", headers=headers)).json()
  assert detail["listOrder"] == [l1["id"], l2["id"]]


@pytest.mark.anyio
async def test_same_position_move_still_touches_board(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
  headers, _ = await signup(client, "alice")
  b = await make_board(client, headers)
  l1 = await make_list(client, headers, b["id"])

  monkeypatch.setattr("taskboard.ordering.now_ms", lambda: 4_102_444_800_000)
  r = await client.patch(
    "/boards/update/list/order",
    json={"boardId": b["id"], "listId": l1["id"], "srcIdx": 0, "desIdx": 0},
    headers=headers,
  )
  assert r.status_code == 201, r.text

  detail = (await client.get(f"/boards/{b['id']}", headers=headers)).json()
  assert detail["listOrder"] == [l1["id"]]
  assert detail["updatedOn"] == 4_102_444_800_000


@pytest.mark.anyio
async def test_delete_board_cascades(client: AsyncClient) -> None:
  headers, _ = await signup(client, "alice")
  b = await make_board(client, headers, "Doomed")
  l = await make_list(client, headers, b["id"])
  c = await make_card(client, headers, l["id"])

  r = await client.delete(f"/boards/{b['id']}", headers=headers)
  assert r.status_code == 200, r.text
  assert r.json()["message"] == "board Doomed successfully deleted"
  assert r.json()["deleted"] == {"card": 1, "list": 1, "board": 1}

  me = (await client.get("/user/me", headers=headers)).json()
  assert me["boards"] == []
  assert (await client.get(f"/lists/{l['id']}", headers=headers)).status_code == 404
  assert (await client.get(f"/cards/{c['id']}", headers=headers)).status_code == 404
