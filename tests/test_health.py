from __future__ import annotations

import pytest
from httpx import AsyncClient

from taskboard.config import settings


@pytest.mark.anyio
async def test_health_and_version(client: AsyncClient) -> None:
  r = await client.get("/health")
  assert r.status_code == 200, r.text
  assert r.json() == {"ok": True}
  assert r.headers.get("x-content-type-options") == "nosniff"

  v = await client.get("/version")
  assert v.status_code == 200, v.text
  assert v.json()["version"] == settings.app_version
