"""Tests for GET /api/games/{id} against the process-wide session store."""

import httpx
import pytest

from app.main import app
from services.store import session_machine


class _Conn:
    def __init__(self) -> None:
        self.sent: list[dict] = []

    async def send_json(self, data) -> None:
        self.sent.append(data)


@pytest.fixture(autouse=True)
def clear_games() -> None:
    """Isolate tests by clearing the in-memory game registry."""
    session_machine.registry.clear()
    yield
    session_machine.registry.clear()


@pytest.mark.anyio
async def test_get_game_returns_404_when_missing() -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/games/nonexistent")
    assert response.status_code == 404
    assert response.json()["detail"] == "Game not found"


@pytest.mark.anyio
async def test_get_game_reports_waiting_game() -> None:
    await session_machine.join("api-game", "hard", _Conn())

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/games/api-game")
    assert response.status_code == 200
    body = response.json()
    assert body["game_id"] == "api-game"
    assert body["state"] == "waiting"
    assert body["player_count"] == 1
    assert body["difficulty"] == "hard"
    assert body["has_winner"] is False
    assert "players" not in body
