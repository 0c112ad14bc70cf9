"""End-to-end game over the WebSocket endpoint using FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from services.solver import count_solutions
from services.store import session_machine


@pytest.fixture(autouse=True)
def clear_games() -> None:
    session_machine.registry.clear()
    yield
    session_machine.registry.clear()


@pytest.fixture()
def client() -> TestClient:
    # One portal (event loop) shared by every socket in the test.
    with TestClient(app) as test_client:
        yield test_client


def _join(game_id: str, difficulty: str = "trivial") -> dict:
    return {"type": "join", "gameId": game_id, "difficulty": difficulty}


def test_two_players_race_to_a_win(client: TestClient) -> None:
    with client.websocket_connect("/ws") as alice:
        alice.send_json(_join("ws-race"))
        assert alice.receive_json() == {"type": "waiting"}

        with client.websocket_connect("/ws") as bob:
            bob.send_json(_join("ws-race", "insane"))
            start_a = alice.receive_json()
            start_b = bob.receive_json()

            assert start_a["type"] == "start"
            assert start_a == start_b
            puzzle, solution = start_a["puzzle"], start_a["solution"]
            diff = [(r, c) for r in range(9) for c in range(9) if puzzle[r][c] != solution[r][c]]
            assert len(diff) == 1    # alice's "trivial" won over bob's "insane"
            assert count_solutions(puzzle) == 1

            bob.send_json({"type": "progress", "gameId": "ws-race", "progress": 40})
            assert alice.receive_json() == {"type": "opponentProgress", "progress": 40}

            alice.send_json({"type": "win", "gameId": "ws-race", "time": "01:23"})
            assert alice.receive_json() == {"type": "win"}
            assert bob.receive_json() == {"type": "lose", "time": "01:23"}

            status = client.get("/api/games/ws-race").json()
            assert status["state"] == "finished"
            assert status["has_winner"] is True

        assert alice.receive_json() == {"type": "opponentLeft"}
        assert client.get("/api/games/ws-race").json()["player_count"] == 1


def test_third_player_is_turned_away(client: TestClient) -> None:
    with client.websocket_connect("/ws") as a, client.websocket_connect("/ws") as b:
        a.send_json(_join("ws-full"))
        assert a.receive_json()["type"] == "waiting"
        b.send_json(_join("ws-full"))
        assert a.receive_json()["type"] == "start"
        assert b.receive_json()["type"] == "start"

        with client.websocket_connect("/") as c:
            c.send_json(_join("ws-full"))
            assert c.receive_json() == {"type": "error", "message": "Game is full."}

        assert client.get("/api/games/ws-full").json()["player_count"] == 2


def test_malformed_frames_get_error_and_connection_stays_usable(client: TestClient) -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_text("this is not json")
        reply = ws.receive_json()
        assert reply["type"] == "error"

        ws.send_json({"type": "join"})
        assert ws.receive_json()["type"] == "error"

        ws.send_json(_join("ws-after-error"))
        assert ws.receive_json() == {"type": "waiting"}
