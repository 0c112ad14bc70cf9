from __future__ import annotations

import random
from collections.abc import Callable
from typing import Any

import pytest

from models.puzzle import Puzzle
from services.generator import generate_puzzle
from services.registry import SessionRegistry
from services.session_machine import SessionStateMachine


class FakeConnection:
    """Stands in for a WebSocket: records every payload pushed to it."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.sent: list[dict[str, Any]] = []
        self.closed = False

    async def send_json(self, data: Any) -> None:
        if self.closed:
            raise RuntimeError(f"{self.name} socket is closed")
        self.sent.append(data)

    def types(self) -> list[str]:
        return [m["type"] for m in self.sent]

    def last(self) -> dict[str, Any]:
        return self.sent[-1]

    def __repr__(self) -> str:
        return f"FakeConnection({self.name!r})"


class StubGenerator:
    """Returns a fixed puzzle and remembers which difficulties and games were requested."""

    def __init__(self, puzzle: Puzzle) -> None:
        self.puzzle = puzzle
        self.requested: list[str | None] = []
        self.game_ids: list[str | None] = []

    def generate(self, difficulty: str | None, game_id: str | None = None) -> Puzzle:
        self.requested.append(difficulty)
        self.game_ids.append(game_id)
        return self.puzzle


@pytest.fixture(scope="session")
def trivial_puzzle() -> Puzzle:
    return generate_puzzle("trivial", random.Random(1234))


@pytest.fixture()
def generator(trivial_puzzle: Puzzle) -> StubGenerator:
    return StubGenerator(trivial_puzzle)


@pytest.fixture()
def machine(generator: StubGenerator) -> SessionStateMachine:
    return SessionStateMachine(SessionRegistry(), generator)


@pytest.fixture()
def make_conn() -> Callable[[str], FakeConnection]:
    return FakeConnection
