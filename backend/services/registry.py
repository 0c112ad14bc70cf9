from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone

from models.puzzle import Puzzle
from models.session import MAX_PLAYERS, GameSession, PlayerConnection, SessionState


@dataclass
class _GameLock:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


class SessionRegistry:
    """
    In-memory map of game id -> GameSession.

    Mutating calls are synchronous so each one is atomic on the event loop;
    callers wrap multi-step transitions (anything that awaits) in
    ``locked(game_id)``. Locks are per game, so different games never wait
    on each other.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, GameSession] = {}
        self._locks: dict[str, _GameLock] = {}

    @asynccontextmanager
    async def locked(self, game_id: str) -> AsyncIterator[None]:
        entry = self._locks.get(game_id)
        if entry is None:
            entry = self._locks[game_id] = _GameLock()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0 and self._locks.get(game_id) is entry:
                del self._locks[game_id]

    def get(self, game_id: str) -> GameSession | None:
        return self._sessions.get(game_id)

    def get_or_create(
        self, game_id: str, difficulty: str, player: PlayerConnection
    ) -> tuple[GameSession, bool]:
        session = self._sessions.get(game_id)
        if session is not None:
            return session, False
        session = GameSession(id=game_id, difficulty=difficulty, players=[player])
        self._sessions[game_id] = session
        return session, True

    def start_game(self, game_id: str, player: PlayerConnection, puzzle: Puzzle) -> GameSession:
        """Seat the second player and move a waiting game to active with its puzzle."""
        session = self._sessions[game_id]
        if session.is_full:
            raise ValueError(f"game {game_id!r} already has {MAX_PLAYERS} players")
        if session.state is not SessionState.WAITING:
            raise ValueError(f"game {game_id!r} is {session.state.value}, not waiting")
        session.players.append(player)
        session.puzzle = puzzle
        session.state = SessionState.ACTIVE
        return session

    def remove_player(self, game_id: str, player: PlayerConnection) -> list[PlayerConnection] | None:
        """
        Drop ``player`` from the game and return the players left behind.

        Deletes the session in the same step when nobody is left. Returns None
        if the game does not exist or ``player`` is not in it.
        """
        session = self._sessions.get(game_id)
        if session is None or not session.has_player(player):
            return None
        session.players = [p for p in session.players if p is not player]
        if not session.players:
            del self._sessions[game_id]
        return list(session.players)

    def claim_winner(self, game_id: str, player: PlayerConnection) -> GameSession | None:
        """
        Compare-and-set the winner; only the first claim on an active game succeeds.

        Returns the finished session, or None when the claim is refused.
        """
        session = self._sessions.get(game_id)
        if session is None or session.state is not SessionState.ACTIVE:
            return None
        if session.winner is not None or not session.has_player(player):
            return None
        session.winner = player
        session.state = SessionState.FINISHED
        session.finished_at = datetime.now(timezone.utc)
        return session

    def game_ids(self) -> Iterator[str]:
        return iter(list(self._sessions))

    def clear(self) -> None:
        self._sessions.clear()

    def __contains__(self, game_id: object) -> bool:
        return game_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
