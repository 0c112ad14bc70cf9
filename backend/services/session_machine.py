from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Protocol

from models.messages import (
    ErrorReply,
    Lose,
    OpponentLeft,
    OpponentProgress,
    ServerMessage,
    Start,
    Waiting,
    WinConfirmed,
)
from models.puzzle import Puzzle
from models.session import PlayerConnection, SessionSnapshot, SessionState
from services.registry import SessionRegistry

logger = logging.getLogger(__name__)


class PuzzleSource(Protocol):
    def generate(self, difficulty: str | None, game_id: str | None = None) -> Puzzle: ...


class JoinOutcome(str, Enum):
    WAITING = "waiting"
    STARTED = "started"
    REJECTED = "rejected"


async def send_message(connection: PlayerConnection, message: ServerMessage) -> None:
    """Push one server message; a dead socket is logged, never raised to the caller."""
    try:
        await connection.send_json(message.to_payload())
    except Exception as e:
        logger.warning("[session_machine] send %s failed: %s", message.type, e)


class SessionStateMachine:
    """
    Drives each game through waiting -> active -> finished.

    Every transition runs under the game's registry lock, so join races,
    simultaneous win claims and disconnects of one game are serialized while
    other games proceed independently.
    """

    def __init__(self, registry: SessionRegistry, generator: PuzzleSource) -> None:
        self._registry = registry
        self._generator = generator

    @property
    def registry(self) -> SessionRegistry:
        return self._registry

    async def join(self, game_id: str, difficulty: str, conn: PlayerConnection) -> JoinOutcome:
        async with self._registry.locked(game_id):
            session, created = self._registry.get_or_create(game_id, difficulty, conn)
            if created:
                logger.info("[session_machine] Game %s created difficulty=%s; waiting for opponent", game_id, difficulty)
                await send_message(conn, Waiting())
                return JoinOutcome.WAITING

            if session.has_player(conn):
                await send_message(conn, ErrorReply(message="Already joined this game."))
                return JoinOutcome.REJECTED
            if session.is_full:
                logger.info("[session_machine] Game %s is full; join rejected", game_id)
                await send_message(conn, ErrorReply(message="Game is full."))
                return JoinOutcome.REJECTED
            if session.state is not SessionState.WAITING:
                await send_message(conn, ErrorReply(message="Game is no longer accepting players."))
                return JoinOutcome.REJECTED

            # The first player's difficulty wins; generation is CPU-bound, keep it off the loop.
            puzzle = await asyncio.to_thread(self._generator.generate, session.difficulty, game_id)
            session = self._registry.start_game(game_id, conn, puzzle)
            logger.info(
                "[session_machine] Game %s started difficulty=%s clues=%d",
                game_id,
                session.difficulty,
                puzzle.clue_count,
            )
            start = Start(puzzle=puzzle.grid, solution=puzzle.solution)
            for player in list(session.players):
                await send_message(player, start)
            return JoinOutcome.STARTED

    async def progress(self, game_id: str, progress: Any, conn: PlayerConnection) -> None:
        async with self._registry.locked(game_id):
            session = self._registry.get(game_id)
            if session is None or not session.has_player(conn):
                return
            opponent = session.opponent_of(conn)
            if opponent is not None:
                await send_message(opponent, OpponentProgress(progress=progress))

    async def win(self, game_id: str, time: Any, conn: PlayerConnection) -> bool:
        async with self._registry.locked(game_id):
            session = self._registry.claim_winner(game_id, conn)
            if session is None:
                logger.info("[session_machine] Win claim for game %s dropped", game_id)
                return False
            logger.info("[session_machine] Game %s won time=%r", game_id, time)
            await send_message(conn, WinConfirmed())
            opponent = session.opponent_of(conn)
            if opponent is not None:
                await send_message(opponent, Lose(time=time))
            return True

    async def disconnect(self, game_id: str, conn: PlayerConnection) -> None:
        async with self._registry.locked(game_id):
            remaining = self._registry.remove_player(game_id, conn)
            if remaining is None:
                return
            if not remaining:
                logger.info("[session_machine] Game %s empty; removed", game_id)
                return
            logger.info("[session_machine] Player left game %s; notifying opponent", game_id)
            for player in remaining:
                await send_message(player, OpponentLeft())

    def snapshot(self, game_id: str) -> SessionSnapshot | None:
        session = self._registry.get(game_id)
        return SessionSnapshot.of(session) if session is not None else None
