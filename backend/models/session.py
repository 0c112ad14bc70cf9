from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Protocol

from .puzzle import Puzzle

MAX_PLAYERS = 2


class SessionState(str, Enum):
    WAITING = "waiting"
    ACTIVE = "active"
    FINISHED = "finished"


class PlayerConnection(Protocol):
    """Anything that can push a JSON payload to one client (e.g. a WebSocket)."""

    async def send_json(self, data: Any) -> None: ...


@dataclass
class GameSession:
    id: str                                # caller-supplied game id
    difficulty: str
    players: list[PlayerConnection] = field(default_factory=list)
    puzzle: Puzzle | None = None
    winner: PlayerConnection | None = None
    state: SessionState = SessionState.WAITING
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: datetime | None = None

    @property
    def is_full(self) -> bool:
        return len(self.players) >= MAX_PLAYERS

    def has_player(self, player: PlayerConnection) -> bool:
        return any(p is player for p in self.players)

    def opponent_of(self, player: PlayerConnection) -> PlayerConnection | None:
        for p in self.players:
            if p is not player:
                return p
        return None


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session, safe to hand out beyond the state machine."""

    game_id: str
    state: SessionState
    player_count: int
    difficulty: str
    has_winner: bool
    started_at: datetime

    @classmethod
    def of(cls, session: GameSession) -> "SessionSnapshot":
        return cls(
            game_id=session.id,
            state=session.state,
            player_count=len(session.players),
            difficulty=session.difficulty,
            has_winner=session.winner is not None,
            started_at=session.started_at,
        )
