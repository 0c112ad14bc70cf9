"""Read-only game REST API: difficulty presets and session status."""

import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from models.puzzle import DEFAULT_CELLS_TO_REMOVE, DIFFICULTY_LEVELS
from models.session import SessionState
from services.store import session_machine

router = APIRouter(tags=["games"])
logger = logging.getLogger(__name__)


class DifficultiesResponse(BaseModel):
    levels: dict[str, int]
    default: int


class GameStatusResponse(BaseModel):
    """Game status for polling. GET /api/games/{id}."""

    game_id: str
    state: SessionState
    player_count: int
    difficulty: str
    has_winner: bool
    started_at: datetime


@router.get("/difficulties", response_model=DifficultiesResponse)
def list_difficulties() -> DifficultiesResponse:
    return DifficultiesResponse(levels=dict(DIFFICULTY_LEVELS), default=DEFAULT_CELLS_TO_REMOVE)


@router.get("/games/{game_id}", response_model=GameStatusResponse)
def get_game(game_id: str) -> GameStatusResponse:
    snapshot = session_machine.snapshot(game_id)
    if snapshot is None:
        raise HTTPException(status_code=404, detail="Game not found")
    logger.debug("[games] GET /api/games/%s state=%s", game_id, snapshot.state)
    return GameStatusResponse(
        game_id=snapshot.game_id,
        state=snapshot.state,
        player_count=snapshot.player_count,
        difficulty=snapshot.difficulty,
        has_winner=snapshot.has_winner,
        started_at=snapshot.started_at,
    )
