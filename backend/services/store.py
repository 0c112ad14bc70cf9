"""In-memory game store for the process. Keyed by game ID, lost on restart."""

from app.config import load_settings
from services.generator import PuzzleGenerator
from services.registry import SessionRegistry
from services.session_machine import SessionStateMachine

# With PUZZLE_SEED set, each game's puzzle is seeded from (seed, game id).
session_machine = SessionStateMachine(
    SessionRegistry(),
    PuzzleGenerator(seed=load_settings().puzzle_seed),
)
