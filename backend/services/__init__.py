from .generator import PuzzleGenerator, generate_puzzle
from .registry import SessionRegistry
from .session_machine import JoinOutcome, SessionStateMachine
from .solver import count_solutions, fill_board

__all__ = [
    "fill_board",
    "count_solutions",
    "PuzzleGenerator",
    "generate_puzzle",
    "SessionRegistry",
    "SessionStateMachine",
    "JoinOutcome",
]
