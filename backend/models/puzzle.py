from dataclasses import dataclass

from .board import Board, N

# Number of clues removed from the solved grid for each named difficulty.
DIFFICULTY_LEVELS: dict[str, int] = {
    "trivial": 1,
    "beginner": 35,
    "medium": 45,
    "hard": 52,
    "expert": 57,
    "master": 61,
    "legendary": 63,
    "insane": 64,
}

DEFAULT_DIFFICULTY = "medium"
DEFAULT_CELLS_TO_REMOVE = 45


def cells_to_remove(difficulty: str | None) -> int:
    """Removal target for a difficulty name; unknown names get the default."""
    if not difficulty:
        return DEFAULT_CELLS_TO_REMOVE
    return DIFFICULTY_LEVELS.get(difficulty, DEFAULT_CELLS_TO_REMOVE)


@dataclass(frozen=True)
class Puzzle:
    grid: Board                # solution with some cells zeroed
    solution: Board            # fully solved grid

    @property
    def clue_count(self) -> int:
        return sum(1 for row in self.grid for value in row if value)

    @property
    def removed_count(self) -> int:
        return N * N - self.clue_count
