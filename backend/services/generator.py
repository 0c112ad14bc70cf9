from __future__ import annotations

import logging
import random

from models.board import N, copy_board
from models.puzzle import Puzzle, cells_to_remove
from services.solver import count_solutions, fill_board

logger = logging.getLogger(__name__)


class PuzzleGenerator:
    """
    Build uniquely-solvable puzzles for a named difficulty.

    A full grid is produced first, then cells are zeroed in a random order;
    a removal is kept only if the puzzle still has exactly one solution.

    Pass a seeded ``random.Random`` for reproducible puzzles from one caller.
    With a base ``seed`` each game id gets its own ``random.Random`` derived
    from ``(seed, game_id)``, so a game's puzzle does not depend on which
    other games are generated at the same time.
    """

    def __init__(self, rng: random.Random | None = None, seed: int | None = None) -> None:
        self._rng = rng or random.Random()
        self._seed = seed

    def _rng_for(self, game_id: str | None) -> random.Random:
        if self._seed is None or game_id is None:
            return self._rng
        return random.Random(f"{self._seed}:{game_id}")

    def generate(self, difficulty: str | None, game_id: str | None = None) -> Puzzle:
        rng = self._rng_for(game_id)
        solution = fill_board(rng=rng)
        target = cells_to_remove(difficulty)

        positions = [(r, c) for r in range(N) for c in range(N)]
        rng.shuffle(positions)

        grid = copy_board(solution)
        removed = 0
        for row, col in positions:
            if removed >= target:
                break
            digit = grid[row][col]
            grid[row][col] = 0
            if count_solutions(grid) != 1:
                grid[row][col] = digit
            else:
                removed += 1

        if removed < target:
            logger.debug(
                "[generator] difficulty=%s removed %d of %d cells before uniqueness would break",
                difficulty,
                removed,
                target,
            )
        logger.info("[generator] Generated puzzle difficulty=%s clues=%d", difficulty, N * N - removed)
        return Puzzle(grid=grid, solution=solution)


def generate_puzzle(difficulty: str | None, rng: random.Random | None = None) -> Puzzle:
    return PuzzleGenerator(rng).generate(difficulty)
