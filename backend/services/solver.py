"""Backtracking solver and bounded solution counter for 9x9 Sudoku."""

from __future__ import annotations

import random

from models.board import DIGITS, N, Board, box_index, can_place, copy_board, new_board

_ALL_DIGITS_MASK = sum(1 << d for d in DIGITS)


def fill_board(board: Board | None = None, rng: random.Random | None = None) -> Board:
    """
    Return a complete, valid grid built by randomized backtracking.

    Cells are visited in row-major order; each empty cell tries 1-9 in an order
    shuffled by ``rng``. The input board (empty by default) is not mutated.
    Raises ValueError if the given clues admit no completion.
    """
    rng = rng or random.Random()
    work = copy_board(board) if board is not None else new_board()
    if not _fill(work, 0, rng):
        raise ValueError("board has no valid completion")
    return work


def _fill(board: Board, start: int, rng: random.Random) -> bool:
    for index in range(start, N * N):
        row, col = divmod(index, N)
        if board[row][col]:
            continue
        digits = list(DIGITS)
        rng.shuffle(digits)
        for digit in digits:
            if can_place(board, row, col, digit):
                board[row][col] = digit
                if _fill(board, index + 1, rng):
                    return True
                board[row][col] = 0
        return False
    return True


def count_solutions(board: Board, limit: int = 2) -> int:
    """
    Count completions of ``board``, stopping once ``limit`` have been found.

    With the default limit of 2 the result tells apart "no solution" (0),
    "unique" (1) and "ambiguous" (2). Boards whose clues already clash
    return 0. The input board is not mutated.
    """
    work = copy_board(board)
    rows = [0] * N
    cols = [0] * N
    boxes = [0] * N
    empties: list[tuple[int, int, int]] = []

    for r in range(N):
        for c in range(N):
            digit = work[r][c]
            b = box_index(r, c)
            if not digit:
                empties.append((r, c, b))
                continue
            bit = 1 << digit
            if rows[r] & bit or cols[c] & bit or boxes[b] & bit:
                return 0
            rows[r] |= bit
            cols[c] |= bit
            boxes[b] |= bit

    count = 0

    def search() -> None:
        nonlocal count
        # Most-constrained empty cell first; the count does not depend on visiting order.
        best: tuple[int, int, int] | None = None
        best_mask = 0
        best_options = N + 1
        for r, c, b in empties:
            if work[r][c]:
                continue
            mask = _ALL_DIGITS_MASK & ~(rows[r] | cols[c] | boxes[b])
            options = mask.bit_count()
            if options == 0:
                return
            if options < best_options:
                best, best_mask, best_options = (r, c, b), mask, options
                if options == 1:
                    break

        if best is None:
            count += 1
            return

        r, c, b = best
        for digit in DIGITS:
            bit = 1 << digit
            if not best_mask & bit:
                continue
            work[r][c] = digit
            rows[r] |= bit
            cols[c] |= bit
            boxes[b] |= bit
            search()
            work[r][c] = 0
            rows[r] &= ~bit
            cols[c] &= ~bit
            boxes[b] &= ~bit
            if count >= limit:
                return

    search()
    return min(count, limit)
