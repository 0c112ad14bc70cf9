"""9x9 Sudoku board helpers. A board is a list of rows; 0 marks an empty cell."""

from __future__ import annotations

Board = list[list[int]]

N = 9
BOX = 3
DIGITS = tuple(range(1, N + 1))


def new_board() -> Board:
    return [[0] * N for _ in range(N)]


def copy_board(board: Board) -> Board:
    return [list(row) for row in board]


def box_index(row: int, col: int) -> int:
    """Index (0-8, row-major) of the 3x3 box containing (row, col)."""
    return (row // BOX) * BOX + col // BOX


def can_place(board: Board, row: int, col: int, digit: int) -> bool:
    """True if digit is absent from the row, column and box of (row, col)."""
    if any(board[row][x] == digit for x in range(N)):
        return False
    if any(board[x][col] == digit for x in range(N)):
        return False
    start_row, start_col = row - row % BOX, col - col % BOX
    for r in range(start_row, start_row + BOX):
        for c in range(start_col, start_col + BOX):
            if board[r][c] == digit:
                return False
    return True


def empty_cells(board: Board) -> list[tuple[int, int]]:
    return [(r, c) for r in range(N) for c in range(N) if board[r][c] == 0]


def is_solved(board: Board) -> bool:
    """True if every row, column and box is a permutation of 1-9."""
    expected = set(DIGITS)
    if len(board) != N or any(len(row) != N for row in board):
        return False
    for i in range(N):
        if set(board[i]) != expected:
            return False
        if {board[r][i] for r in range(N)} != expected:
            return False
    for box in range(N):
        r0, c0 = (box // BOX) * BOX, (box % BOX) * BOX
        cells = {board[r][c] for r in range(r0, r0 + BOX) for c in range(c0, c0 + BOX)}
        if cells != expected:
            return False
    return True
