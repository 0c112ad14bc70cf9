from .board import Board, can_place, copy_board, is_solved, new_board
from .messages import (
    DecodeFailure,
    ErrorReply,
    JoinRequest,
    Lose,
    MessageDecodeError,
    OpponentLeft,
    OpponentProgress,
    ProgressUpdate,
    ServerMessage,
    Start,
    Waiting,
    WinClaim,
    WinConfirmed,
    decode_client_message,
)
from .puzzle import DEFAULT_CELLS_TO_REMOVE, DEFAULT_DIFFICULTY, DIFFICULTY_LEVELS, Puzzle, cells_to_remove
from .session import MAX_PLAYERS, GameSession, PlayerConnection, SessionSnapshot, SessionState

__all__ = [
    "Board",
    "can_place",
    "copy_board",
    "is_solved",
    "new_board",
    "Puzzle",
    "DIFFICULTY_LEVELS",
    "DEFAULT_DIFFICULTY",
    "DEFAULT_CELLS_TO_REMOVE",
    "cells_to_remove",
    "GameSession",
    "SessionSnapshot",
    "SessionState",
    "PlayerConnection",
    "MAX_PLAYERS",
    "DecodeFailure",
    "MessageDecodeError",
    "decode_client_message",
    "JoinRequest",
    "ProgressUpdate",
    "WinClaim",
    "ServerMessage",
    "Waiting",
    "Start",
    "OpponentProgress",
    "WinConfirmed",
    "Lose",
    "OpponentLeft",
    "ErrorReply",
]
