"""
Wire messages exchanged over the game WebSocket.

Client -> server messages form a closed tagged union keyed on ``type``;
``decode_client_message`` is the only way raw frames enter the game logic.
Server -> client messages serialize with ``model_dump(by_alias=True)``.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from .board import Board
from .puzzle import DEFAULT_DIFFICULTY


class _ClientMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True, frozen=True)

    game_id: str = Field(alias="gameId", min_length=1)


class JoinRequest(_ClientMessage):
    type: Literal["join"] = "join"
    difficulty: str = DEFAULT_DIFFICULTY

    @field_validator("difficulty", mode="before")
    @classmethod
    def _null_difficulty_is_default(cls, value: Any) -> Any:
        return DEFAULT_DIFFICULTY if value is None else value


class ProgressUpdate(_ClientMessage):
    type: Literal["progress"] = "progress"
    progress: Any


class WinClaim(_ClientMessage):
    type: Literal["win"] = "win"
    time: Any = None


ClientMessage = Annotated[
    Union[JoinRequest, ProgressUpdate, WinClaim],
    Field(discriminator="type"),
]

CLIENT_MESSAGE_TYPES = frozenset({"join", "progress", "win"})

_client_message_adapter: TypeAdapter[ClientMessage] = TypeAdapter(ClientMessage)


class DecodeFailure(str, Enum):
    INVALID_JSON = "invalid_json"
    NOT_AN_OBJECT = "not_an_object"
    MISSING_TYPE = "missing_type"
    UNKNOWN_TYPE = "unknown_type"
    INVALID_FIELDS = "invalid_fields"


class MessageDecodeError(ValueError):
    def __init__(self, kind: DecodeFailure, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


def decode_client_message(raw: str | bytes) -> JoinRequest | ProgressUpdate | WinClaim:
    """
    Parse one inbound frame into a typed client message.

    Raises MessageDecodeError with a specific DecodeFailure kind when the
    frame is not JSON (or nests too deeply to parse), not an object, has
    no/unknown ``type`` or fails field validation (e.g. missing ``gameId``).
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise MessageDecodeError(DecodeFailure.INVALID_JSON, "Message is not valid JSON.") from exc

    if not isinstance(data, dict):
        raise MessageDecodeError(DecodeFailure.NOT_AN_OBJECT, "Message must be a JSON object.")

    msg_type = data.get("type")
    if msg_type is None:
        raise MessageDecodeError(DecodeFailure.MISSING_TYPE, "Message type is required.")
    if not isinstance(msg_type, str) or msg_type not in CLIENT_MESSAGE_TYPES:
        raise MessageDecodeError(DecodeFailure.UNKNOWN_TYPE, f"Unknown message type: {msg_type!r}.")

    try:
        return _client_message_adapter.validate_python(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field_name = ".".join(str(part) for part in first["loc"][1:]) or "message"
        raise MessageDecodeError(
            DecodeFailure.INVALID_FIELDS,
            f"Invalid {msg_type} message: {field_name} {first['msg'].lower()}.",
        ) from exc


class ServerMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Waiting(ServerMessage):
    type: Literal["waiting"] = "waiting"


class Start(ServerMessage):
    type: Literal["start"] = "start"
    puzzle: Board
    solution: Board


class OpponentProgress(ServerMessage):
    type: Literal["opponentProgress"] = "opponentProgress"
    progress: Any


class WinConfirmed(ServerMessage):
    type: Literal["win"] = "win"


class Lose(ServerMessage):
    type: Literal["lose"] = "lose"
    time: Any = None


class OpponentLeft(ServerMessage):
    type: Literal["opponentLeft"] = "opponentLeft"


class ErrorReply(ServerMessage):
    type: Literal["error"] = "error"
    message: str
