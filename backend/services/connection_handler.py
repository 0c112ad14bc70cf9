from __future__ import annotations

import logging
from typing import assert_never

from models.messages import (
    ErrorReply,
    JoinRequest,
    MessageDecodeError,
    ProgressUpdate,
    WinClaim,
    decode_client_message,
)
from models.session import PlayerConnection
from services.session_machine import JoinOutcome, SessionStateMachine, send_message

logger = logging.getLogger(__name__)


class ConnectionHandler:
    """
    Per-connection glue between raw WebSocket frames and the state machine.

    Remembers the game this connection joined so ``close()`` can clean up
    without scanning every session.
    """

    def __init__(self, connection: PlayerConnection, machine: SessionStateMachine) -> None:
        self._connection = connection
        self._machine = machine
        self.game_id: str | None = None

    async def handle_message(self, raw: str | bytes) -> None:
        try:
            message = decode_client_message(raw)
        except MessageDecodeError as e:
            logger.warning("[connection] Rejected frame kind=%s: %s", e.kind.value, e.message)
            await send_message(self._connection, ErrorReply(message=e.message))
            return

        match message:
            case JoinRequest():
                await self._join(message)
            case ProgressUpdate():
                await self._machine.progress(message.game_id, message.progress, self._connection)
            case WinClaim():
                await self._machine.win(message.game_id, message.time, self._connection)
            case _:
                assert_never(message)

    async def _join(self, message: JoinRequest) -> None:
        if self.game_id is not None:
            await send_message(self._connection, ErrorReply(message="Already in a game."))
            return
        outcome = await self._machine.join(message.game_id, message.difficulty, self._connection)
        if outcome is not JoinOutcome.REJECTED:
            self.game_id = message.game_id

    async def close(self) -> None:
        if self.game_id is None:
            return
        game_id, self.game_id = self.game_id, None
        await self._machine.disconnect(game_id, self._connection)
