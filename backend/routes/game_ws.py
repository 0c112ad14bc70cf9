from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from services.connection_handler import ConnectionHandler
from services.store import session_machine

router = APIRouter(tags=["game"])
logger = logging.getLogger(__name__)


@router.websocket("/ws")
@router.websocket("/")
async def ws_game(websocket: WebSocket) -> None:
    """
    One player's game connection.

    Inbound frames are JSON messages (join / progress / win); replies and
    opponent events are pushed back as JSON on the same socket.
    """
    try:
        await websocket.accept()
    except Exception as e:
        logger.warning("[game_ws] accept() failed: %s", e)
        return
    logger.info("[game_ws] Client connected")
    handler = ConnectionHandler(websocket, session_machine)
    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                break
            raw = frame.get("text")
            if raw is None:
                raw = frame.get("bytes") or b""
            await handler.handle_message(raw)
    except WebSocketDisconnect:
        pass
    finally:
        logger.info("[game_ws] Client disconnected game_id=%r", handler.game_id)
        await handler.close()
