"""
Real-time chat channel over a websocket.

Clients send ``{"user": ..., "message": ...}``; each line is stored in
``messages`` and broadcast to everyone connected.
"""
import json
import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, Field, ValidationError

from ..config.database import get_database
from ..models import MessageDocument

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Realtime"])


class IncomingMessage(BaseModel):
    user: str = Field(..., min_length=1, max_length=100)
    message: str = Field(..., min_length=1, max_length=2000)


class ConnectionManager:
    """Open websocket connections of one application."""

    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info(f"Websocket connected ({len(self.active_connections)} open)")

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
        logger.info(f"Websocket disconnected ({len(self.active_connections)} open)")

    async def broadcast(self, data: dict) -> None:
        for connection in list(self.active_connections):
            try:
                await connection.send_json(data)
            except (WebSocketDisconnect, RuntimeError):
                self.disconnect(connection)


@router.websocket("/ws")
async def chat_socket(websocket: WebSocket, db=Depends(get_database)):
    manager: ConnectionManager = websocket.app.state.connections
    await manager.connect(websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                incoming = IncomingMessage.model_validate(json.loads(raw))
            except (ValueError, ValidationError):
                await websocket.send_json({"error": "Expected a JSON object with 'user' and 'message'"})
                continue

            document = MessageDocument(
                user=incoming.user,
                message=incoming.message,
                created_at=datetime.now(timezone.utc),
            )
            await db.messages.insert_one(document.model_dump())
            await manager.broadcast(document.model_dump(mode="json"))
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket)
