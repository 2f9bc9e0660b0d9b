"""
WebSocket connection manager for realtime board updates
"""
import asyncio
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional, Set

from fastapi import WebSocket

from app.config import settings
from app.core.exceptions import APIException

logger = logging.getLogger(__name__)

# Events published on a board channel
CARD_CREATED = "cardCreated"
CARD_UPDATED = "cardUpdated"
CARD_DELETED = "cardDeleted"
CARD_MOVED = "cardMoved"
LIST_REORDERED = "listReordered"

# Control signals sent by clients
JOIN_BOARD = "joinBoard"
LEAVE_BOARD = "leaveBoard"

JoinAuthorizer = Callable[[str, str], Awaitable[None]]


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ConnectionManager:
    """
    Process-wide registry of websocket sessions and the board channels they
    joined. Nothing here is persisted; a restart empties every channel.
    """

    def __init__(self):
        # Active sockets by session ID (one per connected tab)
        self.active_connections: Dict[str, WebSocket] = {}

        # Session to user mapping
        self.session_users: Dict[str, str] = {}

        # Board channels (sessions subscribed to board events)
        self.board_rooms: Dict[str, Set[str]] = {}

        self._lock = asyncio.Lock()
        self._pending: Set[asyncio.Task] = set()

    async def connect(self, websocket: WebSocket, user_id: str) -> str:
        """Accept a WebSocket connection and register the session"""
        await websocket.accept()
        session_id = uuid.uuid4().hex
        async with self._lock:
            self.active_connections[session_id] = websocket
            self.session_users[session_id] = str(user_id)
        logger.info("WebSocket connected", extra={"user_id": str(user_id), "session_id": session_id})
        return session_id

    async def disconnect(self, session_id: str):
        """Remove a session and every channel subscription it holds"""
        async with self._lock:
            self.active_connections.pop(session_id, None)
            user_id = self.session_users.pop(session_id, None)
            for board_id, sessions in list(self.board_rooms.items()):
                sessions.discard(session_id)
                if not sessions:
                    del self.board_rooms[board_id]
        logger.info("WebSocket disconnected", extra={"user_id": user_id, "session_id": session_id})

    async def join_board(self, session_id: str, board_id: str):
        async with self._lock:
            if session_id not in self.active_connections:
                return
            self.board_rooms.setdefault(str(board_id), set()).add(session_id)
        logger.debug("Session %s joined board %s", session_id, board_id)

    async def leave_board(self, session_id: str, board_id: str):
        async with self._lock:
            sessions = self.board_rooms.get(str(board_id))
            if sessions is not None:
                sessions.discard(session_id)
                if not sessions:
                    del self.board_rooms[str(board_id)]
        logger.debug("Session %s left board %s", session_id, board_id)

    def publish(self, board_id: Any, event_name: str, payload: Any) -> None:
        """
        Schedule delivery of an event to every session on the board channel.

        Returns immediately. Delivery problems are logged and never reach
        the caller.
        """
        message = {
            "type": event_name,
            "payload": payload,
            "timestamp": _timestamp()
        }
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, dropping %s for board %s", event_name, board_id)
            return

        task = loop.create_task(self._broadcast(str(board_id), message))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _broadcast(self, board_id: str, message: dict) -> int:
        try:
            async with self._lock:
                targets = [
                    (session_id, self.active_connections[session_id])
                    for session_id in self.board_rooms.get(board_id, ())
                    if session_id in self.active_connections
                ]
            if not targets:
                return 0

            text = json.dumps(message, default=str)
            results = await asyncio.gather(
                *(self._send(session_id, websocket, text) for session_id, websocket in targets)
            )

            # Clean up broken connections
            for (session_id, _), delivered in zip(targets, results):
                if not delivered:
                    await self.disconnect(session_id)

            sent_count = sum(1 for delivered in results if delivered)
            logger.debug(
                "Published %s to %d/%d sessions on board %s",
                message["type"], sent_count, len(targets), board_id
            )
            return sent_count
        except Exception:
            logger.exception("Failed to publish %s to board %s", message.get("type"), board_id)
            return 0

    async def _send(self, session_id: str, websocket: WebSocket, text: str) -> bool:
        try:
            await asyncio.wait_for(websocket.send_text(text), timeout=settings.ws_send_timeout)
            return True
        except Exception as e:
            logger.warning("Error sending to session %s: %s", session_id, e)
            return False

    async def drain(self):
        """Wait for scheduled deliveries to finish"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def get_connection_stats(self):
        return {
            "total_connections": len(self.active_connections),
            "board_rooms": {board_id: len(sessions) for board_id, sessions in self.board_rooms.items()}
        }

    async def handle_message(
        self,
        websocket: WebSocket,
        session_id: str,
        message: dict,
        authorize_join: Optional[JoinAuthorizer] = None
    ):
        """Handle incoming control messages; successful joins/leaves are silent"""
        message_type = message.get("type")
        payload = message.get("payload") or {}
        board_id = payload.get("boardId") if isinstance(payload, dict) else None

        try:
            if message_type == JOIN_BOARD:
                if not board_id:
                    raise APIException("boardId is required", status_code=400, error_code="VAL_002")
                if authorize_join is not None:
                    await authorize_join(str(board_id), self.session_users.get(session_id))
                await self.join_board(session_id, str(board_id))

            elif message_type == LEAVE_BOARD:
                if board_id:
                    await self.leave_board(session_id, str(board_id))

            elif message_type == "ping":
                await websocket.send_text(json.dumps({"type": "pong", "timestamp": _timestamp()}))

            else:
                raise APIException(f"Unknown message type: {message_type}", status_code=400, error_code="VAL_001")

        except APIException as e:
            logger.warning("Rejected %s from session %s: %s", message_type, session_id, e.message)
            await websocket.send_text(json.dumps({
                "type": "error",
                "message": e.message,
                "code": e.error_code,
                "timestamp": _timestamp()
            }))
        except Exception:
            logger.exception("Failed to handle %s from session %s", message_type, session_id)
            await websocket.send_text(json.dumps({
                "type": "error",
                "message": "Internal server error",
                "code": "SYS_001",
                "timestamp": _timestamp()
            }))


# Global connection manager instance
manager = ConnectionManager()
