"""
WebSocket endpoints for real-time board updates
"""
import json
import logging
from typing import Optional
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Depends, status, Query

from app.core.database import async_session_factory
from app.core.db_types import parse_uuid
from app.core.deps import get_current_user, get_user_from_token
from app.core.exceptions import APIException
from app.core.permissions import require_member
from app.models.user import User
from app.services.websocket_manager import manager

router = APIRouter()
logger = logging.getLogger(__name__)


async def authorize_board_join(board_id: str, user_id: str):
    """Only board members may subscribe to a board channel"""
    async with async_session_factory() as db:
        await require_member(db, parse_uuid(board_id, "Board"), parse_uuid(user_id, "User"))


@router.websocket("/boards")
async def board_updates(
    websocket: WebSocket,
    token: Optional[str] = Query(None)
):
    """
    Realtime session for board channels

    Query parameters:
    - token: JWT access token

    Clients send `{"type": "joinBoard" | "leaveBoard", "payload": {"boardId": ...}}`
    and receive the events published on every board they joined.
    """
    if not token:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Authentication token required")
        return

    try:
        async with async_session_factory() as db:
            user = await get_user_from_token(token, db)
    except APIException as e:
        logger.warning("WebSocket authentication failed: %s", e.message)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Authentication failed")
        return

    session_id = await manager.connect(websocket, str(user.id))
    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                await websocket.send_text(json.dumps({
                    "type": "error",
                    "message": "Invalid JSON format",
                    "code": "VAL_003"
                }))
                continue
            if not isinstance(message, dict):
                await websocket.send_text(json.dumps({
                    "type": "error",
                    "message": "Message must be a JSON object",
                    "code": "VAL_003"
                }))
                continue
            await manager.handle_message(websocket, session_id, message, authorize_join=authorize_board_join)
    except WebSocketDisconnect:
        logger.info("WebSocket client left", extra={"user_id": str(user.id), "session_id": session_id})
    finally:
        await manager.disconnect(session_id)


@router.get("/stats")
async def get_websocket_stats(
    current_user: User = Depends(get_current_user)
):
    """Get WebSocket connection statistics"""
    return {
        "success": True,
        "data": manager.get_connection_stats()
    }
