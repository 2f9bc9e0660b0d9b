"""
Main API router for v1 endpoints
"""
import time
from fastapi import APIRouter

from app.api.v1.endpoints import auth, boards, lists, cards, websocket, health

api_router = APIRouter(prefix="/v1")


@api_router.get("/")
async def api_root():
    """API v1 root endpoint"""
    return {
        "success": True,
        "data": {
            "message": "Kanban Board API v1",
            "version": "1.0.0",
            "endpoints": {
                "auth": "/api/v1/auth",
                "boards": "/api/v1/boards",
                "lists": "/api/v1/boards/{board_id}/lists",
                "cards": "/api/v1/lists/{list_id}/cards",
                "websocket": "/api/v1/ws/boards"
            }
        },
        "timestamp": time.time()
    }


# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(boards.router, prefix="/boards", tags=["Boards"])

# Lists and cards are addressed both nested under their parent and directly by id
api_router.include_router(lists.router, tags=["Lists"])
api_router.include_router(cards.router, tags=["Cards"])
api_router.include_router(websocket.router, prefix="/ws", tags=["WebSocket"])
api_router.include_router(health.router, tags=["Health"])
