"""
List management endpoints
"""
import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func

from app.core.database import get_db
from app.core.db_types import parse_uuid
from app.core.deps import get_current_user
from app.core.exceptions import ResourceNotFoundError
from app.core.permissions import require_member, require_owner
from app.models.user import User
from app.models.board_list import BoardList
from app.models.card import Card
from app.schemas.board_list import ListCreate, ListUpdate, ListResponse

router = APIRouter()
logger = logging.getLogger(__name__)


async def _get_list(db: AsyncSession, list_id: str) -> BoardList:
    list_uuid = parse_uuid(list_id, "List")
    result = await db.execute(select(BoardList).where(BoardList.id == list_uuid))
    board_list = result.scalar_one_or_none()
    if not board_list:
        raise ResourceNotFoundError("List")
    return board_list


@router.get("/boards/{board_id}/lists", response_model=List[ListResponse])
async def get_lists(
    board_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get all lists of a board sorted by order"""
    board_uuid = parse_uuid(board_id, "Board")
    await require_member(db, board_uuid, current_user.id)

    result = await db.execute(
        select(BoardList)
        .where(BoardList.board_id == board_uuid)
        .order_by(BoardList.order, BoardList.created_at)
    )
    return [ListResponse.from_list(board_list) for board_list in result.scalars().all()]


@router.post("/boards/{board_id}/lists", response_model=ListResponse, status_code=201)
async def create_list(
    board_id: str,
    list_data: ListCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a list at the end of a board (owner only)"""
    board_uuid = parse_uuid(board_id, "Board")
    await require_owner(db, board_uuid, current_user.id)

    result = await db.execute(
        select(func.max(BoardList.order)).where(BoardList.board_id == board_uuid)
    )
    max_order = result.scalar_one_or_none()

    board_list = BoardList(
        title=list_data.title,
        board_id=board_uuid,
        order=0 if max_order is None else max_order + 1
    )
    db.add(board_list)
    await db.commit()

    logger.info("List created", extra={"board_id": str(board_uuid), "user_id": str(current_user.id)})
    return ListResponse.from_list(board_list)


@router.get("/lists/{list_id}", response_model=ListResponse)
async def get_list(
    list_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    board_list = await _get_list(db, list_id)
    await require_member(db, board_list.board_id, current_user.id)
    return ListResponse.from_list(board_list)


@router.put("/lists/{list_id}", response_model=ListResponse)
async def update_list(
    list_id: str,
    list_data: ListUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Rename or reposition a list (owner only)"""
    board_list = await _get_list(db, list_id)
    await require_owner(db, board_list.board_id, current_user.id)

    if list_data.title is not None:
        board_list.title = list_data.title
    if list_data.order is not None:
        board_list.order = list_data.order
    await db.commit()

    return ListResponse.from_list(board_list)


@router.delete("/lists/{list_id}")
async def delete_list(
    list_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a list and the cards it holds (owner only)"""
    board_list = await _get_list(db, list_id)
    await require_owner(db, board_list.board_id, current_user.id)

    await db.execute(delete(Card).where(Card.list_id == board_list.id))
    await db.delete(board_list)
    await db.commit()

    logger.info(
        "List deleted",
        extra={"board_id": str(board_list.board_id), "user_id": str(current_user.id), "list_id": str(board_list.id)}
    )
    return {"message": "List removed"}
