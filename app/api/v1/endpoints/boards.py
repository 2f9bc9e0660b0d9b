"""
Board management endpoints
"""
import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, or_
from sqlalchemy.orm import selectinload

from app.core.database import get_db
from app.core.db_types import parse_uuid
from app.core.deps import get_current_user
from app.core.exceptions import ResourceNotFoundError, ValidationError
from app.core.permissions import require_member, require_owner
from app.models.user import User
from app.models.board import Board, BoardMember
from app.models.board_list import BoardList
from app.models.card import Card
from app.schemas.board import BoardCreate, BoardUpdate, BoardMemberAdd, BoardResponse
from app.schemas.user import UserSummary

router = APIRouter()
logger = logging.getLogger(__name__)


async def _load_board(db: AsyncSession, board_id) -> Board:
    """Board with owner and member users populated"""
    result = await db.execute(
        select(Board)
        .options(
            selectinload(Board.owner),
            selectinload(Board.memberships).selectinload(BoardMember.user)
        )
        .where(Board.id == board_id)
        .execution_options(populate_existing=True)
    )
    board = result.scalar_one_or_none()
    if not board:
        raise ResourceNotFoundError("Board")
    return board


def _board_response(board: Board) -> BoardResponse:
    members = sorted(board.memberships, key=lambda membership: membership.added_at)
    return BoardResponse(
        id=board.id,
        title=board.title,
        owner=UserSummary.from_user(board.owner),
        members=[UserSummary.from_user(membership.user) for membership in members],
        created_at=board.created_at,
        updated_at=board.updated_at
    )


@router.get("", response_model=List[BoardResponse])
async def get_boards(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get all boards where the current user is the owner or a member"""
    member_of = select(BoardMember.board_id).where(BoardMember.user_id == current_user.id)
    result = await db.execute(
        select(Board)
        .options(
            selectinload(Board.owner),
            selectinload(Board.memberships).selectinload(BoardMember.user)
        )
        .where(or_(Board.owner_id == current_user.id, Board.id.in_(member_of)))
        .order_by(Board.created_at.desc())
    )
    return [_board_response(board) for board in result.scalars().all()]


@router.post("", response_model=BoardResponse, status_code=201)
async def create_board(
    board_data: BoardCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a new board; the creator becomes its owner and first member"""
    board = Board(title=board_data.title, owner_id=current_user.id)
    db.add(board)
    await db.flush()

    db.add(BoardMember(board_id=board.id, user_id=current_user.id))
    await db.commit()

    logger.info("Board created", extra={"board_id": str(board.id), "user_id": str(current_user.id)})
    return _board_response(await _load_board(db, board.id))


@router.get("/{board_id}", response_model=BoardResponse)
async def get_board(
    board_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get a board the current user belongs to"""
    board_uuid = parse_uuid(board_id, "Board")
    await require_member(db, board_uuid, current_user.id)
    return _board_response(await _load_board(db, board_uuid))


@router.put("/{board_id}", response_model=BoardResponse)
async def update_board(
    board_id: str,
    board_data: BoardUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Rename a board (owner only)"""
    board_uuid = parse_uuid(board_id, "Board")
    board = await require_owner(db, board_uuid, current_user.id)

    if board_data.title:
        board.title = board_data.title
    await db.commit()

    return _board_response(await _load_board(db, board_uuid))


@router.delete("/{board_id}")
async def delete_board(
    board_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a board with its lists and cards (owner only)"""
    board_uuid = parse_uuid(board_id, "Board")
    board = await require_owner(db, board_uuid, current_user.id)

    await db.execute(delete(Card).where(Card.board_id == board_uuid))
    await db.execute(delete(BoardList).where(BoardList.board_id == board_uuid))
    await db.delete(board)
    await db.commit()

    logger.info("Board deleted", extra={"board_id": str(board_uuid), "user_id": str(current_user.id)})
    return {"message": "Board removed"}


@router.put("/{board_id}/members", response_model=BoardResponse)
async def add_board_member(
    board_id: str,
    member_data: BoardMemberAdd,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Add a registered user to a board by email (owner only)"""
    board_uuid = parse_uuid(board_id, "Board")
    board = await require_owner(db, board_uuid, current_user.id)

    result = await db.execute(select(User).where(User.email == member_data.email.lower()))
    user_to_add = result.scalar_one_or_none()
    if not user_to_add:
        raise ResourceNotFoundError("User with that email")

    if user_to_add.id in board.member_ids:
        raise ValidationError("User is already a member of this board")

    db.add(BoardMember(board_id=board.id, user_id=user_to_add.id))
    await db.commit()

    logger.info(
        "Board member added",
        extra={"board_id": str(board.id), "user_id": str(current_user.id), "member_id": str(user_to_add.id)}
    )
    return _board_response(await _load_board(db, board_uuid))
