"""
Board membership checks shared by every mutating endpoint.

Lists are structural and require the board owner; cards are collaborative
and only require membership. Both checks are pure reads.
"""
import uuid
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.core.exceptions import ResourceNotFoundError, InsufficientPermissionsError
from app.models.board import Board, BoardMember


ROLE_OWNER = "owner"
ROLE_MEMBER = "member"


async def get_board(db: AsyncSession, board_id: uuid.UUID) -> Optional[Board]:
    """Load a board with its membership rows"""
    result = await db.execute(
        select(Board)
        .options(selectinload(Board.memberships))
        .where(Board.id == board_id)
    )
    return result.scalar_one_or_none()


def get_user_role_for_board(board: Board, user_id: uuid.UUID) -> Optional[str]:
    """Owner, member, or None for outsiders"""
    if board.owner_id == user_id:
        return ROLE_OWNER
    if user_id in board.member_ids:
        return ROLE_MEMBER
    return None


async def require_member(db: AsyncSession, board_id: uuid.UUID, user_id: uuid.UUID) -> Board:
    board = await get_board(db, board_id)
    if not board:
        raise ResourceNotFoundError("Board")
    if get_user_role_for_board(board, user_id) is None:
        raise InsufficientPermissionsError("Not authorized to access this board")
    return board


async def require_owner(db: AsyncSession, board_id: uuid.UUID, user_id: uuid.UUID) -> Board:
    board = await get_board(db, board_id)
    if not board:
        raise ResourceNotFoundError("Board")
    if get_user_role_for_board(board, user_id) != ROLE_OWNER:
        raise InsufficientPermissionsError("Not authorized to perform this action on this board")
    return board


async def is_board_member(db: AsyncSession, board_id: uuid.UUID, user_id: uuid.UUID) -> bool:
    """Cheap membership probe used to validate card assignees"""
    result = await db.execute(
        select(Board.owner_id).where(Board.id == board_id)
    )
    owner_id = result.scalar_one_or_none()
    if owner_id is None:
        return False
    if owner_id == user_id:
        return True
    result = await db.execute(
        select(BoardMember.id).where(
            BoardMember.board_id == board_id,
            BoardMember.user_id == user_id
        )
    )
    return result.scalar_one_or_none() is not None
