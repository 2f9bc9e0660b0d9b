"""
Card management endpoints
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.db_types import parse_uuid
from app.core.deps import get_current_user
from app.models.user import User
from app.schemas.card import CardCreate, CardUpdate, CardMove, CardResponse, CardMoveResponse
from app.services.card_service import CardService

router = APIRouter()


@router.get("/lists/{list_id}/cards", response_model=List[CardResponse])
async def get_cards(
    list_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get all cards of a list sorted by order"""
    service = CardService(db)
    return await service.list_cards(parse_uuid(list_id, "List"), current_user)


@router.post("/lists/{list_id}/cards", response_model=CardResponse, status_code=201)
async def create_card(
    list_id: str,
    card_data: CardCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a card at the end of a list"""
    service = CardService(db)
    return await service.create_card(parse_uuid(list_id, "List"), card_data, current_user)


@router.get("/cards/{card_id}", response_model=CardResponse)
async def get_card(
    card_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = CardService(db)
    return await service.get_card(parse_uuid(card_id, "Card"), current_user)


@router.put("/cards/{card_id}", response_model=CardResponse)
async def update_card(
    card_id: str,
    card_data: CardUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update card details; position changes go through the move endpoint"""
    service = CardService(db)
    return await service.update_card(parse_uuid(card_id, "Card"), card_data, current_user)


@router.delete("/cards/{card_id}")
async def delete_card(
    card_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a card and compact the remaining cards of its list"""
    service = CardService(db)
    return await service.delete_card(parse_uuid(card_id, "Card"), current_user)


@router.put("/cards/{card_id}/move", response_model=CardMoveResponse)
async def move_card(
    card_id: str,
    move_data: CardMove,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Move a card within its list or to another list on the same board"""
    service = CardService(db)
    return await service.move_card(
        parse_uuid(card_id, "Card"),
        move_data.target_list_id,
        move_data.new_order_index,
        current_user
    )
