"""
Shared fixtures for the kanban test suite
"""
import os
from datetime import datetime, timedelta, timezone

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_FORMAT", "text")

import httpx
import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_access_token, hash_password
from app.main import app
from app.models.board import Board, BoardMember
from app.models.board_list import BoardList
from app.models.card import Card
from app.models.user import User
from app.services.websocket_manager import manager

TEST_PASSWORD = "password123"
BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeNotifier:
    """Records published events instead of delivering them"""

    def __init__(self):
        self.events = []

    def publish(self, board_id, event_name, payload):
        self.events.append((board_id, event_name, payload))

    def names(self):
        return [event_name for _, event_name, _ in self.events]

    def of_type(self, event_name):
        return [payload for _, name, payload in self.events if name == event_name]


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
async def users(db_session: AsyncSession):
    """Board owner, a board member and an outsider"""
    password_hash = hash_password(TEST_PASSWORD)
    owner = User(name="Olivia Owner", email="owner@boards.io", password_hash=password_hash)
    member = User(name="Max Member", email="member@boards.io", password_hash=password_hash)
    outsider = User(name="Oscar Outsider", email="outsider@boards.io", password_hash=password_hash)
    db_session.add_all([owner, member, outsider])
    await db_session.commit()
    return {"owner": owner, "member": member, "outsider": outsider}


@pytest.fixture
async def board(db_session: AsyncSession, users):
    board = Board(title="Sprint board", owner_id=users["owner"].id)
    db_session.add(board)
    await db_session.flush()
    db_session.add_all([
        BoardMember(board_id=board.id, user_id=users["owner"].id),
        BoardMember(board_id=board.id, user_id=users["member"].id),
    ])
    await db_session.commit()
    return board


@pytest.fixture
async def lists(db_session: AsyncSession, board):
    todo = BoardList(title="To do", board_id=board.id, order=0)
    doing = BoardList(title="Doing", board_id=board.id, order=1)
    db_session.add_all([todo, doing])
    await db_session.commit()
    return {"todo": todo, "doing": doing}


@pytest.fixture
async def other_board_list(db_session: AsyncSession, users):
    """A list on a board the outsider owns"""
    other = Board(title="Other board", owner_id=users["outsider"].id)
    db_session.add(other)
    await db_session.flush()
    db_session.add(BoardMember(board_id=other.id, user_id=users["outsider"].id))
    other_list = BoardList(title="Elsewhere", board_id=other.id, order=0)
    db_session.add(other_list)
    await db_session.commit()
    return other_list


async def add_cards(db: AsyncSession, board_list: BoardList, titles, orders=None):
    """Create cards in `board_list` with the given orders (default 0..n-1)"""
    orders = list(range(len(titles))) if orders is None else orders
    cards = []
    for index, (title, order) in enumerate(zip(titles, orders)):
        card = Card(
            title=title,
            list_id=board_list.id,
            board_id=board_list.board_id,
            order=order,
            created_at=BASE_TIME + timedelta(seconds=index),
        )
        db.add(card)
        cards.append(card)
    await db.commit()
    return {card.title: card for card in cards}


async def titles_in_order(session_factory, list_id):
    """Card (title, order) pairs of a list read through a fresh session"""
    async with session_factory() as session:
        result = await session.execute(
            select(Card.title, Card.order)
            .where(Card.list_id == list_id)
            .order_by(Card.order, Card.created_at)
        )
        return [(title, order) for title, order in result.all()]


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    await manager.drain()


@pytest.fixture
def make_cards(db_session: AsyncSession):
    async def _make_cards(board_list, titles, orders=None):
        return await add_cards(db_session, board_list, titles, orders)
    return _make_cards


@pytest.fixture
def list_contents(session_factory):
    async def _list_contents(list_id):
        return await titles_in_order(session_factory, list_id)
    return _list_contents


@pytest.fixture
def headers_for():
    return auth_headers
