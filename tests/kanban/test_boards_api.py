"""
Authentication, board and list endpoint tests
"""
import pytest
from sqlalchemy import select

from app.models.board import BoardMember
from app.models.card import Card


@pytest.mark.asyncio
async def test_register_login_and_me(client):
    registered = await client.post(
        "/api/v1/auth/register",
        json={"name": "Nina", "email": "Nina@Boards.io", "password": "secret1"}
    )
    logged_in = await client.post(
        "/api/v1/auth/login", json={"email": "nina@boards.io", "password": "secret1"}
    )
    me = await client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {logged_in.json()['token']}"}
    )

    assert registered.status_code == 201
    assert registered.json()["email"] == "nina@boards.io"
    assert registered.json()["token"]
    assert logged_in.status_code == 200
    assert me.json()["_id"] == registered.json()["_id"]


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(client, users):
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": "Again", "email": "owner@boards.io", "password": "secret1"}
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "BIZ_002"


@pytest.mark.asyncio
async def test_register_short_password_is_bad_request(client):
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": "Shorty", "email": "short@boards.io", "password": "123"}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_login_with_wrong_password_is_unauthorized(client, users):
    response = await client.post(
        "/api/v1/auth/login", json={"email": "owner@boards.io", "password": "wrong-password"}
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_invalid_token_is_unauthorized(client):
    response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_board_makes_caller_owner_and_member(client, users, headers_for):
    response = await client.post(
        "/api/v1/boards", json={"title": "Roadmap"}, headers=headers_for(users["member"])
    )

    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Roadmap"
    assert body["owner"]["_id"] == str(users["member"].id)
    assert [member["_id"] for member in body["members"]] == [str(users["member"].id)]


@pytest.mark.asyncio
async def test_board_listing_includes_owned_and_joined_boards(client, users, board, headers_for):
    own = await client.post("/api/v1/boards", json={"title": "Mine"}, headers=headers_for(users["member"]))

    member_view = await client.get("/api/v1/boards", headers=headers_for(users["member"]))
    outsider_view = await client.get("/api/v1/boards", headers=headers_for(users["outsider"]))

    assert {b["_id"] for b in member_view.json()} == {str(board.id), own.json()["_id"]}
    assert outsider_view.json() == []


@pytest.mark.asyncio
async def test_get_board_requires_membership(client, users, board, headers_for):
    allowed = await client.get(f"/api/v1/boards/{board.id}", headers=headers_for(users["member"]))
    denied = await client.get(f"/api/v1/boards/{board.id}", headers=headers_for(users["outsider"]))

    assert allowed.status_code == 200
    assert allowed.json()["owner"]["email"] == "owner@boards.io"
    assert denied.status_code == 403


@pytest.mark.asyncio
async def test_only_owner_renames_board(client, users, board, headers_for):
    denied = await client.put(
        f"/api/v1/boards/{board.id}", json={"title": "Hijacked"}, headers=headers_for(users["member"])
    )
    renamed = await client.put(
        f"/api/v1/boards/{board.id}", json={"title": "Renamed"}, headers=headers_for(users["owner"])
    )

    assert denied.status_code == 403
    assert renamed.status_code == 200
    assert renamed.json()["title"] == "Renamed"


@pytest.mark.asyncio
async def test_add_member_by_email(client, users, board, headers_for):
    added = await client.put(
        f"/api/v1/boards/{board.id}/members",
        json={"email": "outsider@boards.io"},
        headers=headers_for(users["owner"])
    )
    again = await client.put(
        f"/api/v1/boards/{board.id}/members",
        json={"email": "outsider@boards.io"},
        headers=headers_for(users["owner"])
    )
    unknown = await client.put(
        f"/api/v1/boards/{board.id}/members",
        json={"email": "nobody@boards.io"},
        headers=headers_for(users["owner"])
    )

    assert added.status_code == 200
    assert str(users["outsider"].id) in {member["_id"] for member in added.json()["members"]}
    assert again.status_code == 400
    assert again.json()["message"] == "User is already a member of this board"
    assert unknown.status_code == 404


@pytest.mark.asyncio
async def test_delete_board_removes_lists_and_cards(
    client, db_session, users, board, lists, make_cards, headers_for
):
    await make_cards(lists["todo"], ["A", "B"])

    denied = await client.delete(f"/api/v1/boards/{board.id}", headers=headers_for(users["member"]))
    deleted = await client.delete(f"/api/v1/boards/{board.id}", headers=headers_for(users["owner"]))
    missing = await client.get(f"/api/v1/boards/{board.id}", headers=headers_for(users["owner"]))

    assert denied.status_code == 403
    assert deleted.json() == {"message": "Board removed"}
    assert missing.status_code == 404
    cards = await db_session.execute(select(Card.id).where(Card.board_id == board.id))
    assert cards.all() == []
    memberships = await db_session.execute(select(BoardMember.id).where(BoardMember.board_id == board.id))
    assert memberships.all() == []


@pytest.mark.asyncio
async def test_lists_are_created_in_order_by_owner_only(client, users, board, headers_for):
    url = f"/api/v1/boards/{board.id}/lists"

    first = await client.post(url, json={"title": "Backlog"}, headers=headers_for(users["owner"]))
    second = await client.post(url, json={"title": "Done"}, headers=headers_for(users["owner"]))
    denied = await client.post(url, json={"title": "Nope"}, headers=headers_for(users["member"]))
    listing = await client.get(url, headers=headers_for(users["member"]))

    assert first.status_code == 201
    assert first.json()["order"] == 0
    assert second.json()["order"] == 1
    assert second.json()["board"] == str(board.id)
    assert denied.status_code == 403
    assert [item["title"] for item in listing.json()] == ["Backlog", "Done"]


@pytest.mark.asyncio
async def test_update_and_delete_list(client, users, lists, make_cards, headers_for):
    await make_cards(lists["doing"], ["A"])
    url = f"/api/v1/lists/{lists['doing'].id}"

    updated = await client.put(url, json={"title": "In progress", "order": 5}, headers=headers_for(users["owner"]))
    fetched = await client.get(url, headers=headers_for(users["member"]))
    denied = await client.delete(url, headers=headers_for(users["member"]))
    deleted = await client.delete(url, headers=headers_for(users["owner"]))
    cards = await client.get(f"{url}/cards", headers=headers_for(users["owner"]))

    assert updated.status_code == 200
    assert updated.json()["order"] == 5
    assert fetched.json()["title"] == "In progress"
    assert denied.status_code == 403
    assert deleted.json() == {"message": "List removed"}
    assert cards.status_code == 404


@pytest.mark.asyncio
async def test_health_reports_database_and_realtime_status(client, session_factory, monkeypatch):
    import app.main as main_module
    monkeypatch.setattr(main_module, "async_session_factory", session_factory)

    response = await client.get("/health")

    data = response.json()["data"]
    assert data["status"] == "healthy"
    assert data["database"] == {"status": "healthy", "error": None}
    assert "total_connections" in data["realtime"]
