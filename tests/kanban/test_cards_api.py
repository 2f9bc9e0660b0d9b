"""
Card HTTP endpoint tests
"""
import uuid

import pytest


@pytest.mark.asyncio
async def test_create_and_list_cards(client, users, lists, headers_for):
    headers = headers_for(users["member"])
    url = f"/api/v1/lists/{lists['todo'].id}/cards"

    first = await client.post(url, json={"title": "Write tests"}, headers=headers)
    second = await client.post(
        url,
        json={"title": "Ship it", "description": "Friday", "assignedTo": str(users["owner"].id)},
        headers=headers
    )
    listing = await client.get(url, headers=headers)

    assert first.status_code == 201
    assert first.json()["order"] == 0
    assert first.json()["list"] == str(lists["todo"].id)
    assert first.json()["board"] == str(lists["todo"].board_id)
    assert second.status_code == 201
    assert second.json()["order"] == 1
    assert second.json()["assignedTo"]["_id"] == str(users["owner"].id)
    assert second.json()["assignedTo"]["email"] == "owner@boards.io"
    assert [card["title"] for card in listing.json()] == ["Write tests", "Ship it"]


@pytest.mark.asyncio
async def test_create_card_without_title_is_bad_request(client, users, lists, headers_for):
    response = await client.post(
        f"/api/v1/lists/{lists['todo'].id}/cards", json={"description": "no title"}, headers=headers_for(users["owner"])
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "VAL_001"


@pytest.mark.asyncio
async def test_create_card_in_unknown_list_is_not_found(client, users, headers_for):
    response = await client.post(
        f"/api/v1/lists/{uuid.uuid4()}/cards", json={"title": "Lost"}, headers=headers_for(users["owner"])
    )

    assert response.status_code == 404
    assert response.json()["message"] == "List not found"


@pytest.mark.asyncio
async def test_cards_require_authentication(client, lists):
    response = await client.get(f"/api/v1/lists/{lists['todo'].id}/cards")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTH_001"


@pytest.mark.asyncio
async def test_outsider_cannot_read_cards(client, users, lists, make_cards, headers_for):
    cards = await make_cards(lists["todo"], ["A"])

    response = await client.get(f"/api/v1/cards/{cards['A'].id}", headers=headers_for(users["outsider"]))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_malformed_card_id_is_bad_request(client, users, headers_for):
    response = await client.get("/api/v1/cards/not-a-uuid", headers=headers_for(users["owner"]))

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid card ID format"


@pytest.mark.asyncio
async def test_update_card(client, users, lists, make_cards, headers_for):
    cards = await make_cards(lists["todo"], ["A"])

    response = await client.put(
        f"/api/v1/cards/{cards['A'].id}",
        json={"title": "Renamed", "dueDate": "2026-11-01T09:00:00Z"},
        headers=headers_for(users["member"])
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"
    assert response.json()["dueDate"].startswith("2026-11-01T09:00:00")
    assert response.json()["order"] == 0


@pytest.mark.asyncio
async def test_delete_card_compacts_list(client, users, lists, make_cards, list_contents, headers_for):
    cards = await make_cards(lists["todo"], ["A", "B", "C"])

    response = await client.delete(f"/api/v1/cards/{cards['B'].id}", headers=headers_for(users["member"]))

    assert response.status_code == 200
    assert response.json() == {"message": "Card removed"}
    assert await list_contents(lists["todo"].id) == [("A", 0), ("C", 1)]


@pytest.mark.asyncio
async def test_move_card_across_lists(client, users, lists, make_cards, list_contents, headers_for):
    cards = await make_cards(lists["todo"], ["A", "B"])
    await make_cards(lists["doing"], ["C"])

    response = await client.put(
        f"/api/v1/cards/{cards['A'].id}/move",
        json={"targetListId": str(lists["doing"].id), "newOrderIndex": 1},
        headers=headers_for(users["member"])
    )

    assert response.status_code == 200
    body = response.json()
    assert body["oldListId"] == str(lists["todo"].id)
    assert body["newListId"] == str(lists["doing"].id)
    assert body["card"]["order"] == 1
    assert await list_contents(lists["todo"].id) == [("B", 0)]
    assert await list_contents(lists["doing"].id) == [("C", 0), ("A", 1)]


@pytest.mark.asyncio
async def test_non_member_move_is_forbidden_and_changes_nothing(
    client, users, lists, make_cards, list_contents, headers_for
):
    cards = await make_cards(lists["todo"], ["A", "B"])

    response = await client.put(
        f"/api/v1/cards/{cards['B'].id}/move",
        json={"targetListId": str(lists["todo"].id), "newOrderIndex": 0},
        headers=headers_for(users["outsider"])
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "AUTH_003"
    assert await list_contents(lists["todo"].id) == [("A", 0), ("B", 1)]


@pytest.mark.asyncio
@pytest.mark.parametrize("index", [-1, "1", 1.5, None, True])
async def test_move_with_invalid_index_is_bad_request(
    client, users, lists, make_cards, list_contents, headers_for, index
):
    cards = await make_cards(lists["todo"], ["A", "B"])

    response = await client.put(
        f"/api/v1/cards/{cards['B'].id}/move",
        json={"targetListId": str(lists["todo"].id), "newOrderIndex": index},
        headers=headers_for(users["member"])
    )

    assert response.status_code == 400
    assert await list_contents(lists["todo"].id) == [("A", 0), ("B", 1)]


@pytest.mark.asyncio
async def test_move_to_other_board_is_bad_request(
    client, users, lists, other_board_list, make_cards, headers_for
):
    cards = await make_cards(lists["todo"], ["A"])

    response = await client.put(
        f"/api/v1/cards/{cards['A'].id}/move",
        json={"targetListId": str(other_board_list.id), "newOrderIndex": 0},
        headers=headers_for(users["owner"])
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Cannot move card to a list on a different board"


@pytest.mark.asyncio
async def test_move_to_unknown_list_is_not_found(client, users, lists, make_cards, headers_for):
    cards = await make_cards(lists["todo"], ["A"])

    response = await client.put(
        f"/api/v1/cards/{cards['A'].id}/move",
        json={"targetListId": str(uuid.uuid4()), "newOrderIndex": 0},
        headers=headers_for(users["owner"])
    )

    assert response.status_code == 404
