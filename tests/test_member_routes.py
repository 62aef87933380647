"""Library API: Member Route Tests (/member, /members)."""

import pytest

from library_api.exceptions import DatabaseError, ForeignKeyViolationError, RecordNotFoundError
from library_api.schemas import Member


@pytest.mark.asyncio
async def test_list_members(test_client, member_store):
    member_store.get.return_value = [Member(id="m1", full_name="Ann Lee"), Member(id="m2")]

    response = await test_client.get("/members")

    assert response.status_code == 200
    assert response.json() == [
        {"id": "m1", "full_name": "Ann Lee"},
        {"id": "m2", "full_name": ""},
    ]


@pytest.mark.asyncio
async def test_list_members_empty(test_client, member_store):
    member_store.get.return_value = []

    response = await test_client.get("/members")

    assert response.status_code == 404
    assert response.json() == {"message": "no members found"}


@pytest.mark.asyncio
async def test_list_members_store_failure(test_client, member_store):
    member_store.get.side_effect = DatabaseError("get all failed for members")

    response = await test_client.get("/members")

    assert response.status_code == 500
    assert response.json() == {"error": "server error"}


@pytest.mark.asyncio
async def test_create_member(test_client, member_store):
    response = await test_client.post("/member", json={"full_name": "Ann Lee"})

    assert response.status_code == 201
    assert response.json() == {"message": "member created"}
    created = member_store.create.await_args.args[0]
    assert created.full_name == "Ann Lee"
    assert created.id


@pytest.mark.asyncio
async def test_create_member_failure(test_client, member_store):
    member_store.create.side_effect = DatabaseError("create failed for members")

    response = await test_client.post("/member", json={"full_name": "Ann Lee"})

    assert response.status_code == 400
    assert response.json() == {"error": "member creation failed"}


@pytest.mark.asyncio
async def test_create_member_malformed_body(test_client, member_store):
    response = await test_client.post(
        "/member",
        content=b"",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "member creation failed"}


@pytest.mark.asyncio
async def test_update_member(test_client, member_store):
    response = await test_client.patch("/member/m1", json={"full_name": "Ann B. Lee"})

    assert response.status_code == 200
    assert response.json() == {"message": "member updated"}
    member_store.update.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_unknown_member(test_client, member_store):
    member_store.exists.side_effect = RecordNotFoundError(resource="member", resource_id="m9")

    response = await test_client.patch("/member/m9", json={"full_name": "X"})

    assert response.status_code == 404
    assert response.json() == {"message": "member not found"}


@pytest.mark.asyncio
async def test_update_member_malformed_body(test_client, member_store):
    response = await test_client.patch(
        "/member/m1",
        content=b'{"full_name": 42',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "member update failed"}
    member_store.exists.assert_not_awaited()
    member_store.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_member_failure(test_client, member_store):
    member_store.update.side_effect = DatabaseError("update failed for members")

    response = await test_client.patch("/member/m1", json={"full_name": "X"})

    assert response.status_code == 400
    assert response.json() == {"error": "member update failed"}


@pytest.mark.asyncio
async def test_delete_member(test_client, member_store):
    response = await test_client.delete("/member/m1")

    assert response.status_code == 200
    assert response.json() == {"message": "member deleted"}


@pytest.mark.asyncio
async def test_delete_member_with_loans(test_client, member_store):
    member_store.delete.side_effect = ForeignKeyViolationError("delete failed for members")

    response = await test_client.delete("/member/m1")

    assert response.status_code == 400
    assert response.json() == {"message": "member still has books, all books must be returned"}


@pytest.mark.asyncio
async def test_delete_member_failure(test_client, member_store):
    member_store.delete.side_effect = DatabaseError("delete failed for members")

    response = await test_client.delete("/member/m1")

    assert response.status_code == 500
    assert response.json() == {"error": "server error"}
