"""
Library API: Borrowed Book Route Tests
=======================================

What:  Tests for borrowing and returning books.

What we test:
    ✅ Borrowed list carries the author's full_name and omits ids
    ✅ Empty list → 404, store failure → 500
    ✅ Single and bulk returns, including the bulk body validation
"""

import pytest

from library_api.exceptions import DatabaseError, ForeignKeyViolationError
from library_api.schemas import Author, Book, Borrowed


class TestListBorrowed:

    @pytest.mark.asyncio
    async def test_returns_books_with_author_name(self, test_client, borrowed_store):
        borrowed_store.get.return_value = [
            Book(title="Dune", genre="SF", isbn="1", author=Author(full_name="Frank Herbert")),
        ]

        response = await test_client.get("/member/m1/borrowed")

        assert response.status_code == 200
        assert response.json() == [
            {"title": "Dune", "genre": "SF", "isbn": "1", "author": {"full_name": "Frank Herbert"}},
        ]
        borrowed_store.get.assert_awaited_once_with("m1")

    @pytest.mark.asyncio
    async def test_no_loans(self, test_client, borrowed_store):
        borrowed_store.get.return_value = []

        response = await test_client.get("/member/m1/borrowed")

        assert response.status_code == 404
        assert response.json() == {"message": "no books found for this member"}

    @pytest.mark.asyncio
    async def test_store_failure(self, test_client, borrowed_store):
        borrowed_store.get.side_effect = DatabaseError("get books failed for member")

        response = await test_client.get("/member/m1/borrowed")

        assert response.status_code == 500
        assert response.json() == {"error": "server error"}


class TestCreateBorrowed:

    @pytest.mark.asyncio
    async def test_borrows(self, test_client, borrowed_store):
        response = await test_client.post("/member/borrowed", json={"member_id": "m1", "book_id": "b1"})

        assert response.status_code == 201
        assert response.json() == {"message": "borrowed book created"}
        borrowed_store.create.assert_awaited_once_with(Borrowed(member_id="m1", book_id="b1"))

    @pytest.mark.asyncio
    async def test_unknown_book(self, test_client, borrowed_store):
        borrowed_store.create.side_effect = ForeignKeyViolationError("failed to create borrowed book")

        response = await test_client.post("/member/borrowed", json={"member_id": "m1", "book_id": "x"})

        assert response.status_code == 400
        assert response.json() == {"error": "borrowed book creation failed"}

    @pytest.mark.asyncio
    async def test_malformed_body(self, test_client, borrowed_store):
        response = await test_client.post("/member/borrowed", json=["m1", "b1"])

        assert response.status_code == 400
        assert response.json() == {"error": "borrowed book creation failed"}
        borrowed_store.create.assert_not_awaited()


class TestReturnBooks:

    @pytest.mark.asyncio
    async def test_return_one(self, test_client, borrowed_store):
        response = await test_client.delete("/member/m1/borrowed/b1")

        assert response.status_code == 200
        assert response.json() == {"message": "borrowed book deleted"}
        borrowed_store.delete.assert_awaited_once_with("m1", "b1")

    @pytest.mark.asyncio
    async def test_return_one_failure(self, test_client, borrowed_store):
        borrowed_store.delete.side_effect = DatabaseError("delete book failed for member")

        response = await test_client.delete("/member/m1/borrowed/b1")

        assert response.status_code == 500
        assert response.json() == {"error": "server error"}

    @pytest.mark.asyncio
    async def test_return_many(self, test_client, borrowed_store):
        response = await test_client.request("DELETE", "/member/m1/borrowed", json=["b1", "b2"])

        assert response.status_code == 200
        assert response.json() == {"message": "borrowed books deleted"}
        borrowed_store.delete_list.assert_awaited_once_with("m1", ["b1", "b2"])

    @pytest.mark.asyncio
    async def test_return_many_rejects_non_list(self, test_client, borrowed_store):
        response = await test_client.request("DELETE", "/member/m1/borrowed", json={"book_id": "b1"})

        assert response.status_code == 400
        assert response.json() == {"error": "borrowed book delete failed"}
        borrowed_store.delete_list.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_return_many_failure(self, test_client, borrowed_store):
        borrowed_store.delete_list.side_effect = DatabaseError("delete list of books failed for member")

        response = await test_client.request("DELETE", "/member/m1/borrowed", json=["b1"])

        assert response.status_code == 500
        assert response.json() == {"error": "server error"}
