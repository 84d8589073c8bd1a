import uuid

from bookshelf.exceptions.base import AuthorHasBooksError, AuthorNotFoundError

from ..test_fixtures.api_fixtures import make_author


class TestAuthorHandlers:

    def test_create_author(self, stubbed_client, author_service_double):
        author = make_author()
        author_service_double.create_author.return_value = author

        response = stubbed_client.post("/api/authors", json={"name": author.name})

        assert response.status_code == 201
        assert response.json() == {
            "status": "success",
            "message": "Author created successfully",
            "author": {"id": str(author.id), "name": author.name},
        }

    def test_create_author_empty_name(self, stubbed_client, author_service_double):
        response = stubbed_client.post("/api/authors", json={"name": ""})

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "Name", "message": "Name is required"}]
        author_service_double.create_author.assert_not_awaited()

    def test_update_author_undecodable_body(self, stubbed_client, author_service_double):
        response = stubbed_client.patch(
            f"/api/authors/{uuid.uuid4()}",
            content=b'{"name": "\xff"}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"status": "error", "message": "Invalid request body"}
        author_service_double.update_author.assert_not_awaited()

    def test_get_all_authors(self, stubbed_client, author_service_double):
        author_service_double.get_all_authors.return_value = [make_author(), make_author(name="Ted Chiang")]

        response = stubbed_client.get("/api/authors")

        assert response.status_code == 200
        assert response.json()["message"] == "Authors retrieved successfully"
        assert len(response.json()["authors"]) == 2

    def test_get_author_not_found(self, stubbed_client, author_service_double):
        author_service_double.get_author_by_id.side_effect = AuthorNotFoundError()

        response = stubbed_client.get(f"/api/authors/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "Author not found"}

    def test_get_author_invalid_uuid(self, stubbed_client):
        response = stubbed_client.get("/api/authors/123")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid uuid"

    def test_update_author(self, stubbed_client, author_service_double):
        response = stubbed_client.patch(f"/api/authors/{uuid.uuid4()}", json={"name": "Chiang"})

        assert response.status_code == 200
        assert response.json() == {"status": "success", "message": "Author updated successfully"}

    def test_delete_author_with_books_is_409(self, stubbed_client, author_service_double):
        author_service_double.delete_author.side_effect = AuthorHasBooksError()

        response = stubbed_client.delete(f"/api/authors/{uuid.uuid4()}")

        assert response.status_code == 409
        assert response.json() == {"status": "error", "message": "Author still has books"}

    def test_delete_author(self, stubbed_client, author_service_double):
        response = stubbed_client.delete(f"/api/authors/{uuid.uuid4()}")

        assert response.status_code == 200
        assert response.json()["message"] == "Author deleted successfully"
