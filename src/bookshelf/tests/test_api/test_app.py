"""
Tests for the composed application: liveness probe, docs gating, middleware stack and
the error envelope for framework-level errors.
"""
import asyncio
import uuid

from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from bookshelf.api.dependencies import get_book_service
from bookshelf.main import create_app

from ..test_fixtures.api_fixtures import make_book


class TestLivenessAndDocs:

    def test_alive_returns_dot(self, stubbed_client):
        response = stubbed_client.get("/api/alive")

        assert response.status_code == 200
        assert response.text == "."

    def test_docs_hidden_outside_development(self, stubbed_client):
        assert stubbed_client.get("/api/docs").status_code == 404
        assert stubbed_client.get("/api/openapi.json").status_code == 404

    def test_docs_served_in_development(self, settings):
        app = create_app(settings.model_copy(update={"API_ENVIRONMENT": "development"}), MagicMock())

        with TestClient(app) as client:
            assert client.get("/api/docs").status_code == 200
            assert client.get("/api/openapi.json").json()["info"]["title"] == "Bookshelf API"

    def test_unknown_route_uses_error_envelope(self, stubbed_client):
        response = stubbed_client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "Not Found"}

    def test_wrong_method_uses_error_envelope(self, stubbed_client):
        response = stubbed_client.put("/api/alive")

        assert response.status_code == 405
        assert response.json()["status"] == "error"


class TestRequestId:

    def test_generated_when_absent(self, stubbed_client):
        response = stubbed_client.get("/api/alive")

        assert uuid.UUID(response.headers["X-Request-ID"])

    def test_incoming_id_is_echoed(self, stubbed_client):
        response = stubbed_client.get("/api/alive", headers={"X-Request-ID": "trace-abc-123"})

        assert response.headers["X-Request-ID"] == "trace-abc-123"


class TestCors:

    def test_preflight_allows_any_origin(self, stubbed_client):
        response = stubbed_client.options(
            "/api/books",
            headers={
                "Origin": "http://frontend.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-max-age"] == "43200"
        assert "PATCH" in response.headers["access-control-allow-methods"]

    def test_configured_origins_only(self, settings):
        restricted = settings.model_copy(update={"CORS_ALLOWED_ORIGINS": "http://a.example, http://b.example"})
        app = create_app(restricted, MagicMock())

        with TestClient(app) as client:
            allowed = client.get("/api/alive", headers={"Origin": "http://b.example"})
            denied = client.get("/api/alive", headers={"Origin": "http://evil.example"})

        assert allowed.headers["access-control-allow-origin"] == "http://b.example"
        assert "access-control-allow-origin" not in denied.headers


class TestRecoverer:

    def test_unhandled_exception_is_generic_500(self, stubbed_client, book_service_double, caplog):
        """
        Behavior:
            - The service raises something outside the application taxonomy.
            - The client gets the generic 500 envelope; the stack trace goes to the log.
        """
        book_service_double.get_all_books.side_effect = RuntimeError("db password=hunter2 leaked?")

        response = stubbed_client.get("/api/books")

        assert response.status_code == 500
        assert response.json() == {"status": "error", "message": "Internal server error"}
        assert "hunter2" not in response.text
        assert any(r.getMessage() == "http.unhandled_exception" and r.exc_info for r in caplog.records)


class TestRateLimit:

    def test_requests_over_the_limit_get_429(self, settings):
        app = create_app(settings.model_copy(update={"RATE_LIMIT_REQUESTS": 2}), MagicMock())

        with TestClient(app) as client:
            statuses = [client.get("/api/alive").status_code for _ in range(3)]
            limited = client.get("/api/alive")

        assert statuses == [200, 200, 429]
        assert limited.json() == {"status": "error", "message": "Too many requests"}
        assert int(limited.headers["Retry-After"]) >= 1

    def test_limit_is_per_client_ip(self, settings):
        app = create_app(settings.model_copy(update={"RATE_LIMIT_REQUESTS": 1}), MagicMock())

        with TestClient(app) as client:
            first = client.get("/api/alive", headers={"X-Forwarded-For": "10.0.0.1"})
            second = client.get("/api/alive", headers={"X-Forwarded-For": "10.0.0.2"})
            repeat = client.get("/api/alive", headers={"X-Forwarded-For": "10.0.0.1"})

        assert (first.status_code, second.status_code, repeat.status_code) == (200, 200, 429)


class TestTimeout:

    def test_slow_handler_gets_504(self, settings):
        app = create_app(settings.model_copy(update={"REQUEST_TIMEOUT_SECONDS": 0.05}), MagicMock())

        class SlowService:
            async def get_all_books(self):
                await asyncio.sleep(5)

        app.dependency_overrides[get_book_service] = SlowService

        with TestClient(app) as client:
            response = client.get("/api/books")

        assert response.status_code == 504
        assert response.json() == {"status": "error", "message": "Request timeout"}


class TestRequestLineNormalization:

    def test_head_served_by_get_route(self, stubbed_client):
        response = stubbed_client.head("/api/alive")

        assert response.status_code == 200
        assert response.content == b""

    def test_head_on_collection_runs_get_handler(self, stubbed_client, book_service_double):
        book_service_double.get_all_books.return_value = [make_book()]

        response = stubbed_client.head("/api/books")

        assert response.status_code == 200
        assert response.content == b""
        book_service_double.get_all_books.assert_awaited_once()

    def test_trailing_slash_served_without_redirect(self, stubbed_client, book_service_double):
        book_service_double.get_all_books.return_value = [make_book(title="Slashed")]

        response = stubbed_client.get("/api/books/", follow_redirects=False)

        assert response.status_code == 200
        assert response.json()["books"][0]["title"] == "Slashed"

    def test_trailing_slash_on_item_path(self, stubbed_client, book_service_double):
        book = make_book()
        book_service_double.get_book_by_id.return_value = book

        response = stubbed_client.get(f"/api/books/{book.id}/", follow_redirects=False)

        assert response.status_code == 200
        assert response.json()["book"]["id"] == str(book.id)


class TestThrottle:

    def test_capacity_setting_is_wired(self, settings):
        app = create_app(settings.model_copy(update={"THROTTLE_MAX_IN_FLIGHT": 0}), MagicMock())

        with TestClient(app) as client:
            response = client.get("/api/alive")

        assert response.status_code == 429
        assert response.json() == {"status": "error", "message": "Server capacity exceeded"}
