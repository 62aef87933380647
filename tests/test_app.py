"""
Library API: Application Tests
===============================

What:  Health check, middleware, metrics, OpenAPI documents, lifespan and
       the console entry point.
"""

import asyncio
import json
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from library_api import main
from library_api.config import Settings
from library_api.main import create_app
from library_api.schemas import Author
from library_api.stores import SQLAuthorStore, SQLBorrowedStore


class TestHealth:

    @pytest.mark.asyncio
    async def test_ok(self, test_client, database):
        response = await test_client.get("/healthz")

        assert response.status_code == 200
        assert response.json() == {"message": "OK"}
        database.ping.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_database_down(self, test_client, database):
        database.ping.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

        response = await test_client.get("/healthz")

        assert response.status_code == 500
        assert response.json() == {"error": "error pinging database"}

    @pytest.mark.asyncio
    async def test_database_timeout(self, test_client, database):
        database.ping.side_effect = asyncio.TimeoutError()

        response = await test_client.get("/healthz")

        assert response.status_code == 500
        assert response.json() == {"error": "error pinging database"}


class TestMiddleware:

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client, database):
        response = await test_client.get("/healthz")

        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client, database):
        response = await test_client.get("/healthz", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_cors_preflight(self, test_client):
        response = await test_client.options(
            "/authors",
            headers={
                "Origin": "http://frontend.example",
                "Access-Control-Request-Method": "PATCH",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "PATCH" in response.headers["access-control-allow-methods"]
        assert response.headers["access-control-max-age"] == "120"

    @pytest.mark.asyncio
    async def test_unknown_route(self, test_client):
        response = await test_client.get("/nope")

        assert response.status_code == 404


class TestLifespan:

    @pytest.mark.asyncio
    async def test_attaches_stores(self, settings):
        app = create_app(settings)

        async with app.router.lifespan_context(app):
            assert isinstance(app.state.author_store, SQLAuthorStore)
            assert isinstance(app.state.borrowed_store, SQLBorrowedStore)
            await app.state.database.ping()

    @pytest.mark.asyncio
    async def test_unreachable_database_is_fatal(self, tmp_path):
        settings = Settings(
            _env_file=None,
            database_url=f"sqlite:///{tmp_path / 'missing' / 'library.db'}",
            port=8080,
        )
        app = create_app(settings)

        with pytest.raises(OperationalError):
            async with app.router.lifespan_context(app):
                pass


class TestRun:

    def test_missing_configuration_exits(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(main, "setup_logging", lambda *args, **kwargs: None)
        serve = MagicMock()
        monkeypatch.setattr(main.uvicorn, "run", serve)

        with pytest.raises(SystemExit) as excinfo:
            main.run()

        assert excinfo.value.code == 1
        serve.assert_not_called()

    def test_serves_configured_port(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DB_CONN", f"sqlite:///{tmp_path / 'library.db'}")
        monkeypatch.setenv("PORT", "9090")
        monkeypatch.setattr(main, "setup_logging", lambda *args, **kwargs: None)
        calls = []
        monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))

        main.run()

        assert calls[0]["port"] == 9090
        assert calls[0]["host"] == "0.0.0.0"


class TestOpenAPI:

    def test_entity_schemas_keep_fields(self, app):
        schemas = app.openapi()["components"]["schemas"]

        assert set(schemas["Author"]["properties"]) == {"id", "full_name", "nick_name", "specialization"}
        assert "author" in schemas["Book"]["properties"]
        assert set(schemas["Member"]["properties"]) == {"id", "full_name"}

    def test_serialization_schema_lists_fields(self):
        schema = Author.model_json_schema(mode="serialization")

        assert set(schema["properties"]) == {"id", "full_name", "nick_name", "specialization"}

    def test_request_bodies_documented(self, app):
        paths = app.openapi()["paths"]

        def body_schema(path, method):
            return paths[path][method]["requestBody"]["content"]["application/json"]["schema"]

        assert "full_name" in body_schema("/author", "post")["properties"]
        assert "title" in body_schema("/book/{book_id}", "patch")["properties"]
        assert "#/components/schemas/Author" in json.dumps(body_schema("/book", "post")["properties"]["author"])
        assert set(body_schema("/member/borrowed", "post")["properties"]) == {"member_id", "book_id"}
        assert body_schema("/member/{member_id}/borrowed", "delete") == {
            "type": "array",
            "items": {"type": "string"},
        }
        assert "/metrics" not in paths


def request_count(app, method, path, status_code):
    return app.state.metrics.registry.get_sample_value(
        "http_requests_total",
        {"service": "library-api", "status_code": status_code, "method": method, "path": path},
    )


class TestMetrics:

    @pytest.mark.asyncio
    async def test_counts_requests_by_route(self, app, test_client, author_store):
        author_store.get.return_value = []

        await test_client.get("/authors")
        await test_client.delete("/author/a1")
        await test_client.delete("/author/a2")

        assert request_count(app, "GET", "/authors", "404") == 1.0
        assert request_count(app, "DELETE", "/author/{author_id}", "200") == 2.0

    @pytest.mark.asyncio
    async def test_exposed_in_text_format(self, app, test_client, author_store):
        author_store.get.return_value = []
        await test_client.get("/authors")

        response = await test_client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "http_requests_total{" in response.text
        assert 'path="/authors"' in response.text
        assert "http_request_duration_seconds_bucket{" in response.text

    @pytest.mark.asyncio
    async def test_scrapes_are_not_counted(self, app, test_client):
        await test_client.get("/metrics")
        response = await test_client.get("/metrics")

        assert 'path="/metrics"' not in response.text
        assert request_count(app, "GET", "/metrics", "200") is None

    @pytest.mark.asyncio
    async def test_apps_have_separate_registries(self, settings, app, test_client, author_store):
        author_store.get.return_value = []
        await test_client.get("/authors")

        other = create_app(settings)

        assert request_count(app, "GET", "/authors", "404") == 1.0
        assert request_count(other, "GET", "/authors", "404") is None
