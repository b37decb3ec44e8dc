# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""End-to-end tests: install() on FastAPI and Starlette apps."""

from dataclasses import dataclass

import pytest
import yaml
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.routing import Route

from responder import (
    ConfigRepository,
    InvalidSerializerError,
    Resolver,
    ResolutionScope,
    Responder,
    ResponderServiceProvider,
    Serializer,
    TransformBuilder,
    Transformer,
    get_responder,
    inject,
    install,
)
from responder.errors import UnsupportedEnvironmentError
from responder.serializers import NoopSerializer


@dataclass
class Author:
    id: int
    name: str


@dataclass
class Article:
    id: int
    title: str
    body: str
    author: Author


class AuthorTransformer(Transformer):
    def transform(self, author):
        return {"id": author.id, "name": author.name}


class ArticleTransformer(Transformer):
    relations = {"author": AuthorTransformer}

    def transform(self, article):
        return {"id": article.id, "title": article.title, "body": article.body}


ARTICLES = [
    Article(1, "First", "<p>one</p>", Author(7, "Ada")),
    Article(2, "Second", "<p>two</p>", Author(8, "Linus")),
]


# =============================================================================
# Fixtures
# =============================================================================


def _fastapi_app(resolver: Resolver | None = None) -> FastAPI:
    app = FastAPI()
    install(app, resolver=resolver)

    @app.get("/articles")
    def list_articles(responder: Responder = Depends(inject(Responder))):
        return responder.success(ARTICLES, ArticleTransformer, meta={"version": "v1"})

    @app.get("/articles/paged")
    def paged_articles(page: int = 1, responder: Responder = Depends(inject(Responder))):
        return responder.paginated(
            ARTICLES[page - 1:page], ArticleTransformer, total=len(ARTICLES), page=page, per_page=1
        )

    @app.get("/articles/{article_id}")
    def get_article(article_id: int, responder: Responder = Depends(inject(Responder))):
        for article in ARTICLES:
            if article.id == article_id:
                return responder.success(article, ArticleTransformer, headers={"X-Resource": "article"})
        return responder.error("page_not_found", status=404)

    @app.get("/forbidden")
    def forbidden(responder: Responder = Depends(inject(Responder))):
        return responder.error("unauthorized", status=403)

    @app.get("/custom-error")
    def custom_error(responder: Responder = Depends(inject(Responder))):
        return responder.error("quota", "Quota exceeded", status=429, data={"limit": 10})

    @app.get("/scope")
    def scope(request: Request):
        return {"bound": isinstance(request.state.responder, ResolutionScope)}

    return app


@pytest.fixture
def fastapi_client():
    return TestClient(_fastapi_app())


def _starlette_app(config_dir, responder_yaml: dict | None = None) -> Starlette:
    if responder_yaml is not None:
        (config_dir / "responder.yaml").write_text(yaml.safe_dump(responder_yaml))

    async def list_articles(request):
        return get_responder(request).success(ARTICLES, ArticleTransformer)

    app = Starlette(routes=[Route("/articles", list_articles)])
    app.state.config_dir = config_dir
    install(app)
    return app


# =============================================================================
# FastAPI
# =============================================================================


class TestFastAPIInstall:
    """Responses produced through the default pipeline on FastAPI."""

    def test_collection_with_default_decorators(self, fastapi_client):
        response = fastapi_client.get("/articles")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == 200
        assert body["success"] is True
        assert body["meta"] == {"version": "v1"}
        assert body["data"][0] == {"id": 1, "title": "First", "body": "<p>one</p>"}

    def test_with_parameter_includes_relation(self, fastapi_client):
        response = fastapi_client.get("/articles", params={"with": "author"})
        assert response.json()["data"][1]["author"] == {"id": 8, "name": "Linus"}

    def test_only_parameter_filters_fields(self, fastapi_client):
        response = fastapi_client.get("/articles/1?with=author&only=title,author.name")
        assert response.json()["data"] == {"title": "First", "author": {"name": "Ada"}}

    def test_headers_passed_through(self, fastapi_client):
        response = fastapi_client.get("/articles/2")
        assert response.headers["x-resource"] == "article"

    def test_error_uses_message_catalog(self, fastapi_client):
        response = fastapi_client.get("/forbidden")

        assert response.status_code == 403
        assert response.json() == {
            "status": 403,
            "success": False,
            "error": {
                "code": "unauthorized",
                "message": "You are not authorized for this request.",
            },
        }

    def test_error_not_found(self, fastapi_client):
        response = fastapi_client.get("/articles/99")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "page_not_found"

    def test_error_with_explicit_message_and_data(self, fastapi_client):
        response = fastapi_client.get("/custom-error")
        assert response.status_code == 429
        assert response.json()["error"] == {
            "code": "quota",
            "message": "Quota exceeded",
            "details": {"limit": 10},
        }

    def test_pagination_links_keep_query(self, fastapi_client):
        response = fastapi_client.get("/articles/paged?with=author&page=2")

        pagination = response.json()["pagination"]
        assert pagination["total"] == 2
        assert pagination["count"] == 1
        assert pagination["current_page"] == 2
        assert pagination["total_pages"] == 2
        assert pagination["links"] == {"previous": "/articles/paged?with=author&page=1"}
        assert response.json()["data"][0]["author"] == {"id": 8, "name": "Linus"}

    def test_middleware_binds_scope(self, fastapi_client):
        assert fastapi_client.get("/scope").json() == {"bound": True}

    def test_configured_decorators_and_messages(self):
        resolver = Resolver(ConfigRepository({
            "responder": {
                "decorators": ["escape_html"],
                "error_messages": {"unauthorized": "Nope."},
            }
        }))
        client = TestClient(_fastapi_app(resolver))

        body = client.get("/articles").json()
        assert "status" not in body and "success" not in body
        assert body["data"][0]["body"] == "&lt;p&gt;one&lt;/p&gt;"
        assert client.get("/forbidden").json()["error"]["message"] == "Nope."

    def test_configured_parameter_names(self):
        resolver = Resolver(ConfigRepository({
            "responder": {"load_relations_parameter": "include", "filter_fields_parameter": "fields"}
        }))
        client = TestClient(_fastapi_app(resolver))

        body = client.get("/articles/1?include=author&fields=author").json()
        assert body["data"] == {"author": {"id": 7, "name": "Ada"}}

    def test_app_state(self):
        app = _fastapi_app()
        assert isinstance(app.state.resolver, Resolver)
        assert isinstance(app.state.responder_provider, ResponderServiceProvider)


# =============================================================================
# Starlette
# =============================================================================


class TestStarletteInstall:
    """Starlette apps load ``responder.yaml`` from ``app.state.config_dir``."""

    def test_defaults_without_config_file(self, tmp_path):
        client = TestClient(_starlette_app(tmp_path))

        body = client.get("/articles?with=author").json()
        assert body["success"] is True
        assert body["data"][0]["author"] == {"id": 7, "name": "Ada"}

    def test_yaml_config_applied(self, tmp_path):
        app = _starlette_app(tmp_path, {"decorators": [], "serializers": {"success": "noop"}})
        client = TestClient(app)

        body = client.get("/articles").json()
        assert body == [
            {"id": 1, "title": "First", "body": "<p>one</p>"},
            {"id": 2, "title": "Second", "body": "<p>two</p>"},
        ]
        config = app.state.resolver.config
        # Keys absent from the file still get defaults
        assert config.get("responder.serializers.error") == "error"
        assert config.get("responder.recursion_limit") == 5

    def test_pretty_print_from_yaml(self, tmp_path):
        client = TestClient(_starlette_app(tmp_path, {"decorators": ["pretty_print"]}))
        response = client.get("/articles?only=id")
        assert response.text.startswith('{\n  "data": [')

    def test_get_responder_without_middleware(self, tmp_path):
        app = _starlette_app(tmp_path)
        request = Request({"type": "http", "path": "/articles", "query_string": b"", "headers": [], "app": app})
        assert isinstance(get_responder(request), Responder)


# =============================================================================
# Boot failures
# =============================================================================


class TestBootValidation:
    def test_invalid_recursion_limit(self):
        resolver = Resolver(ConfigRepository({"responder": {"recursion_limit": 0}}))
        with pytest.raises(ValidationError):
            install(FastAPI(), resolver=resolver)

    def test_blank_parameter_name(self):
        resolver = Resolver(ConfigRepository({"responder": {"load_relations_parameter": " "}}))
        with pytest.raises(ValidationError):
            install(FastAPI(), resolver=resolver)

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("RESPONDER_RECURSION_LIMIT", "3")
        resolver = install(FastAPI())
        assert resolver.config.get("responder.recursion_limit") == 3

    def test_unknown_serializer_fails_on_resolution(self):
        resolver = Resolver(ConfigRepository({"responder": {"serializers": {"success": "xml"}}}))
        install(FastAPI(), resolver=resolver)
        with pytest.raises(InvalidSerializerError):
            resolver.resolve(Serializer)
        with pytest.raises(InvalidSerializerError):
            resolver.resolve(TransformBuilder)

    def test_noop_serializer_resolved(self):
        resolver = Resolver(ConfigRepository({"responder": {"serializers": {"success": "noop"}}}))
        install(FastAPI(), resolver=resolver)
        assert isinstance(resolver.resolve(Serializer), NoopSerializer)

    def test_unsupported_app(self):
        with pytest.raises(UnsupportedEnvironmentError):
            install(object())
