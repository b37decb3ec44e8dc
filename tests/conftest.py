# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Pytest configuration and shared fixtures."""

from urllib.parse import urlencode

import pytest
from starlette.requests import Request

from responder.config import ConfigRepository, clear_settings_cache
from responder.container import Resolver
from responder.provider import ResponderServiceProvider


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Reset settings cache and drop RESPONDER_* env overrides before each test."""
    import os

    for key in list(os.environ):
        if key.startswith("RESPONDER_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    yield
    clear_settings_cache()


def make_request(query: str | list[tuple[str, str]] = "", path: str = "/") -> Request:
    """Build a bare Starlette request with the given query string."""
    if not isinstance(query, str):
        query = urlencode(query)
    scope = {
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "path": path,
        "root_path": "",
        "query_string": query.encode("utf-8"),
        "headers": [],
    }
    return Request(scope)


@pytest.fixture
def request_factory():
    """Factory building Starlette requests from a query string."""
    return make_request


@pytest.fixture
def resolver() -> Resolver:
    """Create a fresh resolver with an empty configuration."""
    return Resolver(ConfigRepository())


@pytest.fixture
def provider(resolver) -> ResponderServiceProvider:
    return ResponderServiceProvider(resolver)
