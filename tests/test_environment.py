# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Tests for host variant detection and per-variant base factories."""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from starlette.applications import Starlette

from responder.contracts import ResponseFactory
from responder.environment import HostVariant, detect_host_variant
from responder.errors import ResponderErrorCode, UnsupportedEnvironmentError
from responder.http import FastAPIResponseFactory, StarletteResponseFactory
from responder.http.decorators import ResponseDecorator


def _innermost(factory: ResponseFactory) -> ResponseFactory:
    while isinstance(factory, ResponseDecorator):
        factory = factory.factory
    return factory


class TestDetectHostVariant:
    def test_fastapi(self):
        assert detect_host_variant(FastAPI()) == HostVariant.FASTAPI

    def test_starlette(self):
        assert detect_host_variant(Starlette()) == HostVariant.STARLETTE

    def test_starlette_subclass_is_starlette(self):
        class CustomApp(Starlette):
            pass

        assert detect_host_variant(CustomApp()) == HostVariant.STARLETTE

    def test_unsupported_raises(self):
        with pytest.raises(UnsupportedEnvironmentError) as exc_info:
            detect_host_variant(object())
        assert exc_info.value.code == ResponderErrorCode.UNSUPPORTED_ENVIRONMENT
        assert exc_info.value.details == {"app_type": "object"}

    def test_unsupported_does_not_fall_back(self, provider, resolver):
        with pytest.raises(UnsupportedEnvironmentError):
            provider.register({"not": "an app"})
        assert resolver.contracts() == []


class TestVariantBaseFactory:
    """The chain's innermost factory follows the host variant."""

    def test_fastapi_base_factory(self, provider, resolver):
        app = FastAPI()
        provider.register(app)
        provider.boot(app)
        factory = resolver.resolve(ResponseFactory)
        assert isinstance(_innermost(factory), FastAPIResponseFactory)

    def test_starlette_base_factory(self, provider, resolver, tmp_path):
        app = Starlette()
        app.state.config_dir = tmp_path
        provider.register(app)
        provider.boot(app)
        factory = resolver.resolve(ResponseFactory)
        assert isinstance(_innermost(factory), StarletteResponseFactory)

    def test_detection_runs_once(self, provider, resolver):
        app = FastAPI()
        with patch(
            "responder.provider.detect_host_variant",
            wraps=detect_host_variant,
        ) as mock_detect:
            provider.register(app)
            provider.boot(app)
            for _ in range(3):
                resolver.resolve(ResponseFactory)
        assert mock_detect.call_count == 1

    def test_boot_requires_register(self, provider):
        with pytest.raises(RuntimeError):
            provider.boot(FastAPI())
