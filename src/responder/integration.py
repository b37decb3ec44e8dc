# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Application integration: install(), middleware and request helpers.

FastAPI:

    app = FastAPI()
    install(app)

    @app.get("/posts")
    def list_posts(responder: Responder = Depends(inject(Responder))):
        return responder.success(posts, PostTransformer)

Starlette:

    async def list_posts(request):
        return get_responder(request).success(posts, PostTransformer)

    app = Starlette(routes=[Route("/posts", list_posts)])
    install(app)
"""

from __future__ import annotations

from typing import Any, Callable

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .container import ResolutionScope, Resolver
from .contracts import Responder
from .provider import ResponderServiceProvider

logger = structlog.get_logger(__name__)


class ResponderMiddleware(BaseHTTPMiddleware):
    """Binds a request-scoped ResolutionScope to ``request.state.responder``."""

    def __init__(self, app: Any, resolver: Resolver):
        super().__init__(app)
        self.resolver = resolver

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.responder = self.resolver.scope(request)
        return await call_next(request)


def install(
    app: Any,
    resolver: Resolver | None = None,
    provider: ResponderServiceProvider | None = None,
) -> Resolver:
    """Register and boot the responder on ``app``.

    Must run before the application starts serving; registration is not
    safe to repeat once requests are in flight.

    Raises:
        UnsupportedEnvironmentError: If ``app`` is neither FastAPI nor Starlette.
    """
    if provider is None:
        provider = ResponderServiceProvider(resolver or Resolver())
    resolver = provider.resolver

    provider.register(app)
    provider.boot(app)

    app.add_middleware(ResponderMiddleware, resolver=resolver)
    app.state.resolver = resolver
    app.state.responder_provider = provider
    return resolver


def _scope_for(request: Request) -> ResolutionScope:
    scope = getattr(request.state, "responder", None)
    if scope is None:
        # Request did not go through ResponderMiddleware
        scope = request.app.state.resolver.scope(request)
    return scope


def inject(contract: Any) -> Callable[[Request], Any]:
    """FastAPI dependency resolving ``contract`` for the current request."""

    def dependency(request: Request) -> Any:
        return _scope_for(request).resolve(contract)

    dependency.__name__ = f"inject_{getattr(contract, '__name__', 'contract')}"
    return dependency


def get_responder(request: Request) -> Responder:
    """Resolve the Responder service for a Starlette endpoint."""
    return _scope_for(request).resolve(Responder)
