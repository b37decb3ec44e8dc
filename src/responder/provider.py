# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Responder service provider: wires every contract into the resolver.

Startup sequence:
1. register(app): classify the host once, then bind a producer per contract.
   The host-specific base response factory is chosen here, so later
   resolutions never look at the host again.
2. boot(app): load configuration the way the host expects, merge the
   packaged defaults under ``responder`` and validate the result.

Producers only ever reach other contracts through the ResolutionContext
they are called with.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from .config import ResponderSettings, get_settings
from .container import ResolutionContext, Resolver
from .contracts import (
    ErrorFactory,
    ErrorMessageResolver,
    ErrorSerializer,
    PaginatorFactory,
    Responder,
    ResponseFactory,
    Serializer,
    TransformerResolver,
)
from .environment import HostVariant, detect_host_variant
from .error_messages import DefaultErrorFactory, DefaultErrorMessageResolver
from .http import FastAPIResponseFactory, StarletteResponseFactory, build_decorator_chain
from .http.parameters import extract_request_parameters
from .pagination import DefaultPaginatorFactory
from .serializers import make_error_serializer, make_success_serializer
from .service import ResponderService
from .transformation import (
    DefaultTransformerResolver,
    ResourceFactory,
    TransformBuilder,
    TransformFactory,
    TransformManager,
    Transformer,
)

logger = structlog.get_logger(__name__)

CONFIG_NAMESPACE = "responder"


class ResponderServiceProvider:
    """Registers and boots the responder on a FastAPI or Starlette app."""

    def __init__(
        self,
        resolver: Resolver,
        transformer_resolver: TransformerResolver | None = None,
    ):
        self.resolver = resolver
        self.transformer_resolver = transformer_resolver or DefaultTransformerResolver()
        self.variant: HostVariant | None = None

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, app: Any) -> None:
        """Bind every contract.

        Raises:
            UnsupportedEnvironmentError: If ``app`` is neither FastAPI nor Starlette.
        """
        self.variant = detect_host_variant(app)

        if self.variant == HostVariant.FASTAPI:
            self._register_fastapi_bindings()
        else:
            self._register_starlette_bindings()

        self._register_serializer_bindings()
        self._register_error_bindings()
        self._register_manager_bindings()
        self._register_resource_bindings()
        self._register_pagination_bindings()
        self._register_transformation_bindings()
        self._register_service_bindings()

        logger.info(
            "Responder registered",
            variant=self.variant.value,
            contracts=len(self.resolver.contracts()),
        )

    def _register_fastapi_bindings(self) -> None:
        self.resolver.register(
            ResponseFactory,
            lambda ctx: self._decorate_response_factory(ctx, FastAPIResponseFactory()),
        )

    def _register_starlette_bindings(self) -> None:
        self.resolver.register(
            ResponseFactory,
            lambda ctx: self._decorate_response_factory(ctx, StarletteResponseFactory()),
        )

    def _decorate_response_factory(
        self,
        ctx: ResolutionContext,
        factory: ResponseFactory,
    ) -> ResponseFactory:
        decorators = ctx.config.get(f"{CONFIG_NAMESPACE}.decorators") or []
        return build_decorator_chain(factory, decorators)

    def _register_serializer_bindings(self) -> None:
        self.resolver.register(
            ErrorSerializer,
            lambda ctx: make_error_serializer(ctx.config.get(f"{CONFIG_NAMESPACE}.serializers.error")),
        )
        self.resolver.register(
            Serializer,
            lambda ctx: make_success_serializer(ctx.config.get(f"{CONFIG_NAMESPACE}.serializers.success")),
        )

    def _register_error_bindings(self) -> None:
        self.resolver.register(
            ErrorMessageResolver,
            lambda ctx: DefaultErrorMessageResolver(ctx.config.get(f"{CONFIG_NAMESPACE}.error_messages")),
        )
        self.resolver.register(
            ErrorFactory,
            lambda ctx: DefaultErrorFactory(ctx.resolve(ErrorMessageResolver)),
        )

    def _register_manager_bindings(self) -> None:
        self.resolver.register(
            TransformManager,
            lambda ctx: TransformManager().set_recursion_limit(
                ctx.config.get(f"{CONFIG_NAMESPACE}.recursion_limit")
            ),
        )

    def _register_resource_bindings(self) -> None:
        self.resolver.register(
            ResourceFactory,
            lambda ctx: ResourceFactory(ctx.resolve(TransformerResolver)),
        )

    def _register_pagination_bindings(self) -> None:
        self.resolver.register(PaginatorFactory, self._make_paginator_factory)

    def _make_paginator_factory(self, ctx: ResolutionContext) -> PaginatorFactory:
        if ctx.request is None:
            return DefaultPaginatorFactory()
        return DefaultPaginatorFactory(
            query=ctx.request.query_params.multi_items(),
            path=ctx.request.url.path,
        )

    def _register_transformation_bindings(self) -> None:
        self.resolver.register(
            TransformFactory,
            lambda ctx: TransformFactory(ctx.resolve(TransformManager), ctx.resolve(TransformerResolver)),
        )
        self.resolver.register(TransformBuilder, self._make_transform_builder)
        # One resolver per provider: bindings registered by the app persist
        self.resolver.register(TransformerResolver, lambda ctx: self.transformer_resolver)

    def _make_transform_builder(self, ctx: ResolutionContext) -> TransformBuilder:
        params = extract_request_parameters(ctx.request, ctx.config)
        return (
            TransformBuilder(ctx.resolve(ResourceFactory), ctx.resolve(TransformFactory))
            .serializer(ctx.resolve(Serializer))
            .with_(params.includes)
            .only(params.fields)
        )

    def _register_service_bindings(self) -> None:
        self.resolver.register(
            Responder,
            lambda ctx: ResponderService(
                response_factory=ctx.resolve(ResponseFactory),
                transform_builder=ctx.resolve(TransformBuilder),
                error_factory=ctx.resolve(ErrorFactory),
                error_serializer=ctx.resolve(ErrorSerializer),
                paginator_factory=ctx.resolve(PaginatorFactory),
            ),
        )
        self.resolver.register(Transformer, lambda ctx: Transformer())

    # =========================================================================
    # Boot
    # =========================================================================

    def boot(self, app: Any) -> None:
        """Load and validate configuration for the detected host.

        Raises:
            RuntimeError: If register() has not run.
            pydantic.ValidationError: If the merged configuration is invalid.
        """
        if self.variant is None:
            raise RuntimeError("ResponderServiceProvider.register() must run before boot()")

        if self.variant == HostVariant.STARLETTE:
            self._boot_starlette_application(app)

        config = self.resolver.config
        config.merge(CONFIG_NAMESPACE, get_settings().namespace())

        validated = ResponderSettings(**config.get(CONFIG_NAMESPACE))
        config.set(CONFIG_NAMESPACE, {**config.get(CONFIG_NAMESPACE), **validated.namespace()})

        logger.info(
            "Responder booted",
            variant=self.variant.value,
            decorators=[d if isinstance(d, str) else d.__name__ for d in validated.decorators],
            success_serializer=validated.serializers.success,
            error_serializer=validated.serializers.error,
        )

    def _boot_starlette_application(self, app: Any) -> None:
        config_dir = getattr(app.state, "config_dir", None)
        if config_dir is not None:
            self.resolver.config.config_dir = Path(config_dir)
        self.resolver.config.configure(CONFIG_NAMESPACE)
