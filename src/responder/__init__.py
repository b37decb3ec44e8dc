# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Responder: configurable API response pipeline for FastAPI and Starlette.

Resolves response-building contracts per hosting runtime, wraps the base
response factory in configured decorators and threads the request's
``with``/``only`` query parameters into the transform builder.
"""

from .config import ConfigRepository, ResponderSettings, get_settings
from .container import ResolutionContext, ResolutionScope, Resolver
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
from .errors import (
    InvalidDecoratorError,
    InvalidSerializerError,
    ResponderError,
    ResponderErrorCode,
    UnregisteredContractError,
    UnsupportedEnvironmentError,
)
from .integration import ResponderMiddleware, get_responder, inject, install
from .logging_config import configure_logging
from .provider import ResponderServiceProvider
from .transformation import TransformBuilder, Transformer

__version__ = "0.1.0"

__all__ = [
    # Container
    "Resolver",
    "ResolutionContext",
    "ResolutionScope",
    "ResponderServiceProvider",
    # Contracts
    "ResponseFactory",
    "Serializer",
    "ErrorSerializer",
    "ErrorMessageResolver",
    "ErrorFactory",
    "TransformerResolver",
    "PaginatorFactory",
    "Responder",
    "TransformBuilder",
    "Transformer",
    # Environment
    "HostVariant",
    "detect_host_variant",
    # Config
    "ConfigRepository",
    "ResponderSettings",
    "get_settings",
    # Errors
    "ResponderError",
    "ResponderErrorCode",
    "UnregisteredContractError",
    "UnsupportedEnvironmentError",
    "InvalidDecoratorError",
    "InvalidSerializerError",
    # Integration
    "install",
    "inject",
    "get_responder",
    "ResponderMiddleware",
    # Logging
    "configure_logging",
]
