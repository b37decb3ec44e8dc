# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Hosting runtime detection.

Two hosts are supported:
- FASTAPI: a ``fastapi.FastAPI`` application
- STARLETTE: a bare ``starlette.applications.Starlette`` application

FastAPI subclasses Starlette, so it has to be checked first.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import structlog
from fastapi import FastAPI
from starlette.applications import Starlette

from .errors import UnsupportedEnvironmentError

logger = structlog.get_logger(__name__)


class HostVariant(str, Enum):
    """Supported hosting runtimes."""
    FASTAPI = "fastapi"
    STARLETTE = "starlette"


def detect_host_variant(app: Any) -> HostVariant:
    """Classify the hosting application.

    Raises:
        UnsupportedEnvironmentError: If ``app`` is neither FastAPI nor Starlette.
    """
    if isinstance(app, FastAPI):
        variant = HostVariant.FASTAPI
    elif isinstance(app, Starlette):
        variant = HostVariant.STARLETTE
    else:
        raise UnsupportedEnvironmentError(app)

    logger.debug("Host variant detected", variant=variant.value, app_type=type(app).__name__)
    return variant
