# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Base response factories, one per hosting runtime."""

from __future__ import annotations

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse as FastAPIJSONResponse
from starlette.responses import JSONResponse, Response

from ..contracts import ResponseFactory


class FastAPIResponseFactory(ResponseFactory):
    """JSON responses for FastAPI hosts.

    Payloads go through ``jsonable_encoder`` first, so pydantic models,
    datetimes and UUIDs can be returned as-is.
    """

    def build(
        self,
        data: Any,
        status: int = 200,
        headers: dict[str, str] | None = None,
    ) -> Response:
        return FastAPIJSONResponse(
            content=jsonable_encoder(data),
            status_code=status,
            headers=headers,
        )


class StarletteResponseFactory(ResponseFactory):
    """Plain JSON responses for bare Starlette hosts."""

    def build(
        self,
        data: Any,
        status: int = 200,
        headers: dict[str, str] | None = None,
    ) -> Response:
        return JSONResponse(content=data, status_code=status, headers=headers)
