# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Responder service: the object route handlers talk to."""

from __future__ import annotations

from typing import Any, Iterable

from starlette.responses import Response

from .contracts import (
    ErrorFactory,
    ErrorSerializer,
    PaginatorFactory,
    Responder,
    ResponseFactory,
)
from .transformation import TransformBuilder


class ResponderService(Responder):
    """Builds success and error responses through the resolved pipeline.

    Every collaborator comes from the container for the current request, so
    the transform builder already carries the request's ``with``/``only``
    lists and the response factory is wrapped in the configured decorators.
    """

    def __init__(
        self,
        response_factory: ResponseFactory,
        transform_builder: TransformBuilder,
        error_factory: ErrorFactory,
        error_serializer: ErrorSerializer,
        paginator_factory: PaginatorFactory,
    ):
        self.response_factory = response_factory
        self.transform_builder = transform_builder
        self.error_factory = error_factory
        self.error_serializer = error_serializer
        self.paginator_factory = paginator_factory

    def success(
        self,
        data: Any = None,
        transformer: Any = None,
        *,
        status: int = 200,
        meta: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        body = self.transform_builder.resource(data, transformer).meta(meta).transform()
        return self.response_factory.build(body, status, headers)

    def paginated(
        self,
        data: Iterable[Any],
        transformer: Any = None,
        *,
        total: int,
        page: int,
        per_page: int,
        status: int = 200,
        meta: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """Success response for one page of a larger collection."""
        items = list(data)
        pagination = self.paginator_factory.make(
            total=total, page=page, per_page=per_page, count=len(items)
        )
        body = (
            self.transform_builder.resource(items, transformer)
            .meta(meta)
            .paginator(pagination)
            .transform()
        )
        return self.response_factory.build(body, status, headers)

    def error(
        self,
        code: str | None = None,
        message: str | None = None,
        *,
        status: int = 500,
        data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        body = self.error_factory.make(self.error_serializer, code, message, data)
        return self.response_factory.build(body, status, headers)
