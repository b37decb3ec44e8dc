# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Abstract contracts resolved through the container.

Each class here is both an interface and the key a producer is registered
under:

    resolver.register(ResponseFactory, produce_response_factory)
    factory = resolver.resolve(ResponseFactory, request)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from starlette.responses import Response


class ResponseFactory(ABC):
    """Builds the final HTTP response for a payload.

    Decorators implement this contract too and wrap another factory, so a
    configured chain is indistinguishable from a base factory to callers.
    """

    @abstractmethod
    def build(
        self,
        data: Any,
        status: int = 200,
        headers: dict[str, str] | None = None,
    ) -> Response:
        ...


class Serializer(ABC):
    """Shapes transformed success data into a response body."""

    @abstractmethod
    def item(self, data: dict[str, Any]) -> dict[str, Any]:
        ...

    @abstractmethod
    def collection(self, data: list[dict[str, Any]]) -> dict[str, Any]:
        ...

    @abstractmethod
    def null(self) -> dict[str, Any]:
        ...

    def meta(self, meta: dict[str, Any]) -> dict[str, Any]:
        """Top-level keys merged into the body for custom meta data."""
        return {"meta": meta} if meta else {}

    def paginator(self, pagination: dict[str, Any]) -> dict[str, Any]:
        """Top-level keys merged into the body for pagination."""
        return {"pagination": pagination}


class ErrorSerializer(ABC):
    """Shapes an error code, message and data into a response body."""

    @abstractmethod
    def format(
        self,
        code: str | None = None,
        message: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        ...


class ErrorMessageResolver(ABC):
    @abstractmethod
    def resolve(self, code: str) -> str | None:
        ...


class ErrorFactory(ABC):
    @abstractmethod
    def make(
        self,
        serializer: ErrorSerializer,
        code: str | None = None,
        message: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        ...


class TransformerResolver(ABC):
    """Finds the transformer responsible for a piece of data."""

    @abstractmethod
    def bind(self, data_type: type, transformer: Any) -> None:
        ...

    @abstractmethod
    def resolve(self, data: Any) -> Any:
        ...


class PaginatorFactory(ABC):
    @abstractmethod
    def make(self, *, total: int, page: int, per_page: int, count: int) -> dict[str, Any]:
        ...


class Responder(ABC):
    """Service entry point handed to route handlers."""

    @abstractmethod
    def success(self, data: Any = None, transformer: Any = None, **kwargs: Any) -> Response:
        ...

    @abstractmethod
    def error(self, code: str | None = None, message: str | None = None, **kwargs: Any) -> Response:
        ...
