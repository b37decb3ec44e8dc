# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Built-in serializers and the serializer registry.

``responder.serializers.success`` and ``responder.serializers.error`` name
entries in this registry.
"""

from __future__ import annotations

from typing import Any, Callable

from .contracts import ErrorSerializer, Serializer
from .errors import InvalidSerializerError


class SuccessSerializer(Serializer):
    """Wraps data in a ``data`` key.

    {"data": {...}, "pagination": {...}, "meta": {...}}
    """

    def item(self, data: dict[str, Any]) -> dict[str, Any]:
        return {"data": data}

    def collection(self, data: list[dict[str, Any]]) -> dict[str, Any]:
        return {"data": data}

    def null(self) -> dict[str, Any]:
        return {"data": None}


class NoopSerializer(Serializer):
    """Returns transformed data without an envelope.

    Meta and pagination have nowhere to go in a bare body and are dropped.
    """

    def item(self, data: dict[str, Any]) -> Any:
        return data

    def collection(self, data: list[dict[str, Any]]) -> Any:
        return data

    def null(self) -> Any:
        return None

    def meta(self, meta: dict[str, Any]) -> dict[str, Any]:
        return {}

    def paginator(self, pagination: dict[str, Any]) -> dict[str, Any]:
        return {}


class DefaultErrorSerializer(ErrorSerializer):
    """Error body with the same shape as ResponderError.to_dict().

    {"error": {"code": "...", "message": "...", "details": {...}}}
    """

    def format(
        self,
        code: str | None = None,
        message: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        error: dict[str, Any] = {
            "code": code,
            "message": message,
        }
        if data:
            error["details"] = data
        return {"error": error}


SerializerFactory = Callable[[], Any]

_success_serializers: dict[str, SerializerFactory] = {
    "success": SuccessSerializer,
    "noop": NoopSerializer,
}

_error_serializers: dict[str, SerializerFactory] = {
    "error": DefaultErrorSerializer,
}


def register_success_serializer(name: str, factory: SerializerFactory) -> None:
    _success_serializers[name] = factory


def register_error_serializer(name: str, factory: SerializerFactory) -> None:
    _error_serializers[name] = factory


def make_success_serializer(name: str) -> Serializer:
    """Instantiate the success serializer registered under ``name``.

    Raises:
        InvalidSerializerError: If the name is unknown or the instance is not a Serializer.
    """
    return _make(name, _success_serializers, Serializer, "success")


def make_error_serializer(name: str) -> ErrorSerializer:
    """Instantiate the error serializer registered under ``name``.

    Raises:
        InvalidSerializerError: If the name is unknown or the instance is not an ErrorSerializer.
    """
    return _make(name, _error_serializers, ErrorSerializer, "error")


def _make(name: str, registry: dict[str, SerializerFactory], contract: type, kind: str) -> Any:
    factory = registry.get(name)
    if factory is None:
        raise InvalidSerializerError(name, kind, "no serializer registered under this name")
    serializer = factory()
    if not isinstance(serializer, contract):
        raise InvalidSerializerError(name, kind, f"does not implement {contract.__name__}")
    return serializer
