# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Fluent transform builder.

    body = (
        builder.resource(posts, PostTransformer)
        .serializer(SuccessSerializer())
        .with_("author", "comments")
        .only("id", "title", "author.name")
        .transform()
    )

The container hands out builders already configured with the success
serializer and the request's ``with``/``only`` lists.
"""

from __future__ import annotations

from typing import Any, Iterable

from ..contracts import Serializer
from .factory import TransformFactory
from .resources import Resource, ResourceFactory


class TransformBuilder:
    def __init__(self, resource_factory: ResourceFactory, transform_factory: TransformFactory):
        self.resource_factory = resource_factory
        self.transform_factory = transform_factory
        self._resource: Resource | None = None
        self._serializer: Serializer | None = None
        self._with: list[str] = []
        self._without: list[str] = []
        self._only: list[str] = []
        self._meta: dict[str, Any] = {}
        self._pagination: dict[str, Any] | None = None

    def resource(self, data: Any = None, transformer: Any = None) -> "TransformBuilder":
        self._resource = self.resource_factory.make(data, transformer)
        return self

    def serializer(self, serializer: Serializer) -> "TransformBuilder":
        self._serializer = serializer
        return self

    def with_(self, *relations: str | Iterable[str]) -> "TransformBuilder":
        """Add relations to include; accepts names or iterables of names."""
        for relation in _flatten(relations):
            if relation not in self._with:
                self._with.append(relation)
        return self

    def without(self, *relations: str | Iterable[str]) -> "TransformBuilder":
        for relation in _flatten(relations):
            if relation not in self._without:
                self._without.append(relation)
        return self

    def only(self, *fields: str | Iterable[str]) -> "TransformBuilder":
        for field in _flatten(fields):
            if field not in self._only:
                self._only.append(field)
        return self

    def meta(self, data: dict[str, Any] | None) -> "TransformBuilder":
        if data:
            self._meta.update(data)
        return self

    def paginator(self, pagination: dict[str, Any] | None) -> "TransformBuilder":
        self._pagination = pagination
        return self

    @property
    def includes(self) -> tuple[str, ...]:
        return tuple(self._with)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._only)

    def transform(self) -> Any:
        """Transform and serialize the resource.

        Raises:
            ValueError: If no serializer has been set.
        """
        if self._serializer is None:
            raise ValueError("TransformBuilder has no serializer; call serializer() first")

        resource = self._resource or self.resource_factory.make(None)
        return self.transform_factory.make(
            resource,
            self._serializer,
            includes=self._with,
            excludes=self._without,
            fields=self._only,
            meta=self._meta,
            pagination=self._pagination,
        )


def _flatten(values: Iterable[str | Iterable[str]]) -> list[str]:
    flat: list[str] = []
    for value in values:
        if isinstance(value, str):
            flat.append(value)
        else:
            flat.extend(value)
    return flat
