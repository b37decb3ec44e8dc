# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Transform factory: turns a resource into a serialized body.

Steps, in order:
1. Include parsing (bounded by the manager's recursion limit)
2. Transformation of every item, with requested and default relations
3. Field filtering (``only``)
4. Serialization, plus meta and pagination blocks
"""

from __future__ import annotations

from typing import Any, Sequence

import structlog

from ..contracts import Serializer, TransformerResolver
from .fields import select_fields
from .manager import TransformManager
from .resources import Resource, ResourceKind
from .transformer import Transformer, as_transformer

logger = structlog.get_logger(__name__)


class TransformFactory:
    def __init__(self, manager: TransformManager, transformer_resolver: TransformerResolver):
        self.manager = manager
        self.transformer_resolver = transformer_resolver

    def make(
        self,
        resource: Resource,
        serializer: Serializer,
        *,
        includes: Sequence[str] = (),
        excludes: Sequence[str] = (),
        fields: Sequence[str] = (),
        meta: dict[str, Any] | None = None,
        pagination: dict[str, Any] | None = None,
    ) -> Any:
        requested = [
            include for include in self.manager.parse_includes(includes)
            if not _is_excluded(include, excludes)
        ]

        if resource.kind == ResourceKind.NULL:
            body = serializer.null()
        elif resource.kind == ResourceKind.COLLECTION:
            data = [
                self._transform(obj, resource.transformer, requested, excludes, "")
                for obj in resource.data
            ]
            body = serializer.collection(self._filter(data, fields))
        else:
            data = self._transform(resource.data, resource.transformer, requested, excludes, "")
            body = serializer.item(self._filter(data, fields))

        if isinstance(body, dict):
            body.update(serializer.meta(meta or {}))
            if pagination is not None:
                body.update(serializer.paginator(pagination))
        return body

    def _filter(self, data: Any, fields: Sequence[str]) -> Any:
        if not fields:
            return data
        return select_fields(data, fields, max_depth=self.manager.recursion_limit)

    def _transform(
        self,
        obj: Any,
        transformer: Transformer | None,
        requested: list[str],
        excludes: Sequence[str],
        prefix: str,
    ) -> Any:
        transformer = transformer or self.transformer_resolver.resolve(obj)
        data = transformer.transform(obj)
        if not isinstance(data, dict):
            return data

        depth = prefix.count(".")
        for relation in self._relations(transformer, requested, excludes, prefix, depth):
            related = transformer.include(relation, obj)
            nested = transformer.transformer_for(relation)
            data[relation] = self._transform_related(
                related,
                as_transformer(nested) if nested is not None else None,
                requested,
                excludes,
                f"{prefix}{relation}.",
            )
        return data

    def _transform_related(
        self,
        related: Any,
        transformer: Transformer | None,
        requested: list[str],
        excludes: Sequence[str],
        prefix: str,
    ) -> Any:
        if related is None:
            return None
        if isinstance(related, (list, tuple, set, frozenset)):
            return [
                self._transform(item, transformer, requested, excludes, prefix)
                for item in related
            ]
        return self._transform(related, transformer, requested, excludes, prefix)

    def _relations(
        self,
        transformer: Transformer,
        requested: list[str],
        excludes: Sequence[str],
        prefix: str,
        depth: int,
    ) -> list[str]:
        if depth >= self.manager.recursion_limit:
            return []

        relations: list[str] = []
        for relation in transformer.load:
            if not _is_excluded(f"{prefix}{relation}", excludes) and relation not in relations:
                relations.append(relation)

        for include in requested:
            if not include.startswith(prefix):
                continue
            name = include[len(prefix):]
            if "." in name or name in relations:
                continue
            if transformer.allows(name):
                relations.append(name)
            else:
                logger.debug(
                    "Relation not includable",
                    relation=include,
                    transformer=type(transformer).__name__,
                )
        return relations


def _is_excluded(include: str, excludes: Sequence[str]) -> bool:
    return any(include == exclude or include.startswith(f"{exclude}.") for exclude in excludes)
