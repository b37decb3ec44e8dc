# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Resources: data paired with the transformer that will shape it."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..contracts import TransformerResolver
from .transformer import Transformer, as_transformer


class ResourceKind(str, Enum):
    ITEM = "item"
    COLLECTION = "collection"
    NULL = "null"


@dataclass
class Resource:
    kind: ResourceKind
    data: Any = None
    # None on collections means "resolve per element"
    transformer: Transformer | None = None


class ResourceFactory:
    """Classifies raw data as an item, collection or null resource."""

    def __init__(self, transformer_resolver: TransformerResolver):
        self.transformer_resolver = transformer_resolver

    def make(self, data: Any = None, transformer: Any = None) -> Resource:
        if isinstance(data, Resource):
            return data

        explicit = as_transformer(transformer) if transformer is not None else None

        if data is None:
            return Resource(ResourceKind.NULL)

        if isinstance(data, (list, tuple, set, frozenset, Iterator)):
            return Resource(ResourceKind.COLLECTION, list(data), explicit)

        return Resource(
            ResourceKind.ITEM,
            data,
            explicit or self.transformer_resolver.resolve(data),
        )
