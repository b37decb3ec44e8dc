# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Transformers and the transformer resolver.

A transformer maps one domain object to a plain dict and declares which
relations may be included through the ``with`` query parameter:

    class PostTransformer(Transformer):
        relations = {"author": UserTransformer, "comments": None}
        load = ["author"]

        def transform(self, post):
            return {"id": post.id, "title": post.title}

        def include_comments(self, post):
            return post.comments.published()

``relations`` may be a list of names or a dict mapping names to the
transformer of the related data (None lets the resolver pick one). ``["*"]``
allows every relation. ``load`` lists relations included on every request.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable

from pydantic import BaseModel

from ..contracts import TransformerResolver


class Transformer:
    """Base transformer; on its own it passes data through unchanged."""

    relations: list[str] | dict[str, Any] = []
    load: list[str] = []

    def __call__(self, obj: Any) -> Any:
        return self.transform(obj)

    def transform(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return dict(obj)
        if isinstance(obj, BaseModel):
            return obj.model_dump()
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)
        if hasattr(obj, "__dict__"):
            return {key: value for key, value in vars(obj).items() if not key.startswith("_")}
        return obj

    def allows(self, relation: str) -> bool:
        return "*" in self.relations or relation in self.relations or relation in self.load

    def transformer_for(self, relation: str) -> Any:
        if isinstance(self.relations, dict):
            return self.relations.get(relation)
        return None

    def include(self, relation: str, obj: Any) -> Any:
        """Fetch relation data from ``include_<relation>`` or the attribute/key itself."""
        method = getattr(self, f"include_{relation}", None)
        if method is not None:
            return method(obj)
        if isinstance(obj, dict):
            return obj.get(relation)
        return getattr(obj, relation, None)


class CallableTransformer(Transformer):
    """Adapts a plain function to the Transformer interface."""

    def __init__(self, fn: Callable[[Any], Any]):
        self.fn = fn

    def transform(self, obj: Any) -> Any:
        return self.fn(obj)


def as_transformer(transformer: Any) -> Transformer:
    """Normalize a transformer instance, class or plain callable."""
    if isinstance(transformer, Transformer):
        return transformer
    if isinstance(transformer, type) and issubclass(transformer, Transformer):
        return transformer()
    if callable(transformer):
        return CallableTransformer(transformer)
    raise TypeError(f"Not a transformer: {transformer!r}")


class DefaultTransformerResolver(TransformerResolver):
    """Resolves transformers by data type.

    Resolution priority:
    1. ``__transformer__`` declared on the data's class
    2. A transformer bound to the data's type or one of its base classes
    3. The passthrough default
    """

    def __init__(self, default: Transformer | None = None):
        self._bindings: dict[type, Transformer] = {}
        self._default = default or Transformer()

    def bind(self, data_type: type, transformer: Any) -> None:
        self._bindings[data_type] = as_transformer(transformer)

    def resolve(self, data: Any) -> Transformer:
        explicit = getattr(type(data), "__transformer__", None)
        if explicit is not None:
            return as_transformer(explicit)

        for klass in type(data).__mro__:
            if klass in self._bindings:
                return self._bindings[klass]

        return self._default

    def get_bindings(self) -> dict[type, Transformer]:
        """Return all bindings (for introspection/testing)."""
        return dict(self._bindings)
