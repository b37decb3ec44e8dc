# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Transformation of domain data into serialized response bodies.

Relation includes (``with``), field filtering (``only``), transformer
resolution and the fluent builder the container hands out per request.
"""

from .builder import TransformBuilder
from .factory import TransformFactory
from .fields import select_fields
from .manager import TransformManager
from .resources import Resource, ResourceFactory, ResourceKind
from .transformer import CallableTransformer, DefaultTransformerResolver, Transformer, as_transformer

__all__ = [
    "TransformBuilder",
    "TransformFactory",
    "TransformManager",
    "Resource",
    "ResourceFactory",
    "ResourceKind",
    "Transformer",
    "CallableTransformer",
    "DefaultTransformerResolver",
    "as_transformer",
    "select_fields",
]
