# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Field filtering for the ``only`` query parameter.

Stateless, operates on transformed dicts and lists.
"""

from __future__ import annotations

from typing import Any, Sequence


def select_fields(
    data: Any,
    fields: Sequence[str],
    max_depth: int,
    _depth: int = 0,
) -> Any:
    """Keep only the listed fields (recursive).

    Supports dot-notation for nested fields: "author.name" keeps only the
    "name" key inside the "author" object. Naming the parent alone
    ("author") keeps it whole. Lists are filtered item by item.

    Args:
        data: The data to filter.
        fields: Field names to keep (supports dot notation).
        max_depth: Nesting levels past which data is kept unfiltered.
        _depth: Current recursion depth (internal).
    """
    if _depth >= max_depth:
        return data

    if isinstance(data, dict):
        # Split fields into top-level and nested
        top_level: set[str] = set()
        nested: dict[str, list[str]] = {}
        whole: set[str] = set()

        for f in fields:
            if "." in f:
                parent, child = f.split(".", 1)
                top_level.add(parent)
                nested.setdefault(parent, []).append(child)
            else:
                top_level.add(f)
                whole.add(f)

        result = {}
        for key, value in data.items():
            if key not in top_level:
                continue
            if key in nested and key not in whole:
                result[key] = select_fields(value, nested[key], max_depth, _depth + 1)
            else:
                result[key] = value

        return result

    if isinstance(data, list):
        return [select_fields(item, fields, max_depth, _depth) for item in data]

    return data
