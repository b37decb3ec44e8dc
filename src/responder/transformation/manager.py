# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Relation include parsing with a recursion limit."""

from __future__ import annotations

from typing import Iterable


class TransformManager:
    """Expands include directives and bounds how deep they may go.

    ``"author.posts.comments"`` expands to ``author``, ``author.posts`` and
    ``author.posts.comments``; segments past ``recursion_limit`` are dropped.
    """

    def __init__(self, recursion_limit: int = 10):
        self.recursion_limit = recursion_limit

    def set_recursion_limit(self, recursion_limit: int) -> "TransformManager":
        self.recursion_limit = recursion_limit
        return self

    def parse_includes(self, includes: Iterable[str]) -> list[str]:
        parsed: list[str] = []
        for include in includes:
            segments = [s.strip() for s in include.split(".") if s.strip()]
            segments = segments[: self.recursion_limit]
            for depth in range(1, len(segments) + 1):
                path = ".".join(segments[:depth])
                if path not in parsed:
                    parsed.append(path)
        return parsed
