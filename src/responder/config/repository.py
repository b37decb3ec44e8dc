# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Configuration repository addressed by dotted keys.

    config.get("responder.decorators")
    config.get("responder.serializers.error")

Producers read from the repository on every resolution, so a value changed
after boot is picked up by the next resolution of the contract.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

_MISSING = object()


class ConfigRepository:
    """Nested dict store with dotted-key access."""

    def __init__(self, items: dict[str, Any] | None = None, config_dir: str | Path = "config"):
        self._items: dict[str, Any] = copy.deepcopy(items) if items else {}
        self.config_dir = Path(config_dir)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at ``key`` or ``default`` when any segment is missing."""
        node: Any = self._items
        for segment in key.split("."):
            if not isinstance(node, dict) or segment not in node:
                return default
            node = node[segment]
        return node

    def has(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def set(self, key: str, value: Any) -> None:
        """Set ``key``, creating intermediate namespaces as needed."""
        segments = key.split(".")
        node = self._items
        for segment in segments[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = {}
                node[segment] = child
            node = child
        node[segments[-1]] = value

    def merge(self, key: str, defaults: dict[str, Any]) -> None:
        """Merge ``defaults`` under ``key``; values already present win."""
        current = self.get(key)
        if not isinstance(current, dict):
            current = {}
        self.set(key, _merge_missing(current, defaults))

    def configure(self, name: str) -> bool:
        """Load ``<config_dir>/<name>.yaml`` under the ``name`` namespace.

        Returns False when the file does not exist; the namespace is then
        left to the packaged defaults.
        """
        path = self.config_dir / f"{name}.yaml"
        if not path.is_file():
            logger.debug("Config file not found", name=name, path=str(path))
            return False

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if data is None:
            return True
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

        existing = self.get(name)
        if isinstance(existing, dict):
            # Values set programmatically before boot override the file
            data = _merge_missing(existing, data)
        self.set(name, data)
        logger.info("Config file loaded", name=name, path=str(path), keys=sorted(data))
        return True

    def all(self) -> dict[str, Any]:
        """Return a deep copy of every configured value."""
        return copy.deepcopy(self._items)


def _merge_missing(current: dict[str, Any], defaults: dict[str, Any]) -> dict[str, Any]:
    """Recursively fill keys of ``current`` that are absent from it."""
    result = dict(current)
    for key, value in defaults.items():
        if key not in result:
            result[key] = copy.deepcopy(value)
        elif isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_missing(result[key], value)
    return result
