# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Error message catalog and error payload assembly."""

from __future__ import annotations

from typing import Any

from .contracts import ErrorFactory, ErrorMessageResolver, ErrorSerializer

DEFAULT_ERROR_MESSAGES: dict[str, str] = {
    "unauthenticated": "You are not authenticated for this request.",
    "unauthorized": "You are not authorized for this request.",
    "page_not_found": "The requested page does not exist.",
    "relation_not_found": "The requested relation does not exist.",
    "validation_failed": "The given data failed to pass validation.",
}


class DefaultErrorMessageResolver(ErrorMessageResolver):
    """Looks error codes up in the default catalog, with configured overrides."""

    def __init__(self, messages: dict[str, str] | None = None):
        self._messages = {**DEFAULT_ERROR_MESSAGES, **(messages or {})}

    def resolve(self, code: str) -> str | None:
        return self._messages.get(code)


class DefaultErrorFactory(ErrorFactory):
    def __init__(self, message_resolver: ErrorMessageResolver):
        self.message_resolver = message_resolver

    def make(
        self,
        serializer: ErrorSerializer,
        code: str | None = None,
        message: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Build an error body; the message falls back to the catalog entry for ``code``."""
        if message is None and code is not None:
            message = self.message_resolver.resolve(code)
        return serializer.format(code, message, data)
