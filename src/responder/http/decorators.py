# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Response factory decorators.

Each decorator implements ResponseFactory and wraps exactly one other
factory. They are listed by identifier in ``responder.decorators``:

    decorators:
      - status_code
      - success_flag
      - pretty_print

The first entry wraps the base factory, the last entry sees the call first.
"""

from __future__ import annotations

import html
import json
from typing import Any

import structlog
from starlette.responses import Response

from ..contracts import ResponseFactory

logger = structlog.get_logger(__name__)


class ResponseDecorator(ResponseFactory):
    """Base decorator: delegates to the wrapped factory unchanged."""

    def __init__(self, factory: ResponseFactory):
        self.factory = factory

    def build(
        self,
        data: Any,
        status: int = 200,
        headers: dict[str, str] | None = None,
    ) -> Response:
        return self.factory.build(data, status, headers)


class StatusCodeDecorator(ResponseDecorator):
    """Adds the HTTP status code to the body as ``status``."""

    def build(self, data: Any, status: int = 200, headers: dict[str, str] | None = None) -> Response:
        if isinstance(data, dict):
            data = {"status": status, **data}
        return self.factory.build(data, status, headers)


class SuccessFlagDecorator(ResponseDecorator):
    """Adds ``success: true`` for 2xx responses and ``false`` otherwise."""

    def build(self, data: Any, status: int = 200, headers: dict[str, str] | None = None) -> Response:
        if isinstance(data, dict):
            data = {"success": 200 <= status < 300, **data}
        return self.factory.build(data, status, headers)


class EscapeHtmlDecorator(ResponseDecorator):
    """HTML-escapes every string in the payload before it is rendered."""

    def build(self, data: Any, status: int = 200, headers: dict[str, str] | None = None) -> Response:
        return self.factory.build(self._escape(data), status, headers)

    def _escape(self, value: Any) -> Any:
        if isinstance(value, str):
            return html.escape(value)
        if isinstance(value, dict):
            return {key: self._escape(item) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._escape(item) for item in value]
        return value


class PrettyPrintDecorator(ResponseDecorator):
    """Re-renders JSON bodies with indentation."""

    indent = 2

    def build(self, data: Any, status: int = 200, headers: dict[str, str] | None = None) -> Response:
        response = self.factory.build(data, status, headers)

        content_type = response.headers.get("content-type", "")
        if "json" not in content_type:
            return response

        try:
            payload = json.loads(response.body)
        except (json.JSONDecodeError, ValueError):
            return response

        pretty_body = json.dumps(payload, indent=self.indent, ensure_ascii=False).encode("utf-8")
        # Repeated headers such as Set-Cookie stay on the wrapped response
        response.body = pretty_body
        response.headers["content-length"] = str(len(pretty_body))
        return response


class LoggingDecorator(ResponseDecorator):
    """Logs every response built through the chain."""

    def build(self, data: Any, status: int = 200, headers: dict[str, str] | None = None) -> Response:
        response = self.factory.build(data, status, headers)
        logger.info(
            "response_built",
            status=response.status_code,
            size=len(response.body),
            media_type=response.headers.get("content-type"),
        )
        return response
