# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Request parameter extraction for relation loading and field filtering.

The query parameter names come from configuration
(``responder.load_relations_parameter`` / ``responder.filter_fields_parameter``,
``with`` and ``only`` by default). All of these are accepted:

    ?with=author,comments
    ?with=author&with=comments
    ?with[]=author&with[]=comments

When both spellings are present, plain values come first.

Values are taken at face value; unknown relations or fields are the
transform layer's concern.
"""

from __future__ import annotations

from dataclasses import dataclass

from starlette.requests import Request

from ..config import ConfigRepository


@dataclass(frozen=True)
class RequestParameters:
    """Include and filter lists extracted once per request."""

    includes: tuple[str, ...] = ()
    fields: tuple[str, ...] = ()


def parse_list_parameter(request: Request | None, name: str) -> tuple[str, ...]:
    """Split a query parameter into an ordered tuple of non-empty strings."""
    if request is None:
        return ()

    raw = request.query_params.getlist(name) + request.query_params.getlist(f"{name}[]")
    values: list[str] = []
    for value in raw:
        values.extend(part.strip() for part in value.split(",") if part.strip())
    return tuple(values)


def extract_request_parameters(
    request: Request | None,
    config: ConfigRepository,
) -> RequestParameters:
    """Read the include and filter lists named by configuration."""
    with_parameter = config.get("responder.load_relations_parameter", "with")
    only_parameter = config.get("responder.filter_fields_parameter", "only")
    return RequestParameters(
        includes=parse_list_parameter(request, with_parameter),
        fields=parse_list_parameter(request, only_parameter),
    )
