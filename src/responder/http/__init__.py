# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""HTTP layer: base response factories, their decorators and request parameters.

Importing this module auto-registers the built-in decorators.
"""

from .chain import build_decorator_chain, get_registered_decorators, register_decorator
from .decorators import (
    EscapeHtmlDecorator,
    LoggingDecorator,
    PrettyPrintDecorator,
    ResponseDecorator,
    StatusCodeDecorator,
    SuccessFlagDecorator,
)
from .factories import FastAPIResponseFactory, StarletteResponseFactory
from .parameters import RequestParameters, extract_request_parameters, parse_list_parameter

# Auto-register decorators
register_decorator("status_code", StatusCodeDecorator)
register_decorator("success_flag", SuccessFlagDecorator)
register_decorator("escape_html", EscapeHtmlDecorator)
register_decorator("pretty_print", PrettyPrintDecorator)
register_decorator("log", LoggingDecorator)

__all__ = [
    "build_decorator_chain",
    "get_registered_decorators",
    "register_decorator",
    "ResponseDecorator",
    "StatusCodeDecorator",
    "SuccessFlagDecorator",
    "EscapeHtmlDecorator",
    "PrettyPrintDecorator",
    "LoggingDecorator",
    "FastAPIResponseFactory",
    "StarletteResponseFactory",
    "RequestParameters",
    "extract_request_parameters",
    "parse_list_parameter",
]
