# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Decorator registry and chain builder.

Identifiers in ``responder.decorators`` map to decorator factories through
this registry, so configuration never triggers an import by name. A
ResponseFactory subclass may also be listed directly instead of its
identifier.

Chains are rebuilt on every resolution of the ResponseFactory contract;
nothing is cached between requests.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Sequence

import structlog
from prometheus_client import Counter

from ..config import get_settings
from ..contracts import ResponseFactory
from ..errors import InvalidDecoratorError

logger = structlog.get_logger(__name__)

DECORATOR_CHAINS_BUILT_TOTAL = Counter(
    f"{get_settings().metrics_prefix}_decorator_chains_built_total",
    "Total response factory decorator chains built",
    ["length"],
)

DecoratorFactory = Callable[[ResponseFactory], ResponseFactory]

# Registry: identifier → decorator factory
_decorators: dict[str, DecoratorFactory] = {}


def register_decorator(name: str, decorator: DecoratorFactory) -> None:
    """Register a decorator factory under ``name`` (last registration wins)."""
    _decorators[name] = decorator


def get_registered_decorators() -> dict[str, DecoratorFactory]:
    """Return all registered decorators (for introspection/testing)."""
    return dict(_decorators)


def unregister_decorator(name: str) -> None:
    _decorators.pop(name, None)


def build_decorator_chain(
    factory: ResponseFactory,
    decorators: Sequence[str | type[ResponseFactory]],
) -> ResponseFactory:
    """Wrap ``factory`` in each configured decorator, in order.

    ``[d1, d2, d3]`` yields ``d3(d2(d1(factory)))``; an empty sequence
    returns ``factory`` itself.

    Raises:
        InvalidDecoratorError: If an entry is unknown or cannot wrap a factory.
    """
    for identifier in decorators:
        decorator = _lookup(identifier)
        try:
            inspect.signature(decorator).bind(factory)
        except TypeError:
            raise InvalidDecoratorError(
                identifier, "must accept the wrapped factory as its only argument"
            ) from None
        except ValueError:
            # No introspectable signature, let the call below decide
            pass

        try:
            wrapped = decorator(factory)
        except TypeError as exc:
            raise InvalidDecoratorError(identifier, str(exc)) from exc
        if not isinstance(wrapped, ResponseFactory):
            raise InvalidDecoratorError(
                identifier, f"produced {type(wrapped).__name__}, not a ResponseFactory"
            )
        factory = wrapped

    DECORATOR_CHAINS_BUILT_TOTAL.labels(length=str(len(decorators))).inc()
    logger.debug(
        "Response factory chain built",
        decorators=[_describe(d) for d in decorators],
        outermost=type(factory).__name__,
    )
    return factory


def _lookup(identifier: Any) -> DecoratorFactory:
    if isinstance(identifier, str):
        decorator = _decorators.get(identifier)
        if decorator is None:
            raise InvalidDecoratorError(identifier, "no decorator registered under this name")
        if inspect.isabstract(decorator):
            raise InvalidDecoratorError(identifier, "is abstract and cannot be instantiated")
        return decorator

    if isinstance(identifier, type):
        if not issubclass(identifier, ResponseFactory):
            raise InvalidDecoratorError(identifier, "does not implement ResponseFactory")
        if inspect.isabstract(identifier):
            raise InvalidDecoratorError(identifier, "is abstract and cannot be instantiated")
        return identifier

    raise InvalidDecoratorError(repr(identifier), "expected a decorator name or a ResponseFactory class")


def _describe(identifier: Any) -> str:
    return identifier if isinstance(identifier, str) else getattr(identifier, "__name__", repr(identifier))
