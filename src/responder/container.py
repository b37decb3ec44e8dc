# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Contract resolver: maps contracts to producers.

Registration happens once at startup, before the application serves
requests; the registry is read-only afterwards and needs no locking.

Producers receive a ResolutionContext carrying the resolver, the
configuration repository and the current request. Resolution is not
memoized: every ``resolve`` call runs the producer again, so request-derived
instances never leak from one request to another.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import structlog
from prometheus_client import Counter
from starlette.requests import Request

from .config import ConfigRepository, get_settings
from .errors import UnregisteredContractError

logger = structlog.get_logger(__name__)

CONTRACT_RESOLUTIONS_TOTAL = Counter(
    f"{get_settings().metrics_prefix}_contract_resolutions_total",
    "Total contract resolutions",
    ["contract"],
)

Producer = Callable[["ResolutionContext"], Any]


def contract_name(contract: Any) -> str:
    return getattr(contract, "__name__", None) or str(contract)


@dataclass(frozen=True)
class ResolutionContext:
    """What a producer may see: the resolver, configuration and request."""

    resolver: "Resolver"
    request: Request | None = None

    @property
    def config(self) -> ConfigRepository:
        return self.resolver.config

    def resolve(self, contract: Any) -> Any:
        """Resolve another contract within the same request."""
        return self.resolver.resolve(contract, self.request)


class Resolver:
    """Process-wide registry of contract producers."""

    def __init__(self, config: ConfigRepository | None = None):
        self.config = config if config is not None else ConfigRepository()
        self._producers: dict[Any, Producer] = {}

    def register(self, contract: Any, producer: Producer) -> None:
        """Bind ``producer`` to ``contract``, replacing any previous binding."""
        if contract in self._producers:
            logger.debug("Contract producer replaced", contract=contract_name(contract))
        self._producers[contract] = producer

    def bound(self, contract: Any) -> bool:
        return contract in self._producers

    def resolve(self, contract: Any, request: Request | None = None) -> Any:
        """Run the producer bound to ``contract``.

        Raises:
            UnregisteredContractError: If no producer is registered.
        """
        producer = self._producers.get(contract)
        if producer is None:
            raise UnregisteredContractError(contract)

        CONTRACT_RESOLUTIONS_TOTAL.labels(contract=contract_name(contract)).inc()
        return producer(ResolutionContext(resolver=self, request=request))

    def scope(self, request: Request | None = None) -> "ResolutionScope":
        return ResolutionScope(self, request)

    def contracts(self) -> list[Any]:
        """Return every registered contract (for introspection/testing)."""
        return list(self._producers)


class ResolutionScope:
    """A resolver bound to one request.

    Stored on ``request.state.responder`` by the middleware so handlers can
    resolve contracts without passing the request around.
    """

    def __init__(self, resolver: Resolver, request: Request | None = None):
        self.resolver = resolver
        self.request = request

    def resolve(self, contract: Any) -> Any:
        return self.resolver.resolve(contract, self.request)
