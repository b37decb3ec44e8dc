# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Responder error codes and exception classes.

Every failure raised by the composition layer is a wiring or configuration
error: it shows up at startup or on the first resolution of a contract, never
as a transient condition. Nothing here is retried.

Error Response Schema:
```json
{
  "error": {
    "code": "UNREGISTERED_CONTRACT",
    "message": "No producer registered for contract 'ResponseFactory'",
    "details": {"contract": "ResponseFactory"},
    "suggestion": "Register a producer before resolving the contract"
  }
}
```
"""

from enum import Enum
from typing import Any


class ResponderErrorCode(str, Enum):
    """Responder error codes."""

    UNREGISTERED_CONTRACT = "UNREGISTERED_CONTRACT"
    UNSUPPORTED_ENVIRONMENT = "UNSUPPORTED_ENVIRONMENT"
    INVALID_DECORATOR = "INVALID_DECORATOR"
    INVALID_SERIALIZER = "INVALID_SERIALIZER"


ERROR_CODE_SUGGESTIONS: dict[ResponderErrorCode, str] = {
    ResponderErrorCode.UNREGISTERED_CONTRACT: (
        "Register a producer for the contract before resolving it "
        "(did the service provider run?)"
    ),
    ResponderErrorCode.UNSUPPORTED_ENVIRONMENT: (
        "Install the responder on a FastAPI or Starlette application"
    ),
    ResponderErrorCode.INVALID_DECORATOR: (
        "Check responder.decorators: each entry must name a registered "
        "decorator wrapping exactly one ResponseFactory"
    ),
    ResponderErrorCode.INVALID_SERIALIZER: (
        "Check responder.serializers: each entry must name a registered serializer"
    ),
}


def _contract_name(contract: Any) -> str:
    return getattr(contract, "__name__", None) or str(contract)


class ResponderError(Exception):
    """Base exception for responder errors.

    Usage:
        raise ResponderError(
            code=ResponderErrorCode.INVALID_DECORATOR,
            message="Decorator 'gzip' is not registered",
            details={"decorator": "gzip"},
        )
    """

    def __init__(
        self,
        code: ResponderErrorCode | str,
        message: str,
        details: dict[str, Any] | None = None,
        suggestion: str | None = None,
    ):
        self.code = code if isinstance(code, ResponderErrorCode) else ResponderErrorCode(code)
        self.message = message
        self.details = details
        self.suggestion = suggestion or ERROR_CODE_SUGGESTIONS.get(self.code)
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
                "suggestion": self.suggestion,
            }
        }


class UnregisteredContractError(ResponderError):
    """Raised when a contract is resolved without a registered producer."""

    def __init__(self, contract: Any, message: str | None = None):
        name = _contract_name(contract)
        super().__init__(
            code=ResponderErrorCode.UNREGISTERED_CONTRACT,
            message=message or f"No producer registered for contract '{name}'",
            details={"contract": name},
        )
        self.contract = contract


class UnsupportedEnvironmentError(ResponderError):
    """Raised when the hosting application is neither FastAPI nor Starlette."""

    def __init__(self, app: Any, message: str | None = None):
        app_type = type(app).__name__
        super().__init__(
            code=ResponderErrorCode.UNSUPPORTED_ENVIRONMENT,
            message=message or f"Unsupported hosting application '{app_type}'",
            details={"app_type": app_type},
        )


class InvalidDecoratorError(ResponderError):
    """Raised when a configured decorator cannot wrap a response factory."""

    def __init__(self, decorator: Any, reason: str, message: str | None = None):
        name = decorator if isinstance(decorator, str) else _contract_name(decorator)
        super().__init__(
            code=ResponderErrorCode.INVALID_DECORATOR,
            message=message or f"Invalid response decorator '{name}': {reason}",
            details={"decorator": name, "reason": reason},
        )


class InvalidSerializerError(ResponderError):
    """Raised when a configured serializer identifier cannot be resolved."""

    def __init__(self, serializer: Any, kind: str, reason: str):
        name = serializer if isinstance(serializer, str) else _contract_name(serializer)
        super().__init__(
            code=ResponderErrorCode.INVALID_SERIALIZER,
            message=f"Invalid {kind} serializer '{name}': {reason}",
            details={"serializer": name, "kind": kind, "reason": reason},
        )
