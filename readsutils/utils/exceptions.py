"""
Exception hierarchy for the ReadsUtils client.

Provides:
- A closed set of error kinds every failure is tagged with
- Typed exceptions for argument, JSON-RPC, HTTP, version and auth failures
- Safe error message formatting (tokens never reach the logs)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Closed set of failure kinds raised to callers."""
    ARGUMENT_VALIDATION = "argument_validation"
    JSONRPC = "jsonrpc"
    HTTP = "http"
    CLIENT_SERVER_INCOMPATIBLE = "client_server_incompatible"
    AUTHENTICATION = "authentication"


class ReadsUtilsError(Exception):
    """Base exception for all client errors."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.kind.value,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class ArgumentValidationError(ReadsUtilsError):
    """Wrong argument count or shape, detected before any network call."""

    def __init__(self, message: str, method_name: str | None = None):
        details = {"method_name": method_name} if method_name else {}
        super().__init__(message, kind=ErrorKind.ARGUMENT_VALIDATION, details=details)
        self.method_name = method_name


class JSONRPCError(ReadsUtilsError):
    """The service executed the call and reported a structured failure."""

    def __init__(
        self,
        message: str,
        code: int | None = None,
        method_name: str | None = None,
        data: Any = None,
    ):
        super().__init__(
            message,
            kind=ErrorKind.JSONRPC,
            details={"code": code, "method_name": method_name},
        )
        self.code = code
        self.method_name = method_name
        self.data = data


class HTTPError(ReadsUtilsError):
    """No interpretable JSON-RPC response could be obtained."""

    def __init__(
        self,
        message: str,
        status_line: str | None = None,
        method_name: str | None = None,
    ):
        super().__init__(
            message,
            kind=ErrorKind.HTTP,
            details={"status_line": status_line, "method_name": method_name},
        )
        self.status_line = status_line
        self.method_name = method_name

    def __str__(self) -> str:
        if self.status_line:
            return f"[{self.kind.value}] {self.message} ({self.status_line})"
        return f"[{self.kind.value}] {self.message}"


class ClientServerIncompatible(ReadsUtilsError):
    """Client and server semantic versions cannot work together."""

    def __init__(self, message: str, server_version: str, client_version: str):
        super().__init__(
            message,
            kind=ErrorKind.CLIENT_SERVER_INCOMPATIBLE,
            details={"server_version": server_version, "client_version": client_version},
        )
        self.server_version = server_version
        self.client_version = client_version


class AuthenticationError(ReadsUtilsError):
    """No usable token could be obtained for the client."""

    def __init__(self, message: str, source: str | None = None):
        details = {"source": source} if source else {}
        super().__init__(message, kind=ErrorKind.AUTHENTICATION, details=details)
        self.source = source


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"[a-zA-Z0-9]{32,}"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove sensitive information from error messages."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized
