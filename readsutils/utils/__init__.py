"""Utility functions for readsutils."""

from readsutils.utils.exceptions import (
    ReadsUtilsError,
    ArgumentValidationError,
    JSONRPCError,
    HTTPError,
    ClientServerIncompatible,
    AuthenticationError,
    ErrorKind,
    sanitize_error_message,
)

__all__ = [
    "ReadsUtilsError",
    "ArgumentValidationError",
    "JSONRPCError",
    "HTTPError",
    "ClientServerIncompatible",
    "AuthenticationError",
    "ErrorKind",
    "sanitize_error_message",
]
