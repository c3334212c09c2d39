"""
readsutils - JSON-RPC client for the ReadsUtils reads service

Usage:
    from readsutils import ReadsUtilsClient

    client = ReadsUtilsClient("https://kbase.us/services/ReadsUtils", token="...")
    out = client.validate_fastq([{"file_path": "/data/reads.fq"}])
"""

from readsutils.client import ReadsUtilsClient
from readsutils.compat import CLIENT_VERSION
from readsutils.utils.exceptions import (
    ArgumentValidationError,
    AuthenticationError,
    ClientServerIncompatible,
    ErrorKind,
    HTTPError,
    JSONRPCError,
    ReadsUtilsError,
)

__version__ = CLIENT_VERSION
__all__ = [
    "ReadsUtilsClient",
    "ReadsUtilsError",
    "ArgumentValidationError",
    "JSONRPCError",
    "HTTPError",
    "ClientServerIncompatible",
    "AuthenticationError",
    "ErrorKind",
    "__version__",
]
