"""JSON-RPC transport for the ReadsUtils client."""

from .protocol import (
    DEFAULT_PROTOCOL_VERSION,
    FIXED_ID_PROTOCOL_VERSION,
    JSON_CONTENT_TYPE,
    Endpoint,
    RpcAppError,
    RpcErrorPayload,
    RpcOutcome,
    RpcRequest,
    RpcSucceeded,
    RpcTransportFailed,
)
from .serialization import decode_response, decode_response_payload, encode_request, normalize_rpc_error
from .transport import DEFAULT_SESSION_ID, RpcTransport

__all__ = [
    "DEFAULT_PROTOCOL_VERSION",
    "DEFAULT_SESSION_ID",
    "FIXED_ID_PROTOCOL_VERSION",
    "JSON_CONTENT_TYPE",
    "Endpoint",
    "RpcAppError",
    "RpcErrorPayload",
    "RpcOutcome",
    "RpcRequest",
    "RpcSucceeded",
    "RpcTransport",
    "RpcTransportFailed",
    "decode_response",
    "decode_response_payload",
    "encode_request",
    "normalize_rpc_error",
]
