"""Serialization helpers for JSON-RPC envelopes."""

from __future__ import annotations

import json
from typing import Any

from .protocol import (
    FIXED_ID_PROTOCOL_VERSION,
    RpcAppError,
    RpcErrorPayload,
    RpcRequest,
    RpcSucceeded,
)


def safe_dict(value: Any) -> dict[str, Any]:
    """Return the value when dict-like, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def build_payload(request: RpcRequest, *, version: str, request_id: str) -> dict[str, Any]:
    """Build the request object; protocol 1.0 carries no version member."""
    payload: dict[str, Any] = {"method": request.method, "params": request.params}
    if version != FIXED_ID_PROTOCOL_VERSION:
        payload["version"] = version
    payload["id"] = request_id
    return payload


def encode_request(request: RpcRequest, *, version: str, request_id: str) -> str:
    """Encode a request envelope as a JSON document."""
    return json.dumps(build_payload(request, version=version, request_id=request_id), ensure_ascii=False)


def _coerce_code(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def normalize_rpc_error(error: Any) -> RpcErrorPayload:
    """Normalize unknown error payloads into RpcErrorPayload."""
    if isinstance(error, str):
        # 1.0 servers report the message as a bare string.
        return RpcErrorPayload(message=error)
    row = safe_dict(error)
    data = row.get("data")
    if data is None:
        data = row.get("error")
    message = row.get("message")
    return RpcErrorPayload(
        message=str(message) if message not in (None, "") else "rpc failed",
        code=_coerce_code(row.get("code")),
        data=data,
    )


def decode_response_payload(
    payload: Any,
    *,
    service: bool = False,
    status_line: str | None = None,
) -> RpcSucceeded | RpcAppError:
    """Classify an already-parsed response object."""
    if service:
        return RpcSucceeded(result=[payload], status_line=status_line)
    row = safe_dict(payload)
    error = row.get("error")
    if error:
        return RpcAppError(error=normalize_rpc_error(error), status_line=status_line)
    result = row.get("result")
    if result is None:
        values: list[Any] = []
    elif isinstance(result, list):
        values = result
    else:
        values = [result]
    return RpcSucceeded(result=values, status_line=status_line)


def decode_response(
    body: str | bytes,
    *,
    service: bool = False,
    status_line: str | None = None,
) -> RpcSucceeded | RpcAppError:
    """
    Parse a JSON-RPC response body.

    Raises:
        ValueError: the body is not JSON or not a JSON object.
    """
    payload = json.loads(body)
    if not isinstance(payload, dict):
        raise ValueError(f"response is not a JSON object: {type(payload).__name__}")
    return decode_response_payload(payload, service=service, status_line=status_line)
