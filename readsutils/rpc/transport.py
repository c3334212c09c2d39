"""Blocking JSON-RPC over HTTP POST."""

from __future__ import annotations

import threading
import uuid

import httpx
from loguru import logger

from readsutils.config.schema import DEFAULT_TIMEOUT_SECONDS
from readsutils.utils.exceptions import sanitize_error_message

from .protocol import (
    DEFAULT_PROTOCOL_VERSION,
    FIXED_ID_PROTOCOL_VERSION,
    JSON_CONTENT_TYPE,
    Endpoint,
    RpcOutcome,
    RpcRequest,
    RpcSucceeded,
    RpcTransportFailed,
)
from .serialization import decode_response, encode_request

DEFAULT_SESSION_ID = "readsutils-client"


class RpcTransport:
    """
    Sends one request per call and classifies the reply.

    Under protocol "1.1" (default) every call gets a fresh random id, so one
    instance may be shared between threads. The only state written per call
    is ``last_status_line``, which is last-writer-wins when calls overlap;
    each outcome carries its own ``status_line``. Under "1.0" all calls reuse
    a single session id; that mode is meant for a single caller.
    """

    def __init__(
        self,
        *,
        version: str = DEFAULT_PROTOCOL_VERSION,
        content_type: str = JSON_CONTENT_TYPE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session_id: str | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ):
        self.version = version
        self.content_type = content_type
        self.timeout = float(timeout)
        self._session_id = session_id
        self._id_lock = threading.Lock()
        self._http_transport = http_transport
        self.last_status_line: str | None = None

    @property
    def session_id(self) -> str | None:
        return self._session_id

    def _next_id(self, request: RpcRequest, version: str) -> str:
        if request.id:
            return request.id
        if version == FIXED_ID_PROTOCOL_VERSION:
            with self._id_lock:
                if self._session_id is None:
                    self._session_id = DEFAULT_SESSION_ID
                return self._session_id
        return uuid.uuid4().hex

    def _build_headers(self, endpoint: Endpoint) -> list[tuple[str, str]]:
        headers = [
            ("Content-Type", self.content_type),
            ("Accept", JSON_CONTENT_TYPE),
            *endpoint.headers,
        ]
        if endpoint.token:
            headers.append(("Authorization", endpoint.token))
        return headers

    def _client_kwargs(self) -> dict:
        kwargs: dict = {"timeout": self.timeout}
        if self._http_transport is not None:
            kwargs["transport"] = self._http_transport
        return kwargs

    @staticmethod
    def _status_line(resp: httpx.Response) -> str:
        status_code = int(getattr(resp, "status_code", 0) or 0)
        reason = str(getattr(resp, "reason_phrase", "") or "").strip()
        return f"{status_code} {reason}".strip()

    @staticmethod
    def _media_type(resp: httpx.Response) -> str:
        raw = resp.headers.get("content-type", "") if getattr(resp, "headers", None) is not None else ""
        return raw.split(";", 1)[0].strip().lower()

    def call(self, endpoint: Endpoint, request: RpcRequest) -> RpcOutcome:
        """Send ``request`` to ``endpoint`` and classify the response. Never raises for remote failures."""
        version = request.version or self.version
        request_id = self._next_id(request, version)
        body = encode_request(request, version=version, request_id=request_id)
        logger.debug(f"RPC call {request.method} id={request_id} -> {endpoint.url}")

        try:
            with httpx.Client(**self._client_kwargs()) as client:
                resp = client.request(
                    "POST",
                    endpoint.url,
                    content=body.encode("utf-8"),
                    headers=self._build_headers(endpoint),
                )
        except httpx.TimeoutException:
            self.last_status_line = None
            reason = f"timeout after {self.timeout}s: {request.method}"
            logger.warning(f"RPC {reason}")
            return RpcTransportFailed(status_line=None, reason=reason)
        except httpx.RequestError as exc:
            self.last_status_line = None
            reason = sanitize_error_message(f"network error: {request.method}: {exc}")
            logger.warning(f"RPC {reason}")
            return RpcTransportFailed(status_line=None, reason=reason)

        status_line = self._status_line(resp)
        self.last_status_line = status_line
        logger.debug(f"RPC reply {request.method} id={request_id}: {status_line}")
        return self._classify(resp, request, status_line)

    def _classify(self, resp: httpx.Response, request: RpcRequest, status_line: str) -> RpcOutcome:
        status_code = int(getattr(resp, "status_code", 0) or 0)
        content = resp.content or b""

        if 200 <= status_code < 300:
            if not content.strip():
                return RpcSucceeded(result=[], status_line=status_line, notification=True)
            try:
                return decode_response(content, service=request.is_service_call, status_line=status_line)
            except ValueError:
                return RpcTransportFailed(status_line=status_line, reason=f"non-json body for {request.method}")

        if self._media_type(resp) == JSON_CONTENT_TYPE:
            try:
                return decode_response(content, status_line=status_line)
            except ValueError:
                return RpcTransportFailed(status_line=status_line, reason=f"undecodable json error body for {request.method}")

        return RpcTransportFailed(status_line=status_line, reason=f"http error for {request.method}")
