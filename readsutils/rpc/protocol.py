"""JSON-RPC wire types shared by the transport and the client stub."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, Union

DEFAULT_PROTOCOL_VERSION = "1.1"
FIXED_ID_PROTOCOL_VERSION = "1.0"
JSON_CONTENT_TYPE = "application/json"
SERVICE_METHOD_PREFIX = "system."


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Service URL plus the headers sent with every call. Never mutated after construction."""

    url: str
    headers: tuple[tuple[str, str], ...] = ()
    token: str | None = None

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise ValueError("endpoint url must be a non-empty string")

    def __repr__(self) -> str:
        token = "set" if self.token else "unset"
        return f"Endpoint(url={self.url!r}, headers={list(self.headers)!r}, token={token})"


@dataclass(slots=True)
class RpcRequest:
    """Request envelope; ``id`` and ``version`` are filled in by the transport when unset."""

    method: str
    params: list[Any] = field(default_factory=list)
    id: str | None = None
    version: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.method, str) or not self.method:
            raise ValueError("rpc method must be a non-empty string")
        self.params = list(self.params)

    @property
    def is_service_call(self) -> bool:
        return self.method.startswith(SERVICE_METHOD_PREFIX)


@dataclass(frozen=True, slots=True)
class RpcErrorPayload:
    """Structured error reported by the service."""

    message: str
    code: int | None = None
    data: Any = None


@dataclass(frozen=True, slots=True)
class RpcSucceeded:
    """Call completed; ``result`` is the ordered list of return values."""

    kind: ClassVar[Literal["succeeded"]] = "succeeded"
    result: list[Any]
    status_line: str | None = None
    notification: bool = False


@dataclass(frozen=True, slots=True)
class RpcAppError:
    """Service executed the call and reported an error."""

    kind: ClassVar[Literal["app_error"]] = "app_error"
    error: RpcErrorPayload
    status_line: str | None = None


@dataclass(frozen=True, slots=True)
class RpcTransportFailed:
    """No interpretable JSON-RPC response was obtained."""

    kind: ClassVar[Literal["transport_failed"]] = "transport_failed"
    status_line: str | None
    reason: str


RpcOutcome = Union[RpcSucceeded, RpcAppError, RpcTransportFailed]
