"""
Client for the ReadsUtils service (utilities for handling reads files).

Every method validates its arguments locally, sends one JSON-RPC call and
raises one of the typed errors from ``readsutils.utils.exceptions`` on
failure. Nothing is retried.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from readsutils.auth import resolve_token
from readsutils.compat import CLIENT_VERSION, check_compatibility
from readsutils.config.loader import build_endpoint_headers, load_settings
from readsutils.config.schema import ClientSettings
from readsutils.models import (
    DownloadReadsOutput,
    DownloadReadsParams,
    ExportOutput,
    ExportParams,
    UploadReadsOutput,
    UploadReadsParams,
    ValidateFASTQOutput,
    ValidateFASTQParams,
    coerce_params,
    coerce_params_list,
)
from readsutils.rpc.protocol import (
    DEFAULT_PROTOCOL_VERSION,
    JSON_CONTENT_TYPE,
    Endpoint,
    RpcAppError,
    RpcRequest,
    RpcSucceeded,
)
from readsutils.rpc.transport import RpcTransport
from readsutils.utils.exceptions import ArgumentValidationError, HTTPError, JSONRPCError

DEFAULT_SERVICE_NAME = "ReadsUtils"

F = TypeVar("F", bound=Callable[..., Any])
M = TypeVar("M", bound=BaseModel)


def rpc_method(name: str, arity: int = 1) -> Callable[[F], F]:
    """
    Mark a client method as a remote call taking exactly ``arity`` arguments.

    A wrong count raises ArgumentValidationError before the method body runs.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(self: "ReadsUtilsClient", *args: Any, **kwargs: Any) -> Any:
            received = len(args) + len(kwargs)
            if received != arity:
                raise ArgumentValidationError(
                    f"Invalid argument count for function {name} (received {received}, expecting {arity})",
                    method_name=name,
                )
            return func(self, *args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


class ReadsUtilsClient:
    """Synchronous client; one HTTP round trip per method call."""

    def __init__(
        self,
        url: str,
        *,
        token: str | None = None,
        user_id: str | None = None,
        password: str | None = None,
        settings: ClientSettings | None = None,
        service_name: str = DEFAULT_SERVICE_NAME,
        protocol_version: str = DEFAULT_PROTOCOL_VERSION,
        content_type: str = JSON_CONTENT_TYPE,
        client_version: str = CLIENT_VERSION,
        validate_version: bool = False,
        http_transport: httpx.BaseTransport | None = None,
    ):
        if not isinstance(url, str) or not url.strip():
            raise ValueError("service url is required")
        self.settings = settings or load_settings()
        self.service_name = service_name
        self.client_version = client_version

        auth = resolve_token(
            token=token,
            user_id=user_id,
            password=password,
            settings=self.settings,
            http_transport=http_transport,
        )
        self.user_id = auth.user_id
        self.endpoint = Endpoint(
            url=url.strip(),
            headers=build_endpoint_headers(self.settings),
            token=auth.token,
        )
        self._transport = RpcTransport(
            version=protocol_version,
            content_type=content_type,
            timeout=self.settings.timeout,
            http_transport=http_transport,
        )
        if validate_version:
            self.check_compatibility()

    def __repr__(self) -> str:
        return f"ReadsUtilsClient(url={self.endpoint.url!r}, service={self.service_name!r})"

    @property
    def last_status_line(self) -> str | None:
        """Status line of the most recent HTTP reply, if any."""
        return self._transport.last_status_line

    @property
    def transport(self) -> RpcTransport:
        return self._transport

    def _call(self, method_name: str, params: list[Any]) -> RpcSucceeded:
        request = RpcRequest(method=f"{self.service_name}.{method_name}", params=params)
        outcome = self._transport.call(self.endpoint, request)
        if isinstance(outcome, RpcSucceeded):
            return outcome
        if isinstance(outcome, RpcAppError):
            logger.debug(f"{request.method} failed: code={outcome.error.code} {outcome.error.message}")
            raise JSONRPCError(
                outcome.error.message,
                code=outcome.error.code,
                method_name=method_name,
                data=outcome.error.data,
            )
        raise HTTPError(
            f"Error invoking method {method_name}: {outcome.reason}",
            status_line=outcome.status_line,
            method_name=method_name,
        )

    def _decode(self, model: type[M], value: Any, method_name: str, status_line: str | None) -> M:
        try:
            return model.model_validate(value)
        except ValidationError as e:
            raise HTTPError(
                f"Malformed result for method {method_name}: {e}",
                status_line=status_line,
                method_name=method_name,
            ) from e

    def _decode_first(self, model: type[M], outcome: RpcSucceeded, method_name: str) -> M | None:
        if not outcome.result:
            return None
        return self._decode(model, outcome.result[0], method_name, outcome.status_line)

    @rpc_method("validateFASTQ")
    def validate_fastq(self, params: list[ValidateFASTQParams | dict[str, Any]]) -> list[ValidateFASTQOutput]:
        """
        Validate FASTQ files (.fq, .fnq or .fastq), one output per input.

        Note the service alters each file in place to remove blank lines
        before validating it.
        """
        items = coerce_params_list(ValidateFASTQParams, params, "validateFASTQ")
        outcome = self._call("validateFASTQ", [[item.to_wire() for item in items]])
        result = outcome.result
        outputs = result[0] if len(result) == 1 and isinstance(result[0], list) else result
        return [self._decode(ValidateFASTQOutput, row, "validateFASTQ", outcome.status_line) for row in outputs]

    validateFASTQ = validate_fastq

    @rpc_method("upload_reads")
    def upload_reads(self, params: UploadReadsParams | dict[str, Any]) -> UploadReadsOutput | None:
        """Load a set of reads into the data stores."""
        model = coerce_params(UploadReadsParams, params, "upload_reads")
        outcome = self._call("upload_reads", [model.to_wire()])
        return self._decode_first(UploadReadsOutput, outcome, "upload_reads")

    @rpc_method("download_reads")
    def download_reads(self, params: DownloadReadsParams | dict[str, Any]) -> DownloadReadsOutput | None:
        """Download read libraries; gzip and bzip compressed reads are uncompressed."""
        model = coerce_params(DownloadReadsParams, params, "download_reads")
        outcome = self._call("download_reads", [model.to_wire()])
        return self._decode_first(DownloadReadsOutput, outcome, "download_reads")

    @rpc_method("export_reads")
    def export_reads(self, params: ExportParams | dict[str, Any]) -> ExportOutput | None:
        """Package a set of reads into a zip file stored in Shock."""
        model = coerce_params(ExportParams, params, "export_reads")
        outcome = self._call("export_reads", [model.to_wire()])
        return self._decode_first(ExportOutput, outcome, "export_reads")

    @rpc_method("status", arity=0)
    def status(self) -> Any:
        result = self._call("status", []).result
        return result[0] if result else None

    @rpc_method("version", arity=0)
    def version(self) -> str:
        outcome = self._call("version", [])
        result = outcome.result
        if not result or not isinstance(result[0], (str, int, float)):
            raise HTTPError(
                "Error invoking method version: no version string returned",
                status_line=outcome.status_line,
                method_name="version",
            )
        return str(result[0])

    def check_compatibility(self) -> list[str]:
        """Compare the server's version with this client's; see readsutils.compat."""
        return check_compatibility(
            self.version(),
            self.client_version,
            client_name=f"{self.service_name} client",
        )
