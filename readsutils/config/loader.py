"""Configuration loading utilities."""

import configparser
import os
import socket
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from readsutils.config.schema import ClientSettings

AUTH_SECTION = "authentication"

TAG_HEADER = "Kbrpc-Tag"
METADATA_HEADER = "Kbrpc-Metadata"
ERROR_DEST_HEADER = "Kbrpc-Errordest"


def load_settings(**overrides: Any) -> ClientSettings:
    """
    Load client settings from the environment.

    Args:
        overrides: Field values that take precedence over the environment.
            ``None`` values are ignored.

    Returns:
        Validated settings object.
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    try:
        return ClientSettings(**values)
    except ValueError as e:
        raise ValueError(f"Invalid client settings: {e}") from e


def get_hostname() -> str:
    return socket.gethostname() or "unknown-host"


def build_rpc_tag(now: datetime | None = None) -> str:
    """Build a tracing tag identifying the invoking script, host and process."""
    ts = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    stamp = ts.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    script = sys.argv[0] if sys.argv and sys.argv[0] else "python"
    return f"C:{script}:{get_hostname()}:{os.getpid()}:{stamp}"


def build_endpoint_headers(settings: ClientSettings) -> tuple[tuple[str, str], ...]:
    """Fixed headers sent with every request: tag always, metadata and error destination when set."""
    headers: list[tuple[str, str]] = [(TAG_HEADER, settings.kbrpc_tag or build_rpc_tag())]
    if settings.kbrpc_metadata:
        headers.append((METADATA_HEADER, settings.kbrpc_metadata))
    if settings.kbrpc_error_dest:
        headers.append((ERROR_DEST_HEADER, settings.kbrpc_error_dest))
    return tuple(headers)


def read_auth_config(path: Path) -> dict[str, str]:
    """
    Read the ``[authentication]`` section of an INI-style config file.

    Missing files and missing sections yield an empty dict; empty values are dropped.
    """
    if not path.exists():
        return {}
    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read(path, encoding="utf-8")
    except configparser.Error as e:
        raise ValueError(
            f"Failed to read auth config from {path}: {e}. "
            "Fix the file or remove it."
        ) from e
    if not parser.has_section(AUTH_SECTION):
        return {}
    return {
        key: value.strip()
        for key, value in parser.items(AUTH_SECTION)
        if isinstance(value, str) and value.strip()
    }
