"""Client/server semantic version compatibility check."""

from __future__ import annotations

import re

from loguru import logger

from readsutils.utils.exceptions import ClientServerIncompatible

CLIENT_VERSION = "0.1.0"

NEW_CLIENT_AVAILABLE = "New client version available"
API_SUBJECT_TO_CHANGE = "API subject to change"

_LEADING_DIGITS = re.compile(r"\d*")


def parse_version(version: str) -> tuple[int, int]:
    """
    Return (major, minor) of a "MAJOR.MINOR[.PATCH...]" string.

    Only the leading digits of each part count, so "1.3-dev" is (1, 3); a
    missing or non-numeric minor counts as 0. A major with no leading digits
    raises ValueError.
    """
    parts = str(version).strip().split(".")
    major = _LEADING_DIGITS.match(parts[0]).group()
    if not major:
        raise ValueError(f"not a semantic version: {version!r}")
    minor = _LEADING_DIGITS.match(parts[1]).group() if len(parts) > 1 else ""
    return int(major), int(minor or 0)


def check_compatibility(server_version: str, client_version: str, *, client_name: str = "readsutils") -> list[str]:
    """
    Compare server and client versions.

    Returns:
        Non-fatal notices (also logged as warnings).

    Raises:
        ClientServerIncompatible: a version is unparseable, majors differ, or the server minor is older than the client's.
    """
    try:
        s_major, s_minor = parse_version(server_version)
        c_major, c_minor = parse_version(client_version)
    except ValueError as e:
        raise ClientServerIncompatible(
            f"Cannot compare versions: {e}",
            server_version=server_version,
            client_version=client_version,
        ) from e
    if s_major != c_major:
        raise ClientServerIncompatible(
            "Major version numbers differ.",
            server_version=server_version,
            client_version=client_version,
        )
    if s_minor < c_minor:
        raise ClientServerIncompatible(
            "Client minor version greater than Server minor version.",
            server_version=server_version,
            client_version=client_version,
        )
    notices: list[str] = []
    if s_minor > c_minor:
        notices.append(f"{NEW_CLIENT_AVAILABLE} for {client_name} (server {server_version}, client {client_version})")
    if s_major == 0:
        notices.append(f"{client_name} version is {server_version}. {API_SUBJECT_TO_CHANGE}.")
    for notice in notices:
        logger.warning(notice)
    return notices
