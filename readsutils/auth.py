"""Authentication token resolution for the ReadsUtils client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
from loguru import logger

from readsutils.config.loader import read_auth_config
from readsutils.config.schema import ClientSettings
from readsutils.utils.exceptions import AuthenticationError, sanitize_error_message

LOGIN_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class AuthToken:
    """A resolved token and where it came from."""

    token: str
    source: str
    user_id: str | None = None

    def __repr__(self) -> str:
        return f"AuthToken(source={self.source!r}, user_id={self.user_id!r})"


def _extract_login_error(body: Any, fallback_text: str) -> str:
    if isinstance(body, dict):
        for key in ("error_msg", "message", "error"):
            val = body.get(key)
            if isinstance(val, str) and val.strip():
                return val.strip()
            if isinstance(val, dict) and isinstance(val.get("message"), str):
                return val["message"].strip()
    text = (fallback_text or "").strip()
    if text:
        return text[:200]
    return "login failed"


def login(
    user_id: str,
    password: str,
    *,
    auth_url: str,
    timeout: float = LOGIN_TIMEOUT_SECONDS,
    http_transport: httpx.BaseTransport | None = None,
) -> str:
    """Exchange user credentials for a token at the auth service."""
    kwargs: dict = {"timeout": timeout}
    if http_transport is not None:
        kwargs["transport"] = http_transport
    try:
        with httpx.Client(**kwargs) as client:
            resp = client.post(
                auth_url,
                data={"user_id": user_id, "password": password, "fields": "token"},
                headers={"Accept": "application/json"},
            )
    except httpx.RequestError as exc:
        raise AuthenticationError(
            f"Authentication failed: auth service unreachable: {sanitize_error_message(str(exc))}",
            source="login",
        ) from exc

    body: Any = None
    try:
        body = resp.json()
    except ValueError:
        body = None
    if resp.status_code >= 400:
        raise AuthenticationError(
            f"Authentication failed: {_extract_login_error(body, resp.text)}",
            source="login",
        )
    token = body.get("token") if isinstance(body, dict) else None
    if not isinstance(token, str) or not token.strip():
        raise AuthenticationError(
            f"Authentication failed: {_extract_login_error(body, resp.text)}",
            source="login",
        )
    return token.strip()


def resolve_token(
    *,
    token: str | None = None,
    user_id: str | None = None,
    password: str | None = None,
    settings: ClientSettings | None = None,
    http_transport: httpx.BaseTransport | None = None,
) -> AuthToken:
    """
    Find a token for the client.

    Order: explicit token, explicit user_id/password login, KB_AUTH_TOKEN,
    then the ``[authentication]`` section of the config file (token, or
    user_id/password login).

    Raises:
        AuthenticationError: nothing usable was found or login failed.
    """
    settings = settings or ClientSettings()

    if token and token.strip():
        return AuthToken(token=token.strip(), source="argument", user_id=user_id)

    if user_id and password:
        resolved = login(user_id, password, auth_url=settings.kb_auth_service_url, http_transport=http_transport)
        logger.info(f"Authenticated as {user_id} via auth service")
        return AuthToken(token=resolved, source="login", user_id=user_id)
    if user_id or password:
        raise AuthenticationError("Authentication failed: both user_id and password are required", source="argument")

    if settings.kb_auth_token and settings.kb_auth_token.strip():
        logger.debug("Using auth token from KB_AUTH_TOKEN")
        return AuthToken(token=settings.kb_auth_token.strip(), source="environment")

    section = read_auth_config(settings.kb_config_path)
    if section.get("token"):
        logger.debug(f"Using auth token from {settings.kb_config_path}")
        return AuthToken(token=section["token"], source="config_file", user_id=section.get("user_id"))
    if section.get("user_id") and section.get("password"):
        resolved = login(
            section["user_id"],
            section["password"],
            auth_url=settings.kb_auth_service_url,
            http_transport=http_transport,
        )
        logger.info(f"Authenticated as {section['user_id']} with credentials from {settings.kb_config_path}")
        return AuthToken(token=resolved, source="config_file", user_id=section["user_id"])

    raise AuthenticationError(
        "Authentication failed: no token, credentials, KB_AUTH_TOKEN or config file entry available",
    )
