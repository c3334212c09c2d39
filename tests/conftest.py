"""Pytest hooks and fixtures."""

import json
import os
from typing import Any, Callable

import httpx
import pytest

_CLIENT_ENV_VARS = (
    "KBRPC_TAG",
    "KBRPC_METADATA",
    "KBRPC_ERROR_DEST",
    "CDMI_TIMEOUT",
    "KB_AUTH_TOKEN",
    "KB_AUTH_SERVICE_URL",
)


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "live_service: calls a real ReadsUtils deployment (skipped in CI)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip live_service tests when running in CI (no deployment reachable)."""
    if os.environ.get("CI") != "true":
        return
    skip = pytest.mark.skip(reason="Requires a live ReadsUtils deployment (skipped in CI)")
    for item in items:
        if "live_service" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep the developer's environment and ~/.kbase_config out of the tests."""
    for key in _CLIENT_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("KB_CONFIG_PATH", str(tmp_path / "kbase_config"))


class FakeService:
    """Queue of canned replies served through httpx.MockTransport; records every request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._replies: list[httpx.Response | Callable[[httpx.Request], httpx.Response]] = []
        self.transport = httpx.MockTransport(self._handle)

    def reply(
        self,
        status_code: int = 200,
        *,
        json_body: Any = None,
        text: str | None = None,
        content_type: str | None = None,
    ) -> "FakeService":
        headers = {"content-type": content_type} if content_type else None
        if json_body is not None:
            body = json.dumps(json_body).encode("utf-8")
            headers = headers or {"content-type": "application/json"}
        else:
            body = (text or "").encode("utf-8")
        self._replies.append(httpx.Response(status_code, content=body, headers=headers))
        return self

    def reply_with(self, handler: Callable[[httpx.Request], httpx.Response]) -> "FakeService":
        self._replies.append(handler)
        return self

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._replies:
            return httpx.Response(200, json={"result": []})
        reply = self._replies.pop(0)
        if callable(reply):
            return reply(request)
        return reply

    def payloads(self) -> list[dict[str, Any]]:
        return [json.loads(req.content) for req in self.requests]


@pytest.fixture
def fake_service() -> FakeService:
    return FakeService()
