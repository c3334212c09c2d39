"""Configuration schema using Pydantic.

Every field is read from the process environment (no prefix), so the same
variables propagate through chains of invoked services.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TIMEOUT_SECONDS = 30 * 60
DEFAULT_AUTH_SERVICE_URL = "https://kbase.us/services/auth/api/legacy/KBase/Sessions/Login"


class ClientSettings(BaseSettings):
    """Environment-derived settings for a ReadsUtils client."""
    kbrpc_tag: str | None = None  # Tracing tag; generated per client when unset
    kbrpc_metadata: str | None = None
    kbrpc_error_dest: str | None = None
    cdmi_timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)  # Whole-request timeout (seconds)
    kb_auth_token: str | None = None
    kb_auth_service_url: str = DEFAULT_AUTH_SERVICE_URL
    kb_config_path: Path = Field(default_factory=lambda: Path.home() / ".kbase_config")

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )

    @field_validator("cdmi_timeout", mode="before")
    @classmethod
    def _unset_timeout_uses_default(cls, v):
        # An empty or zero CDMI_TIMEOUT means "not set".
        if not v or v == "0":
            return DEFAULT_TIMEOUT_SECONDS
        return v

    @property
    def timeout(self) -> float:
        return float(self.cdmi_timeout)
