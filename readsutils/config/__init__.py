"""Configuration module for readsutils."""

from readsutils.config.loader import build_endpoint_headers, build_rpc_tag, load_settings, read_auth_config
from readsutils.config.schema import ClientSettings

__all__ = ["ClientSettings", "load_settings", "build_rpc_tag", "build_endpoint_headers", "read_auth_config"]
