"""Configuration package: constants, env var mapping and the persisted store."""

from .defaults import APP_NAME, APP_VERSION
from .env import ENV_MAP, get_env_var_candidates, resolve_provider_key
from .store import (
    AppConfig,
    ConfigError,
    CustomProviderConfig,
    ProviderConfig,
    ensure_template,
    load,
    resolve_path,
    save,
    template_path_for,
)

__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "ENV_MAP",
    "get_env_var_candidates",
    "resolve_provider_key",
    "AppConfig",
    "ConfigError",
    "CustomProviderConfig",
    "ProviderConfig",
    "ensure_template",
    "load",
    "resolve_path",
    "save",
    "template_path_for",
]
