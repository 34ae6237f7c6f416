"""ask_providers.config.store
==========================

Persisted CLI configuration (``~/.ask/config.json``).

Purpose
-------
Own the on-disk JSON document: path resolution, load with legacy migration,
compact + secure save, and the small query/mutation API the CLI uses to
resolve a provider's key, model and base URL.

Schema (version 1)
------------------
``current_provider``, ``providers`` (built-ins), ``custom_providers``
(OpenAI-compatible endpoints), ``ollama_host`` and ``render_markdown``.
``current_models`` is a legacy read-only map migrated into the per-provider
``model`` fields on load and never written back.

Failure modes
-------------
- Unreadable or undecodable files raise :class:`ConfigError`.
- Invalid custom-provider edits raise :class:`ConfigError`.
- A missing file is not an error: :func:`load` returns the default config
  and ``found=False``.
"""

from __future__ import annotations

import contextlib
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .defaults import (
    BUILTIN_BASE_URLS,
    CONFIG_DIR_ENV,
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    CONFIG_PATH_ENV,
    CONFIG_TEMPLATE_FILE_NAME,
    CONFIG_VERSION,
    OLLAMA_DEFAULT_HOST,
    OPENAI_COMPAT_AUTH_HEADER,
    OPENAI_COMPAT_AUTH_PREFIX,
    OPENAI_COMPAT_CHAT_PATH,
    OPENAI_COMPAT_MODELS_PATH,
    OPENAI_DEFAULT_MODEL,
)
from .env import ENV_MAP, read_env, resolve_provider_key


class ConfigError(Exception):
    """Raised when the config file cannot be read, decoded or edited."""


def _norm(name: Optional[str]) -> str:
    return (name or "").strip().lower()


def _trim_url(url: Optional[str]) -> str:
    return (url or "").strip().rstrip("/")


class _ConfigModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class ProviderConfig(_ConfigModel):
    """Per built-in provider defaults and credentials."""

    api_key: str = ""
    model: str = ""
    base_url: str = ""
    api_key_env: str = ""


class CustomProviderConfig(_ConfigModel):
    """A user-defined OpenAI-compatible provider."""

    base_url: str = ""
    api_key: str = ""
    model: str = ""
    api_key_env: str = ""
    models_path: str = ""
    chat_path: str = ""
    auth_header: str = ""
    auth_prefix: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)


def builtin_provider_names() -> List[str]:
    """Return the built-in provider names sorted alphabetically."""
    return sorted(BUILTIN_BASE_URLS)


def is_builtin_provider(name: str) -> bool:
    return _norm(name) in BUILTIN_BASE_URLS


def _builtin_scaffold() -> Dict[str, ProviderConfig]:
    providers: Dict[str, ProviderConfig] = {}
    for name in builtin_provider_names():
        entry = ProviderConfig(api_key_env=ENV_MAP.get(name, ""))
        if name == "openai":
            entry.model = OPENAI_DEFAULT_MODEL
        if name == "ollama":
            entry.base_url = _trim_url(OLLAMA_DEFAULT_HOST)
        providers[name] = entry
    return providers


class AppConfig(_ConfigModel):
    """The persisted ``ask`` configuration document."""

    version: int = CONFIG_VERSION
    current_provider: str = ""
    current_models: Dict[str, str] = Field(default_factory=dict)
    providers: Dict[str, ProviderConfig] = Field(default_factory=dict)
    custom_providers: Dict[str, CustomProviderConfig] = Field(default_factory=dict)
    ollama_host: str = ""
    render_markdown: bool = True

    # ---- normalization ----
    def normalize(self) -> None:
        """Lower-case names, trim hosts and migrate legacy ``current_models``."""
        if not self.version:
            self.version = CONFIG_VERSION
        self.providers = {_norm(k): v for k, v in self.providers.items() if _norm(k)}
        self.custom_providers = {_norm(k): v for k, v in self.custom_providers.items() if _norm(k)}
        for provider, model in self.current_models.items():
            provider, model = _norm(provider), (model or "").strip()
            if not provider or not model:
                continue
            custom = self.custom_providers.get(provider)
            if custom is not None:
                if not custom.model.strip():
                    custom.model = model
                continue
            entry = self.providers.setdefault(provider, ProviderConfig())
            if not entry.model.strip():
                entry.model = model
        self.current_models = {}
        self.ollama_host = _trim_url(self.ollama_host)
        self.current_provider = _norm(self.current_provider)

    # ---- queries ----
    def get_model(self, provider: str) -> str:
        provider = _norm(provider)
        if not provider:
            return ""
        if provider in self.custom_providers:
            return self.custom_providers[provider].model.strip()
        entry = self.providers.get(provider)
        return entry.model.strip() if entry else ""

    def provider_exists(self, name: str) -> bool:
        name = _norm(name)
        return is_builtin_provider(name) or name in self.custom_providers

    def provider_names(self) -> List[str]:
        """Return built-in and custom provider names, sorted."""
        return sorted(set(builtin_provider_names()) | set(self.custom_providers))

    def resolve_base_url(self, provider: str) -> str:
        """Return the effective base URL for ``provider`` or ``""``.

        For ollama ``ollama_host`` wins over the stored base URL; built-ins
        fall back to their default endpoint.
        """
        provider = _norm(provider)
        if not provider:
            return ""
        if provider in self.custom_providers:
            return _trim_url(self.custom_providers[provider].base_url)
        if provider == "ollama" and self.ollama_host.strip():
            return _trim_url(self.ollama_host)
        entry = self.providers.get(provider)
        if entry and entry.base_url.strip():
            return _trim_url(entry.base_url)
        return _trim_url(BUILTIN_BASE_URLS.get(provider, ""))

    def resolve_api_key(self, provider: str) -> str:
        """Return the effective API key, preferring env vars over stored keys.

        Order for built-ins: the configured ``api_key_env``, then the
        provider's standard variables, then the stored key. Custom providers
        only consult their own ``api_key_env`` and stored key.
        """
        provider = _norm(provider)
        if not provider:
            return ""
        custom = self.custom_providers.get(provider)
        if custom is not None:
            return read_env(custom.api_key_env) or custom.api_key.strip()
        entry = self.providers.get(provider) or ProviderConfig()
        value = read_env(entry.api_key_env)
        if value:
            return value
        value, _ = resolve_provider_key(provider)
        if value:
            return value
        return entry.api_key.strip()

    def api_key_env(self, provider: str) -> str:
        provider = _norm(provider)
        custom = self.custom_providers.get(provider)
        if custom is not None:
            return custom.api_key_env.strip()
        entry = self.providers.get(provider)
        return entry.api_key_env.strip() if entry else ""

    def stored_api_key(self, provider: str) -> str:
        provider = _norm(provider)
        custom = self.custom_providers.get(provider)
        if custom is not None:
            return custom.api_key.strip()
        entry = self.providers.get(provider)
        return entry.api_key.strip() if entry else ""

    # ---- mutations ----
    def set_model(self, provider: str, model: str) -> None:
        provider = _norm(provider)
        self.normalize()
        custom = self.custom_providers.get(provider)
        if custom is not None:
            custom.model = model.strip()
            return
        self.providers.setdefault(provider, ProviderConfig()).model = model.strip()

    def set_api_key(self, provider: str, key: str) -> None:
        provider = _norm(provider)
        self.normalize()
        custom = self.custom_providers.get(provider)
        if custom is not None:
            custom.api_key = key.strip()
            return
        self.providers.setdefault(provider, ProviderConfig()).api_key = key.strip()

    def set_api_key_env(self, provider: str, env_var: str) -> None:
        provider = _norm(provider)
        self.normalize()
        custom = self.custom_providers.get(provider)
        if custom is not None:
            custom.api_key_env = env_var.strip()
            return
        self.providers.setdefault(provider, ProviderConfig()).api_key_env = env_var.strip()

    def set_base_url(self, provider: str, base_url: str) -> None:
        provider = _norm(provider)
        base_url = _trim_url(base_url)
        self.normalize()
        custom = self.custom_providers.get(provider)
        if custom is not None:
            custom.base_url = base_url
            return
        if provider == "ollama":
            self.ollama_host = base_url
        self.providers.setdefault(provider, ProviderConfig()).base_url = base_url

    def set_current_provider(self, provider: str) -> None:
        self.normalize()
        self.current_provider = _norm(provider)

    def add_custom_provider(self, name: str, provider: CustomProviderConfig) -> None:
        """Add or replace a custom OpenAI-compatible provider.

        Blank paths, auth header and an empty auth prefix are filled with the
        OpenAI defaults before storing.
        """
        name = _norm(name)
        if not name:
            raise ConfigError("provider name is required")
        if is_builtin_provider(name):
            raise ConfigError(f"'{name}' is a built-in provider")
        if not provider.base_url.strip():
            raise ConfigError("base_url is required")
        stored = provider.model_copy(deep=True)
        stored.base_url = _trim_url(stored.base_url)
        if not stored.models_path.strip():
            stored.models_path = OPENAI_COMPAT_MODELS_PATH
        if not stored.chat_path.strip():
            stored.chat_path = OPENAI_COMPAT_CHAT_PATH
        if not stored.auth_header.strip():
            stored.auth_header = OPENAI_COMPAT_AUTH_HEADER
        if stored.auth_prefix == "":
            stored.auth_prefix = OPENAI_COMPAT_AUTH_PREFIX
        self.normalize()
        self.custom_providers[name] = stored

    def remove_custom_provider(self, name: str) -> None:
        name = _norm(name)
        if not name:
            raise ConfigError("provider name is required")
        if is_builtin_provider(name):
            raise ConfigError("cannot remove built-in provider")
        if name not in self.custom_providers:
            raise ConfigError(f"provider '{name}' not found")
        del self.custom_providers[name]
        if self.current_provider == name:
            self.current_provider = ""

    # ---- persistence shape ----
    def to_saved_dict(self) -> Dict[str, Any]:
        """Return the compacted JSON document written by :func:`save`.

        Empty provider entries, custom providers without a base URL, default
        wire settings, blank headers and a default ``ollama_host`` are all
        omitted.
        """
        doc: Dict[str, Any] = {"version": self.version, "current_provider": self.current_provider}

        providers: Dict[str, Dict[str, str]] = {}
        for raw_name in sorted(self.providers):
            name = _norm(raw_name)
            raw = self.providers[raw_name]
            entry = {
                "api_key": raw.api_key.strip(),
                "model": raw.model.strip(),
                "base_url": _trim_url(raw.base_url),
                "api_key_env": raw.api_key_env.strip(),
            }
            if not name or not any(entry.values()):
                continue
            providers[name] = _omit_empty(entry, keep=("api_key", "model"))
        if providers:
            doc["providers"] = providers

        customs: Dict[str, Dict[str, Any]] = {}
        for raw_name in sorted(self.custom_providers):
            name = _norm(raw_name)
            raw = self.custom_providers[raw_name]
            base_url = _trim_url(raw.base_url)
            if not name or not base_url:
                continue
            entry: Dict[str, Any] = {
                "base_url": base_url,
                "api_key": raw.api_key.strip(),
                "model": raw.model.strip(),
                "api_key_env": raw.api_key_env.strip(),
                "models_path": _unless(raw.models_path.strip(), OPENAI_COMPAT_MODELS_PATH),
                "chat_path": _unless(raw.chat_path.strip(), OPENAI_COMPAT_CHAT_PATH),
                "auth_header": _unless(raw.auth_header.strip(), OPENAI_COMPAT_AUTH_HEADER),
                "auth_prefix": _unless(raw.auth_prefix, OPENAI_COMPAT_AUTH_PREFIX),
            }
            entry = _omit_empty(entry, keep=("base_url", "api_key", "model"))
            headers = {k.strip(): v.strip() for k, v in raw.headers.items() if k.strip() and v.strip()}
            if headers:
                entry["headers"] = dict(sorted(headers.items()))
            customs[name] = entry
        if customs:
            doc["custom_providers"] = customs

        ollama_host = _trim_url(self.ollama_host)
        if ollama_host and ollama_host != _trim_url(OLLAMA_DEFAULT_HOST):
            doc["ollama_host"] = ollama_host
        doc["render_markdown"] = self.render_markdown
        return doc


def _unless(value: str, default: str) -> str:
    return "" if value == default else value


def _omit_empty(entry: Dict[str, Any], keep: Tuple[str, ...]) -> Dict[str, Any]:
    return {k: v for k, v in entry.items() if k in keep or v}


# ---- paths ----
def default_dir() -> Path:
    """Return ``$ASK_CONFIG_DIR`` or ``~/.ask``."""
    custom = os.environ.get(CONFIG_DIR_ENV, "").strip()
    if custom:
        return Path(custom)
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise ConfigError(f"resolve user home directory: {exc}") from exc
    return home / CONFIG_DIR_NAME


def default_path() -> Path:
    return default_dir() / CONFIG_FILE_NAME


def resolve_path(override: Optional[str] = None) -> Path:
    """Resolve the config file path: explicit override, ``$ASK_CONFIG``, default."""
    if override and override.strip():
        return Path(override.strip())
    env_path = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if env_path:
        return Path(env_path)
    return default_path()


def template_path_for(config_path: Path) -> Path:
    """Return ``config.template.json`` beside ``config_path``."""
    return Path(config_path).parent / CONFIG_TEMPLATE_FILE_NAME


# ---- construction ----
def default_config() -> AppConfig:
    cfg = AppConfig(providers=_builtin_scaffold())
    cfg.normalize()
    return cfg


def template_config() -> AppConfig:
    """Return the starter template: defaults plus one example custom provider."""
    cfg = default_config()
    cfg.custom_providers = {
        "myproxy": CustomProviderConfig(
            base_url="https://llm.example.com/v1",
            api_key_env="MYPROXY_API_KEY",
            headers={"X-Client-Name": "ask"},
        )
    }
    return cfg


# ---- I/O ----
def load(path: Path) -> Tuple[AppConfig, bool]:
    """Load the config at ``path``.

    Returns
    -------
    tuple[AppConfig, bool]
        The normalized config and whether the file existed. A missing file
        yields :func:`default_config` and ``False``.

    Raises
    ------
    ConfigError
        If the file cannot be read or is not a valid config document.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return default_config(), False
    except OSError as exc:
        raise ConfigError(f"read config: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"decode config: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("decode config: top-level value must be an object")

    # file entries replace scaffold entries of the same name
    base = default_config().model_dump()
    file_providers = data.get("providers") or {}
    if not isinstance(file_providers, dict):
        raise ConfigError("decode config: providers must be an object")
    providers = base["providers"]
    providers.update(file_providers)
    merged = {**base, **{k: v for k, v in data.items() if v is not None}, "providers": providers}
    try:
        cfg = AppConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"decode config: {exc}") from exc
    cfg.normalize()
    return cfg, True


def save(path: Path, cfg: AppConfig) -> None:
    """Normalize, compact and write ``cfg`` to ``path`` (dir 0700, file 0600)."""
    cfg.normalize()
    _write_secure_json(Path(path), cfg.to_saved_dict())


def ensure_template(path: Path) -> None:
    """Create the template file at ``path`` unless it already exists."""
    path = Path(path)
    if not str(path).strip():
        raise ConfigError("template path is empty")
    if path.exists():
        return
    _write_secure_json(path, template_config().to_saved_dict())


def _write_secure_json(path: Path, payload: Dict[str, Any]) -> None:
    directory = path.parent
    try:
        directory.mkdir(mode=0o700, parents=True, exist_ok=True)
        os.chmod(directory, 0o700)
    except OSError as exc:
        raise ConfigError(f"create config directory: {exc}") from exc

    encoded = json.dumps(payload, indent=2)
    tmp = path.with_name(path.name + ".tmp")
    try:
        fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(encoded)
        os.replace(tmp, path)
        os.chmod(path, 0o600)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise ConfigError(f"write config: {exc}") from exc


__all__ = [
    "ConfigError",
    "ProviderConfig",
    "CustomProviderConfig",
    "AppConfig",
    "builtin_provider_names",
    "is_builtin_provider",
    "default_dir",
    "default_path",
    "resolve_path",
    "template_path_for",
    "default_config",
    "template_config",
    "load",
    "save",
    "ensure_template",
]
