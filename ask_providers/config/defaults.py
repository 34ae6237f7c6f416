"""ask_providers.config.defaults
=============================

Central place for small, stable default values used by the adapters, the
config store and the CLI. Only plain constants live here; nothing imports
from other packages to avoid circular dependencies.
"""

from __future__ import annotations

# ---- Application ----
APP_NAME = "ask"
APP_VERSION = "0.2.2"

# ---- Config file layout ----
CONFIG_DIR_NAME = ".ask"
CONFIG_FILE_NAME = "config.json"
CONFIG_TEMPLATE_FILE_NAME = "config.template.json"
CONFIG_VERSION = 1
CONFIG_PATH_ENV = "ASK_CONFIG"
CONFIG_DIR_ENV = "ASK_CONFIG_DIR"

# ---- CLI defaults ----
# Seconds allowed for one `ask` round trip (including the format fallback).
ASK_DEFAULT_TIMEOUT_SECONDS = 90.0
# Fallback terminal width for markdown rendering.
RENDER_DEFAULT_WIDTH = 100
# Entries shown per page by `models select`.
MODEL_SELECT_PAGE_LIMIT = 40
# Substrings preferred when auto-picking a model, in priority order.
PREFERRED_MODEL_TOKENS = ("mini", "flash", "haiku", "small", "8b")

# ---- Provider-specific defaults ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_DEFAULT_MODEL = "gpt-5-nano"

OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"

ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com"
ANTHROPIC_API_VERSION = "2023-06-01"
ANTHROPIC_MAX_TOKENS = 2048

GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

OLLAMA_DEFAULT_HOST = "http://127.0.0.1:11434"

# OpenAI-compatible wire defaults (custom providers inherit these).
OPENAI_COMPAT_MODELS_PATH = "/models"
OPENAI_COMPAT_CHAT_PATH = "/chat/completions"
OPENAI_COMPAT_AUTH_HEADER = "Authorization"
OPENAI_COMPAT_AUTH_PREFIX = "Bearer "

BUILTIN_BASE_URLS = {
    "anthropic": ANTHROPIC_DEFAULT_BASE_URL,
    "gemini": GEMINI_DEFAULT_BASE_URL,
    "ollama": OLLAMA_DEFAULT_HOST,
    "openai": OPENAI_DEFAULT_BASE_URL,
    "openrouter": OPENROUTER_DEFAULT_BASE_URL,
}


__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "CONFIG_DIR_NAME",
    "CONFIG_FILE_NAME",
    "CONFIG_TEMPLATE_FILE_NAME",
    "CONFIG_VERSION",
    "CONFIG_PATH_ENV",
    "CONFIG_DIR_ENV",
    "ASK_DEFAULT_TIMEOUT_SECONDS",
    "RENDER_DEFAULT_WIDTH",
    "MODEL_SELECT_PAGE_LIMIT",
    "PREFERRED_MODEL_TOKENS",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_MAX_TOKENS",
    "GEMINI_DEFAULT_BASE_URL",
    "OLLAMA_DEFAULT_HOST",
    "OPENAI_COMPAT_MODELS_PATH",
    "OPENAI_COMPAT_CHAT_PATH",
    "OPENAI_COMPAT_AUTH_HEADER",
    "OPENAI_COMPAT_AUTH_PREFIX",
    "BUILTIN_BASE_URLS",
]
